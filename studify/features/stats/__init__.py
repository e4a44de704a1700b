"""Stats feature module"""

from studify.features.stats.api import router
from studify.features.stats.domain import UserStats
from studify.features.stats.service import StatsService

__all__ = [
    "router",
    "UserStats",
    "StatsService",
]
