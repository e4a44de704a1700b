# API module exports
from studify.api import health
from studify.api.base import api_router

__all__ = ["health", "api_router"]
