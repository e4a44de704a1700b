import logging
from typing import Optional

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from studify import config  # noqa: E402
from studify.api.base import api_router  # noqa: E402
from studify.middleware.rate_limit import FixedWindowRateLimiter, RateLimitMiddleware  # noqa: E402
from studify.middleware.security_headers import SecurityHeadersMiddleware  # noqa: E402


def create_app(limiter: Optional[FixedWindowRateLimiter] = None) -> FastAPI:
    """Instantiate the FastAPI application with its own rate limiter"""
    app = FastAPI(
        title="Studify Backend API",
        description="Backend API for Studify - study statistics for the student productivity app",
        version="1.0.0"
    )

    # Middleware added last runs first: CORS, then security headers, then rate limiting.
    # Security headers wrap the limiter so 429 responses carry them too.
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter or FixedWindowRateLimiter(
            max_requests=config.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        ),
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all API routes
    app.include_router(api_router)
    return app


app = create_app()
