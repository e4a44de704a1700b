"""
Supabase JWT authentication

Verifies the access token the web client receives from Supabase Auth
against the project's public JWKS, and exposes the authenticated
user ID as a FastAPI dependency.
"""
import os
import time
import logging
from typing import Optional
from fastapi import HTTPException, Header
from jose import jwt, jwk
from jose.exceptions import JOSEError
import httpx

logger = logging.getLogger(__name__)

_jwks_cache: Optional[dict] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 60 * 60  # 1 hour

JWT_AUDIENCE = "authenticated"
SUPPORTED_ALGORITHMS = ["ES256", "RS256"]


def get_supabase_url() -> str:
    """Get Supabase URL from environment"""
    url = os.getenv("SUPABASE_URL")
    if not url:
        raise ValueError("SUPABASE_URL must be set")
    return url.rstrip("/")


def get_jwks_url() -> str:
    return f"{get_supabase_url()}/auth/v1/.well-known/jwks.json"


def get_jwt_issuer() -> str:
    return f"{get_supabase_url()}/auth/v1"


def clear_jwks_cache() -> None:
    """Forget cached signing keys"""
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = None
    _jwks_cache_time = 0


async def get_jwks() -> dict:
    """
    Fetch and cache the Supabase JWKS.

    A cached copy younger than JWKS_CACHE_DURATION is returned as is. If a
    refresh fails, an expired copy is still preferred over rejecting every
    request.
    """
    global _jwks_cache, _jwks_cache_time

    now = time.time()

    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_DURATION:
        return _jwks_cache

    try:
        jwks_url = get_jwks_url()
    except ValueError as e:
        logger.error(f"Authentication is not configured: {e}")
        raise HTTPException(status_code=500, detail="Authentication is not properly configured")

    logger.info(f"Fetching JWKS from Supabase: {jwks_url}")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks = response.json()
            if not isinstance(jwks, dict):
                raise ValueError("JWKS response is not a JSON object")
            _jwks_cache = jwks
            _jwks_cache_time = now
            logger.info(f"JWKS cached with {len(_jwks_cache.get('keys', []))} keys")
            return _jwks_cache
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to fetch JWKS: {e}")
        if _jwks_cache:
            logger.warning("Using expired JWKS cache due to fetch failure")
            return _jwks_cache
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch authentication keys"
        )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token of a 'Bearer <token>' header or raise 401"""
    if not authorization:
        raise HTTPException(status_code=401, detail="Unauthorized")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")

    return token.strip()


async def verify_token(token: str) -> dict:
    """
    Verify a Supabase access token and return its payload.

    Raises:
        HTTPException: 401 for expired, malformed or unknown-key tokens
    """
    jwks = await get_jwks()

    try:
        unverified_header = jwt.get_unverified_header(token)
        kid = unverified_header.get("kid")

        if not kid:
            raise HTTPException(status_code=401, detail="Token missing key ID (kid)")

        key_data = next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)
        if not key_data:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        return jwt.decode(
            token,
            jwk.construct(key_data),
            algorithms=SUPPORTED_ALGORITHMS,
            audience=JWT_AUDIENCE,
            issuer=get_jwt_issuer(),
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    except jwt.JWTClaimsError as e:
        logger.warning(f"JWT claims validation failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    except jwt.JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    except JOSEError as e:
        # Signing key in the JWKS could not be used (bad or unsupported JWK)
        logger.error(f"Token verification error: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")


async def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> str:
    """
    FastAPI dependency: verify the Authorization header and return the user ID
    (the token's ``sub`` claim).
    """
    token = extract_bearer_token(authorization)
    payload = await verify_token(token)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: no user ID")

    return user_id
