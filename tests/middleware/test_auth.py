"""Tests for Supabase JWT verification with a locally generated ES256 key."""

from __future__ import annotations

import time

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from fastapi import HTTPException
from jose import jwk, jwt

from studify.middleware import auth


SUPABASE_URL = "https://studify-test.supabase.co"
KID = "test-key-1"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def signing_key():
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()

    public_jwk = jwk.construct(public_pem, "ES256").to_dict()
    public_jwk.update({"kid": KID, "alg": "ES256"})
    return private_pem, {"keys": [public_jwk]}


@pytest.fixture(autouse=True)
def supabase_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", SUPABASE_URL)
    auth.clear_jwks_cache()
    yield
    auth.clear_jwks_cache()


@pytest.fixture()
def cached_jwks(monkeypatch, signing_key):
    _, jwks = signing_key
    monkeypatch.setattr(auth, "_jwks_cache", jwks)
    monkeypatch.setattr(auth, "_jwks_cache_time", time.time())
    return jwks


def _token(private_pem: str, kid: str = KID, **claims) -> str:
    payload = {
        "sub": "user-1",
        "aud": "authenticated",
        "iss": f"{SUPABASE_URL}/auth/v1",
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, private_pem, algorithm="ES256", headers={"kid": kid})


# ---------------------------------------------------------------------------
# extract_bearer_token
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer", "Bearer   "])
def test_malformed_authorization_header_is_unauthorized(header):
    with pytest.raises(HTTPException) as exc:
        auth.extract_bearer_token(header)

    assert exc.value.status_code == 401


def test_bearer_scheme_is_case_insensitive():
    assert auth.extract_bearer_token("bearer abc.def.ghi") == "abc.def.ghi"


# ---------------------------------------------------------------------------
# verify_token / get_current_user_id
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_valid_token_yields_user_id(signing_key, cached_jwks):
    private_pem, _ = signing_key

    user_id = await auth.get_current_user_id(f"Bearer {_token(private_pem)}")

    assert user_id == "user-1"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(signing_key, cached_jwks):
    private_pem, _ = signing_key
    token = _token(private_pem, exp=int(time.time()) - 60)

    with pytest.raises(HTTPException) as exc:
        await auth.verify_token(token)

    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid or expired token"


@pytest.mark.asyncio
async def test_wrong_audience_is_rejected(signing_key, cached_jwks):
    private_pem, _ = signing_key

    with pytest.raises(HTTPException) as exc:
        await auth.verify_token(_token(private_pem, aud="anon"))

    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_unknown_key_id_is_rejected(signing_key, cached_jwks):
    private_pem, _ = signing_key

    with pytest.raises(HTTPException) as exc:
        await auth.verify_token(_token(private_pem, kid="rotated-away"))

    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(cached_jwks):
    with pytest.raises(HTTPException) as exc:
        await auth.verify_token("not-a-jwt")

    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_token_without_subject_is_rejected(signing_key, cached_jwks):
    private_pem, _ = signing_key
    token = _token(private_pem)
    payload_without_sub = _token(private_pem, sub="")

    assert await auth.get_current_user_id(f"Bearer {token}") == "user-1"
    with pytest.raises(HTTPException) as exc:
        await auth.get_current_user_id(f"Bearer {payload_without_sub}")

    assert exc.value.status_code == 401


# ---------------------------------------------------------------------------
# get_jwks caching
# ---------------------------------------------------------------------------


def _patch_http(monkeypatch, handler):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        auth.httpx,
        "AsyncClient",
        lambda: real_client(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_jwks_is_fetched_once_and_cached(monkeypatch, signing_key):
    _, jwks = signing_key
    requests = []

    def handler(request):
        requests.append(str(request.url))
        return httpx.Response(200, json=jwks)

    _patch_http(monkeypatch, handler)

    assert await auth.get_jwks() == jwks
    assert await auth.get_jwks() == jwks
    assert requests == [f"{SUPABASE_URL}/auth/v1/.well-known/jwks.json"]


@pytest.mark.asyncio
async def test_expired_cache_is_used_when_refresh_fails(monkeypatch, signing_key):
    _, jwks = signing_key
    monkeypatch.setattr(auth, "_jwks_cache", jwks)
    monkeypatch.setattr(auth, "_jwks_cache_time", time.time() - auth.JWKS_CACHE_DURATION - 1)
    _patch_http(monkeypatch, lambda request: httpx.Response(503))

    assert await auth.get_jwks() == jwks


@pytest.mark.asyncio
async def test_fetch_failure_without_cache_is_server_error(monkeypatch):
    _patch_http(monkeypatch, lambda request: httpx.Response(503))

    with pytest.raises(HTTPException) as exc:
        await auth.get_jwks()

    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_missing_supabase_url_is_server_error(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL")

    with pytest.raises(HTTPException) as exc:
        await auth.get_jwks()

    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_non_json_jwks_response_without_cache_is_server_error(monkeypatch):
    _patch_http(monkeypatch, lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(HTTPException) as exc:
        await auth.get_jwks()

    assert exc.value.status_code == 500
    assert auth._jwks_cache is None


@pytest.mark.asyncio
async def test_unusable_signing_key_is_unauthorized(monkeypatch, signing_key):
    private_pem, jwks = signing_key
    broken_key = dict(jwks["keys"][0], alg="XX999")
    monkeypatch.setattr(auth, "_jwks_cache", {"keys": [broken_key]})
    monkeypatch.setattr(auth, "_jwks_cache_time", time.time())

    with pytest.raises(HTTPException) as exc:
        await auth.verify_token(_token(private_pem))

    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid or expired token"
