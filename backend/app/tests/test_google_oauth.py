"""
Tests for the Google OAuth client against a mocked transport.
"""
import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from app.services.google_oauth import (
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    GoogleOAuthClient,
    IdentityProviderError,
)


def _client(handler) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        client_id="cid",
        client_secret="secret",
        redirect_uri="http://localhost:8000/auth/google/callback",
        transport=httpx.MockTransport(handler),
    )


def test_fetch_profile():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == GOOGLE_TOKEN_URL:
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"access_token": "tok", "id_token": "x"})
        if str(request.url) == GOOGLE_USERINFO_URL:
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json={"sub": "123", "name": "Dana", "email": "dana@example.com"})
        return httpx.Response(404)

    profile = asyncio.run(_client(handler).fetch_profile("the-code"))

    assert profile.sub == "123"
    assert profile.name == "Dana"
    assert profile.email == "dana@example.com"
    assert seen["form"]["code"] == ["the-code"]
    assert seen["form"]["grant_type"] == ["authorization_code"]
    assert seen["auth"] == "Bearer tok"


def test_token_exchange_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    with pytest.raises(IdentityProviderError):
        asyncio.run(_client(handler).fetch_profile("stale-code"))


def test_missing_access_token():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    with pytest.raises(IdentityProviderError):
        asyncio.run(_client(handler).fetch_profile("code"))


def test_userinfo_without_subject():
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == GOOGLE_TOKEN_URL:
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(200, json={"name": "No Sub"})

    with pytest.raises(IdentityProviderError):
        asyncio.run(_client(handler).fetch_profile("code"))


def test_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(IdentityProviderError):
        asyncio.run(_client(handler).fetch_profile("code"))


def test_authorization_url():
    url = _client(lambda request: httpx.Response(200)).authorization_url("st")
    query = parse_qs(url.split("?", 1)[1])
    assert query["scope"] == ["profile email"]
    assert query["state"] == ["st"]
    assert query["redirect_uri"] == ["http://localhost:8000/auth/google/callback"]
