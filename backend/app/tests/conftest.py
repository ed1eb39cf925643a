"""
Shared fixtures: in-memory store, fake identity provider, and test client.
"""
import os

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["CLIENT_URL"] = "http://client.test/"

from urllib.parse import urlparse, parse_qs

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.db.session import SessionLocal
from app.models.user import User
from app.schemas.user import GoogleProfile
from app.services.google_oauth import GoogleOAuthClient, IdentityProviderError, get_identity_provider


PROFILES = {
    "alice-code": GoogleProfile(sub="google-alice", name="Alice", email="alice@example.com"),
    "alice-code-2": GoogleProfile(sub="google-alice", name="Alice", email="alice@example.com"),
    "bob-code": GoogleProfile(sub="google-bob", name="Bob", email=None),
}


class FakeGoogleClient(GoogleOAuthClient):
    """Resolves known codes to canned profiles; anything else is rejected."""

    def __init__(self):
        super().__init__("test-client-id", "test-client-secret", "http://testserver/auth/google/callback")
        self.calls = []

    async def fetch_profile(self, code: str) -> GoogleProfile:
        self.calls.append(code)
        if code not in PROFILES:
            raise IdentityProviderError(f"unknown code {code}")
        return PROFILES[code]


@pytest.fixture
def fake_provider():
    return FakeGoogleClient()


@pytest.fixture
def client(fake_provider):
    """Test client with a fresh in-memory store per test."""
    app.dependency_overrides[get_identity_provider] = lambda: fake_provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Insert a user directly into the store and return its id."""
    def _make_user(google_id: str = "google-carol", display_name: str = "Carol") -> int:
        db = SessionLocal()
        try:
            user = User(google_id=google_id, display_name=display_name, email=None)
            db.add(user)
            db.commit()
            return user.id
        finally:
            db.close()
    return _make_user


@pytest.fixture
def login(client):
    """Run the full OAuth round trip for a code; returns the callback response."""
    def _login(code: str = "alice-code"):
        start = client.get("/auth/google", follow_redirects=False)
        state = parse_qs(urlparse(start.headers["location"]).query)["state"][0]
        return client.get(
            "/auth/google/callback",
            params={"code": code, "state": state},
            follow_redirects=False,
        )
    return _login
