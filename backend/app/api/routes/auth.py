"""
Authentication routes for Google login, identity lookup, and logout.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from app.api.dependencies import get_current_user, get_session_token
from app.core.config import settings
from app.core.exceptions import UpstreamFailure
from app.core.security import generate_token, create_state_token, verify_state_token
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserResponse
from app.services.auth_service import get_or_create_user, create_session, end_session
from app.services.google_oauth import GoogleOAuthClient, IdentityProviderError, get_identity_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_cookie(response: RedirectResponse, key: str, value: str, max_age: int):
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def _failure_redirect() -> RedirectResponse:
    response = RedirectResponse(url=settings.auth_failure_url, status_code=302)
    response.delete_cookie(settings.OAUTH_STATE_COOKIE_NAME, path="/")
    return response


@router.get("/google")
async def google_login(provider: GoogleOAuthClient = Depends(get_identity_provider)):
    """Redirect the browser to Google's consent screen."""
    if not provider.configured:
        raise UpstreamFailure("Google OAuth not configured")

    state = generate_token(16)
    response = RedirectResponse(url=provider.authorization_url(state), status_code=302)
    _set_cookie(
        response,
        settings.OAUTH_STATE_COOKIE_NAME,
        create_state_token(state),
        settings.OAUTH_STATE_EXPIRE_MINUTES * 60,
    )
    return response


@router.get("/google/callback")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    provider: GoogleOAuthClient = Depends(get_identity_provider),
    db: Session = Depends(get_db)
):
    """Complete login: verify the assertion, provision the user, open a session."""
    if error or not code:
        logger.warning(f"Google callback without code (error={error})")
        return _failure_redirect()

    state_cookie = request.cookies.get(settings.OAUTH_STATE_COOKIE_NAME)
    if not verify_state_token(state_cookie, state):
        logger.warning("Google callback state mismatch")
        return _failure_redirect()

    try:
        profile = await provider.fetch_profile(code)
    except IdentityProviderError as e:
        logger.error(f"Google login failed: {e}")
        return _failure_redirect()

    # Store failures here propagate as an opaque 500
    user = get_or_create_user(profile, db)
    token = create_session(user, db, user_agent=request.headers.get("User-Agent"))

    response = RedirectResponse(url=settings.CLIENT_URL, status_code=302)
    _set_cookie(
        response,
        settings.SESSION_COOKIE_NAME,
        token,
        settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,
    )
    response.delete_cookie(settings.OAUTH_STATE_COOKIE_NAME, path="/")
    return response


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/logout")
async def logout(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
):
    """Invalidate the session and return to the client."""
    end_session(token, db)
    response = RedirectResponse(url=settings.CLIENT_URL, status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response
