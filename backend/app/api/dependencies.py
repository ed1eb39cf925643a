"""
Request dependencies resolving the caller's session and identity.
"""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import Unauthenticated
from app.db.session import get_db
from app.models.session import UserSession
from app.models.user import User
from app.services.auth_service import resolve_session


def get_session_token(request: Request) -> Optional[str]:
    """Raw session cookie value, if the browser sent one."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> Optional[UserSession]:
    """The live session for this request, or None when unauthenticated."""
    return resolve_session(token, db)


def get_current_user(
    session: Optional[UserSession] = Depends(get_current_session)
) -> User:
    """Get the authenticated user or signal Unauthenticated."""
    if session is None or session.user is None:
        raise Unauthenticated()
    return session.user
