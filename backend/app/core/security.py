"""
Security utilities for signed session and OAuth state cookies.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import secrets
from jose import JWTError, jwt
from app.core.config import settings


def generate_token(nbytes: int = 32) -> str:
    """Generate a random URL-safe token for session ids and OAuth state."""
    return secrets.token_urlsafe(nbytes)


def _encode(data: dict, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.SESSION_SECRET, algorithm=settings.SESSION_ALGORITHM)


def _decode(token: str, verify_exp: bool = True) -> Optional[dict]:
    try:
        return jwt.decode(
            token,
            settings.SESSION_SECRET,
            algorithms=[settings.SESSION_ALGORITHM],
            options={"verify_exp": verify_exp},
        )
    except JWTError:
        return None


def create_session_token(session_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a session id into the value stored in the session cookie."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.SESSION_EXPIRE_DAYS)
    return _encode({"sid": session_id}, expires_delta)


def decode_session_token(token: str, verify_exp: bool = True) -> Optional[str]:
    """
    Return the session id carried by a session cookie value.

    Tampered or malformed tokens yield None, as do expired ones unless
    verify_exp is False (logout still needs to find an expired session).
    """
    payload = _decode(token, verify_exp=verify_exp)
    if not payload:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None


def create_state_token(state: str) -> str:
    """Sign the OAuth state value for the short-lived state cookie."""
    return _encode(
        {"state": state},
        timedelta(minutes=settings.OAUTH_STATE_EXPIRE_MINUTES),
    )


def verify_state_token(token: Optional[str], state: Optional[str]) -> bool:
    """Check that the state returned by the provider matches the signed cookie."""
    if not token or not state:
        return False
    payload = _decode(token)
    if not payload:
        return False
    expected = payload.get("state")
    if not isinstance(expected, str):
        return False
    return secrets.compare_digest(expected, state)
