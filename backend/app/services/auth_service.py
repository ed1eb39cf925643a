"""
Authentication service: user provisioning and server-side sessions.
"""
from datetime import timedelta
from typing import Optional
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.security import generate_token, create_session_token, decode_session_token
from app.core.utils import utcnow, as_utc
from app.models.session import UserSession
from app.models.user import User
from app.schemas.user import GoogleProfile

logger = logging.getLogger(__name__)


def get_user_by_google_id(google_id: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.google_id == google_id).first()


def get_or_create_user(profile: GoogleProfile, db: Session) -> User:
    """
    Return the user for a Google subject, creating it on first login.

    Repeated logins for the same subject always resolve to the same row;
    a concurrent first login losing the unique-constraint race re-reads
    the winner.
    """
    user = get_user_by_google_id(profile.sub, db)
    if user:
        return user

    user = User(
        google_id=profile.sub,
        display_name=profile.name or "",
        email=profile.email,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        user = get_user_by_google_id(profile.sub, db)
        if user is None:
            raise
        return user
    db.refresh(user)
    logger.info(f"Created user {user.id} for Google subject {profile.sub}")
    return user


def create_session(
    user: User,
    db: Session,
    user_agent: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Persist a session for the user and return the signed cookie value."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.SESSION_EXPIRE_DAYS)
    purge_expired_sessions(db)
    record = UserSession(
        id=generate_token(),
        user_id=user.id,
        expires_at=utcnow() + expires_delta,
        user_agent=(user_agent or "")[:512] or None,
    )
    db.add(record)
    db.commit()
    logger.info(f"Issued session for user {user.id}")
    return create_session_token(record.id, expires_delta)


def resolve_session(token: Optional[str], db: Session) -> Optional[UserSession]:
    """Look up the live session behind a cookie value, or None."""
    if not token:
        return None
    session_id = decode_session_token(token)
    if not session_id:
        return None
    record = db.query(UserSession).filter(UserSession.id == session_id).first()
    if not record:
        return None
    if as_utc(record.expires_at) <= utcnow():
        db.delete(record)
        db.commit()
        logger.info("Expired session removed")
        return None
    return record


def purge_expired_sessions(db: Session) -> int:
    """Delete every session past its expiry. Flushed, not committed."""
    deleted = db.query(UserSession).filter(
        UserSession.expires_at <= utcnow()
    ).delete(synchronize_session=False)
    if deleted:
        logger.info(f"Purged {deleted} expired session(s)")
    return deleted


def end_session(token: Optional[str], db: Session) -> bool:
    """Delete the session behind a cookie value. Returns whether one existed."""
    session_id = decode_session_token(token, verify_exp=False) if token else None
    if not session_id:
        return False
    deleted = db.query(UserSession).filter(UserSession.id == session_id).delete()
    db.commit()
    if deleted:
        logger.info("Session ended")
    return bool(deleted)
