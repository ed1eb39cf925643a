"""
Mood service for appending to and reading a user's mood history.
"""
from typing import List, Optional, Union
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, UpstreamFailure
from app.core.utils import utcnow
from app.models.mood import MoodEntry
from app.models.user import User

logger = logging.getLogger(__name__)


MAX_USER_ID = 2 ** 63 - 1  # Signed 64-bit INTEGER column


def _parse_user_id(user_id: Union[int, str]) -> Optional[int]:
    """Local id for a request value, or None when no row could have it."""
    if isinstance(user_id, bool):
        return None
    if isinstance(user_id, int):
        local_id = user_id
    else:
        text = str(user_id).strip()
        if not (text.isascii() and text.isdigit()):
            return None
        local_id = int(text)
    if not 0 < local_id <= MAX_USER_ID:
        return None
    return local_id


def get_user_or_404(user_id: Union[int, str], db: Session) -> User:
    """Load a user by local id; ids that cannot exist are simply not found."""
    local_id = _parse_user_id(user_id)
    user = None
    if local_id is not None:
        user = db.query(User).filter(User.id == local_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def list_entries(user_id: Union[int, str], db: Session) -> List[MoodEntry]:
    """Return the user's history in insertion order."""
    user = get_user_or_404(user_id, db)
    return list(user.mood_history)


def append_entry(
    user_id: Union[int, str],
    mood: str,
    genre: str,
    tracks: List[str],
    db: Session
) -> List[MoodEntry]:
    """Append a timestamped entry and return the full updated history."""
    user = get_user_or_404(user_id, db)
    entry = MoodEntry(mood=mood, genre=genre, tracks=list(tracks), date=utcnow())
    user.mood_history.append(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to append mood entry for user {user_id}: {e}", exc_info=True)
        raise UpstreamFailure() from e
    db.refresh(user)
    return list(user.mood_history)
