"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.mood import MoodEntry
from app.models.session import UserSession

__all__ = [
    "User",
    "MoodEntry",
    "UserSession",
]
