"""
Mood model for journaled mood entries.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.utils import utcnow
from app.db.base import BaseModel


class MoodEntry(BaseModel):
    """One mood/genre/tracks record, appended to its user's history."""
    __tablename__ = "mood_entries"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Insertion index within the user's history
    mood = Column(String(255), nullable=False)
    genre = Column(String(255), nullable=False)
    tracks = Column(JSON, nullable=False, default=list)
    date = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="mood_history")

    __table_args__ = (
        UniqueConstraint('user_id', 'position', name='uq_user_mood_position'),
    )
