"""
User model for identity-provider accounts and their mood history.
"""
from sqlalchemy import Column, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """User created on first login for a Google account."""
    __tablename__ = "users"

    google_id = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=True, index=True)

    # Relationships
    mood_history = relationship(
        "MoodEntry",
        back_populates="user",
        order_by="MoodEntry.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
