"""
Pydantic schemas for User entity.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
from app.core.utils import as_utc
from app.schemas.mood import CamelModel, MoodResponse


class UserBase(CamelModel):
    """Base user schema."""
    display_name: str
    email: Optional[str] = None


class UserResponse(UserBase):
    """Schema for the authenticated user."""
    id: int
    google_id: str
    created_at: datetime
    mood_history: List[MoodResponse] = Field(default_factory=list)

    @field_validator("created_at")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class GoogleProfile(CamelModel):
    """Identity assertion fields returned by the provider's userinfo endpoint."""
    sub: str
    name: Optional[str] = None
    email: Optional[str] = None
    email_verified: Optional[bool] = None
    picture: Optional[str] = None
