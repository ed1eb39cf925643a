"""
Pydantic schemas for Mood entity.
"""
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Union
from datetime import datetime
from app.core.utils import as_utc


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MoodBase(CamelModel):
    """Base mood schema."""
    mood: str
    genre: str
    tracks: List[str] = Field(default_factory=list)


class MoodCreate(MoodBase):
    """Schema for appending a mood entry to a user's history."""
    user_id: Union[int, str]


class MoodResponse(MoodBase):
    """Schema for mood response."""
    id: int
    date: datetime

    @field_validator("date")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        """Stores hand back naive UTC; send it with an explicit offset."""
        return as_utc(v)


class MoodHistoryResponse(CamelModel):
    """A user's mood history, oldest first."""
    mood_history: List[MoodResponse] = Field(default_factory=list)


class AddMoodResponse(MoodHistoryResponse):
    """Schema returned after appending an entry."""
    success: bool = True
