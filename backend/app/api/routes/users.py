"""
Mood history routes scoped to a user id.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.mood import MoodCreate, AddMoodResponse, MoodHistoryResponse
from app.services.mood_service import append_entry, list_entries

router = APIRouter(prefix="/user", tags=["moods"])


@router.post("/add-mood", response_model=AddMoodResponse)
async def add_mood(mood_data: MoodCreate, db: Session = Depends(get_db)):
    """Append a mood entry and return the full history."""
    history = append_entry(
        mood_data.user_id,
        mood_data.mood,
        mood_data.genre,
        mood_data.tracks,
        db
    )
    return {"success": True, "mood_history": history}


@router.get("/moods/{user_id}", response_model=MoodHistoryResponse)
async def get_moods(user_id: str, db: Session = Depends(get_db)):
    """Get a user's mood history, oldest first."""
    return {"mood_history": list_entries(user_id, db)}
