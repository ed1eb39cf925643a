"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import auth, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
