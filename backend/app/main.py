"""
FastAPI entrypoint for the Mood Journal backend application.
"""
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.core.config import settings, DEFAULT_SESSION_SECRET
from app.core.exceptions import register_exception_handlers
from app.api.router import api_router
from app.db.session import init_db, dispose_engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    if settings.SESSION_SECRET == DEFAULT_SESSION_SECRET:
        logger.warning("Using the default SESSION_SECRET. Set a strong secret for production.")
    if not settings.google_configured:
        logger.error("GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET not set. Login will fail.")
    init_db()

    yield

    logger.info("Application shutting down...")
    dispose_engine()


app = FastAPI(
    title="Mood Journal API",
    description="Backend API for journaling moods, genres and tracks",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Serve the bundled client page from app/static at /app
client_dir = settings.CLIENT_DIR or os.path.join(os.path.dirname(__file__), "static")
if os.path.exists(client_dir):
    app.mount("/app", StaticFiles(directory=client_dir, html=True), name="client")

app.include_router(api_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Mood Journal API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
