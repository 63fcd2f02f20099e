"""FastAPI application for the task tracker."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from pydantic import BaseModel

from tasktracker.core.config import load_app_config, setup_logging
from tasktracker.db.pool import Database, open_database, close_database
from tasktracker.api.scheduler_routes import router as scheduler_router, set_database
from tasktracker.state.tasks import ensure_tables

load_dotenv()

logger = logging.getLogger(__name__)

database: Optional[Database] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global database

    app_config = load_app_config()
    setup_logging(app_config.log_level)

    logger.info("Starting task tracker...")

    db = None
    try:
        db = await open_database()
        await ensure_tables(db)
        database = db
        set_database(database)
        logger.info("Database connection initialized")
    except Exception as e:
        logger.warning(f"Database connection failed (scheduling disabled): {e}")
        await close_database(db)
        database = None

    yield

    if database is not None:
        set_database(None)
        await close_database(database)
        database = None
        logger.info("Database connection closed")

    logger.info("Shutting down task tracker...")


app = FastAPI(
    title="Task Tracker",
    description="Projects, tasks and working-day auto-scheduling",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(scheduler_router)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: bool


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        database=database is not None and database.is_connected,
    )
