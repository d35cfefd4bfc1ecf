"""
PR Tracker Analytics Service
FastAPI application for personal record tracking and training analytics

Run with: uvicorn main:app --reload --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Import routers
import database
from routers import records_router, stats_router, calendar_router
from services.record_store import ensure_schema

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",   # Frontend dev server
    "http://localhost:5173",   # Vite dev server
    "http://127.0.0.1:5500",   # VS Code Live Server
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the record tables on startup; a fresh database needs no seeding"""
    ensure_schema(database.engine)
    logger.info("Record tables ready")
    yield


# Create FastAPI app
app = FastAPI(
    title="PR Tracker Analytics",
    description="""
    ## Personal Record Tracking

    This service stores strength-training personal records and derives analytics:

    ### Records
    - **Exercises**: Track exercises with best weight, best reps and latest entry
    - **PR Entries**: Log attempts; each one is classified as a weight, rep and/or volume record
    - **Feeds**: Recent records across all exercises and the full history

    ### Stats
    - **Sessions**: Total sessions and sessions per week
    - **Streak**: Consecutive trained weeks
    - **Strength Gain**: Average improvement from first logged weight to best
    - **Top Exercises**: Most frequently logged exercises

    ### Calendar
    - **Heatmap**: Training intensity per day
    - **Day Detail**: Everything logged on a given day

    ---

    **Tech Stack**: Python, FastAPI, pandas, SQLAlchemy
    """,
    version=SERVICE_VERSION,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc alternative
    lifespan=lifespan
)

# Configure CORS (comma-separated CORS_ORIGINS overrides the defaults)
cors_origins = os.getenv("CORS_ORIGINS")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins.split(",") if cors_origins else DEFAULT_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "pr-tracker-analytics",
        "version": SERVICE_VERSION
    }


# Include routers
app.include_router(records_router)
app.include_router(stats_router)
app.include_router(calendar_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "PR Tracker Analytics",
        "version": SERVICE_VERSION,
        "documentation": "/docs",
        "endpoints": {
            "records": {
                "exercises": "GET /records/exercises?q=",
                "create_exercise": "POST /records/exercises",
                "exercise_detail": "GET /records/exercises/{exercise_id}",
                "recent_entries": "GET /records/entries",
                "all_entries": "GET /records/feed",
                "classify": "POST /records/classify",
                "create_entry": "POST /records/entries"
            },
            "stats": {
                "overview": "GET /stats",
                "snapshot": "GET /stats/snapshot"
            },
            "calendar": {
                "heatmap": "GET /calendar/heatmap",
                "day": "GET /calendar/days/{date}"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
