"""
Stats Router
API endpoints for training statistics and the dashboard snapshot
"""

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, Query

from services import RecordStore, build_snapshot
from .dependencies import get_record_store, get_now, load_collections

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("")
async def get_training_stats(
    store: RecordStore = Depends(get_record_store),
    now: datetime = Depends(get_now)
):
    """
    Get overall training statistics.

    Includes:
    - Total sessions and sessions per week
    - Current and longest weekly streak
    - Average strength gain across exercises
    - Top 5 most logged exercises
    """
    exercises, entries = load_collections(store)
    snapshot = build_snapshot(exercises, entries, now)

    return {
        "generated_at": now.isoformat(),
        **snapshot.stats.to_dict()
    }


@router.get("/snapshot")
async def get_dashboard_snapshot(
    weeks: int = Query(default=12, ge=1, le=52),
    store: RecordStore = Depends(get_record_store),
    now: datetime = Depends(get_now)
):
    """
    Everything the dashboard home screen shows, computed in one pass.

    - **weeks**: How many weeks of heatmap to include (1-52)
    """
    exercises, entries = load_collections(store)
    snapshot = build_snapshot(exercises, entries, now)

    today = now.date()
    start = today - timedelta(days=weeks * 7 - 1)

    return {
        "generated_at": now.isoformat(),
        "stats": snapshot.stats.to_dict(),
        "recent_entries": snapshot.recent,
        "exercises": [agg.summary() for agg in snapshot.index.values()],
        "heatmap": snapshot.calendar.heatmap(start, today)
    }
