"""
Calendar Router
API endpoints for the training heatmap and per-day detail
"""

from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from services import RecordStore, CalendarBuckets
from .dependencies import get_record_store, get_now, load_collections

router = APIRouter(prefix="/calendar", tags=["Calendar"])

DEFAULT_RANGE_DAYS = 84
MAX_RANGE_DAYS = 366


@router.get("/heatmap")
async def get_heatmap(
    start: Optional[date] = Query(default=None, description="First day (default: 12 weeks ago)"),
    end: Optional[date] = Query(default=None, description="Last day (default: today)"),
    store: RecordStore = Depends(get_record_store),
    now: datetime = Depends(get_now)
):
    """
    Training heatmap: entry count and intensity for every day in a range.

    Intensity: 0 entries = none, 1-2 = low, 3-4 = medium, 5+ = high.
    """
    end = end or now.date()
    start = start or end - timedelta(days=DEFAULT_RANGE_DAYS - 1)

    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    if (end - start).days + 1 > MAX_RANGE_DAYS:
        raise HTTPException(status_code=400, detail=f"Range is limited to {MAX_RANGE_DAYS} days")

    _, entries = load_collections(store)
    days = CalendarBuckets(entries).heatmap(start, end)

    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "active_days": sum(1 for day in days if day['count'] > 0),
        "days": days
    }


@router.get("/days/{day}")
async def get_day_detail(
    day: date,
    store: RecordStore = Depends(get_record_store)
):
    """
    Everything logged on one day.

    - **day**: Calendar date (YYYY-MM-DD)
    """
    exercises, entries = load_collections(store)
    buckets = CalendarBuckets(entries)

    return {
        "date": day.isoformat(),
        "count": buckets.count(day),
        "intensity": buckets.intensity(day).value,
        "entries": [
            {**item['entry'].to_dict(), 'exercise_name': item['exercise_name']}
            for item in buckets.day_detail(day, exercises)
        ]
    }
