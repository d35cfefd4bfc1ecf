"""
Records Router
API endpoints for exercises, PR entries and record classification
"""

import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from services import (
    RecordStore,
    RecordStoreError,
    build_index,
    search_exercises,
    classify,
    FORMULAS,
    recent_entries,
    all_entries_feed,
)
from .dependencies import get_record_store, get_now, load_collections

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["Records"])

FORMULA_PATTERN = "^(" + "|".join(FORMULAS) + ")$"


class ExerciseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name')
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ClassifyRequest(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    weight_kg: float = Field(..., ge=0)
    reps: int = Field(..., ge=1)


class PrEntryCreate(ClassifyRequest):
    date: Optional[datetime.date] = Field(default=None, description="Defaults to today")
    sets: int = Field(default=1, ge=1)
    note: Optional[str] = None

    @field_validator('note')
    @classmethod
    def blank_note_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


def _find_aggregate(index, exercise_id: str):
    aggregate = index.get(exercise_id.lower())
    if aggregate is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return aggregate


@router.get("/exercises")
async def list_exercises(
    q: Optional[str] = Query(default=None, description="Case-insensitive name search"),
    store: RecordStore = Depends(get_record_store)
):
    """
    List exercises with their best weight, best reps and latest entry.

    - **q**: Only return exercises whose name contains this text
    """
    exercises, entries = load_collections(store)
    index = build_index(exercises, entries)
    matches = search_exercises(index, q)

    return {
        "count": len(matches),
        "exercises": [agg.summary() for agg in matches]
    }


@router.post("/exercises", status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    store: RecordStore = Depends(get_record_store)
):
    """Add a new exercise to track"""
    try:
        exercise = store.create_exercise(payload.name)
    except RecordStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return exercise.to_dict()


@router.get("/exercises/{exercise_id}")
async def get_exercise(
    exercise_id: str,
    formula: str = Query(
        default="epley",
        pattern=FORMULA_PATTERN,
        description="1RM formula: " + ", ".join(FORMULAS)
    ),
    store: RecordStore = Depends(get_record_store)
):
    """
    Exercise detail: bests, latest entry and full history (newest first).

    - **exercise_id**: 24-character id of the exercise
    - **formula**: Formula for the best estimated 1RM (default: epley)
    """
    exercises, entries = load_collections(store)
    aggregate = _find_aggregate(build_index(exercises, entries), exercise_id)

    return {
        **aggregate.summary(formula),
        "history": [entry.to_dict() for entry in aggregate.sorted_entries]
    }


@router.get("/entries")
async def list_recent_entries(
    limit: int = Query(default=10, ge=1, le=100),
    store: RecordStore = Depends(get_record_store)
):
    """
    Most recent PR entries across all exercises.

    Entries pointing at an unknown exercise are included and labelled "unknown".

    - **limit**: How many entries to return (1-100)
    """
    exercises, entries = load_collections(store)
    return {
        "total_entries": len(entries),
        "entries": recent_entries(exercises, entries, limit=limit)
    }


@router.get("/feed")
async def list_all_entries(store: RecordStore = Depends(get_record_store)):
    """Every PR entry that belongs to a known exercise, grouped by exercise"""
    exercises, entries = load_collections(store)
    feed = all_entries_feed(build_index(exercises, entries))
    return {"count": len(feed), "entries": feed}


@router.post("/classify")
async def classify_entry(
    payload: ClassifyRequest,
    store: RecordStore = Depends(get_record_store)
):
    """
    Preview which records an attempt would break. Nothing is saved.

    - **weight_kg**: Candidate weight
    - **reps**: Candidate rep count
    """
    exercises, entries = load_collections(store)
    aggregate = _find_aggregate(build_index(exercises, entries), payload.exercise_id)
    result = classify(payload.weight_kg, payload.reps, aggregate.sorted_entries)

    return {
        "exercise": aggregate.exercise.to_dict(),
        "classification": result.to_dict()
    }


@router.post("/entries", status_code=201)
async def create_entry(
    payload: PrEntryCreate,
    store: RecordStore = Depends(get_record_store),
    now: datetime.datetime = Depends(get_now)
):
    """
    Log a new PR entry.

    The attempt is classified against the exercise's history before it is
    saved, so the response says which records it broke.
    """
    exercises, entries = load_collections(store)
    aggregate = _find_aggregate(build_index(exercises, entries), payload.exercise_id)
    result = classify(payload.weight_kg, payload.reps, aggregate.sorted_entries)

    try:
        entry = store.create_pr_entry(
            exercise_id=aggregate.exercise.id,
            entry_date=payload.date or now.date(),
            weight_kg=payload.weight_kg,
            reps=payload.reps,
            sets=payload.sets,
            note=payload.note,
        )
    except RecordStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if result.is_any_pr:
        logger.info(
            "New %s record for %s",
            "/".join(kind.value for kind in result.kinds), aggregate.exercise.name
        )

    return {
        "entry": entry.to_dict(),
        "exercise": aggregate.exercise.to_dict(),
        "classification": result.to_dict()
    }
