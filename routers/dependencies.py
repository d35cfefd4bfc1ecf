"""
Shared router dependencies
"""

import logging
from datetime import datetime
from typing import List, Tuple

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from services import ExerciseRecord, PrEntry, RecordStore, RecordStoreError

logger = logging.getLogger(__name__)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_now() -> datetime:
    """Reference time for streaks and default date ranges"""
    return datetime.now()


def load_collections(store: RecordStore) -> Tuple[List[ExerciseRecord], List[PrEntry]]:
    """
    Fetch both collections the analytics need.

    Store failures surface as 503; the engine only ever runs on a complete
    pair of collections.
    """
    try:
        exercises = store.list_exercises()
        entries = store.list_pr_entries()
    except RecordStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    logger.debug("Loaded %d exercises and %d PR entries", len(exercises), len(entries))
    return exercises, entries
