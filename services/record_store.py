"""
Record Store
Reads and appends exercises and PR entries in the database

The analytics engine never talks to the store itself. Routers fetch both
collections here, hand them to the engine, and recompute from a fresh read
after every successful write.
"""

import logging
import os
from datetime import date, datetime, timezone
from typing import List, Optional

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import ExerciseRecord, PrEntry
from .reference import make_reference, new_record_id

load_dotenv()

logger = logging.getLogger(__name__)

RECORD_BASE_URL = os.getenv("RECORD_BASE_URL", "http://localhost:8000")
EXERCISES_APP_ID = os.getenv("EXERCISES_APP_ID", "exercises")

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS exercises (
        id VARCHAR(24) PRIMARY KEY,
        name TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pr_entries (
        id VARCHAR(24) PRIMARY KEY,
        exercise_ref TEXT,
        date TEXT,
        weight_kg DOUBLE PRECISION,
        reps INTEGER,
        sets INTEGER NOT NULL DEFAULT 1,
        note TEXT,
        created_at TIMESTAMP NOT NULL
    )
    """,
)


class RecordStoreError(Exception):
    """Reading from or writing to the record store failed"""


def ensure_schema(engine) -> None:
    """Create the exercises and pr_entries tables if they are missing"""
    with engine.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))


class RecordStore:
    """
    Exercise and PR entry storage.

    Entries are append-only: there is no update or delete.
    """

    def __init__(self, db: Session,
                 base_url: str = RECORD_BASE_URL,
                 exercises_app_id: str = EXERCISES_APP_ID):
        self.db = db
        self.base_url = base_url
        self.exercises_app_id = exercises_app_id

    def list_exercises(self) -> List[ExerciseRecord]:
        try:
            rows = self.db.execute(
                text("SELECT id, name FROM exercises ORDER BY created_at, id")
            ).fetchall()
        except SQLAlchemyError as e:
            logger.exception("Failed to list exercises")
            raise RecordStoreError("Could not load exercises") from e
        return [ExerciseRecord.from_record(dict(row._mapping)) for row in rows]

    def list_pr_entries(self) -> List[PrEntry]:
        try:
            rows = self.db.execute(text("""
                SELECT id, exercise_ref, date, weight_kg, reps, sets, note, created_at
                FROM pr_entries
                ORDER BY created_at, id
            """)).fetchall()
        except SQLAlchemyError as e:
            logger.exception("Failed to list PR entries")
            raise RecordStoreError("Could not load PR entries") from e
        return [PrEntry.from_record(dict(row._mapping)) for row in rows]

    def create_exercise(self, name: str) -> ExerciseRecord:
        record = {'id': new_record_id(), 'name': name, 'created_at': datetime.now(timezone.utc)}
        self._insert(
            "INSERT INTO exercises (id, name, created_at) VALUES (:id, :name, :created_at)",
            record,
            what="exercise",
        )
        logger.info("Created exercise %s (%s)", record['id'], name)
        return ExerciseRecord.from_record(record)

    def create_pr_entry(self, exercise_id: str, entry_date: date, weight_kg: float, reps: int,
                        sets: int = 1, note: Optional[str] = None) -> PrEntry:
        """
        Append a PR entry for `exercise_id`.

        The store assigns the id and creation timestamp and stores the
        exercise as a reference string.
        """
        record = {
            'id': new_record_id(),
            'exercise_ref': make_reference(self.base_url, self.exercises_app_id, exercise_id),
            'date': entry_date.isoformat(),
            'weight_kg': weight_kg,
            'reps': reps,
            'sets': sets,
            'note': note,
            'created_at': datetime.now(timezone.utc),
        }
        self._insert("""
            INSERT INTO pr_entries (id, exercise_ref, date, weight_kg, reps, sets, note, created_at)
            VALUES (:id, :exercise_ref, :date, :weight_kg, :reps, :sets, :note, :created_at)
        """, record, what="PR entry")
        logger.info("Created PR entry %s for exercise %s", record['id'], exercise_id)
        return PrEntry.from_record(record)

    def _insert(self, statement: str, params: dict, what: str) -> None:
        try:
            self.db.execute(text(statement), params)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to create %s", what)
            raise RecordStoreError(f"Could not save {what}") from e
