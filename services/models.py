"""
Data Model
Exercise and PR entry records as read from the record store
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import cached_property
from typing import Dict, Optional, Any

import pandas as pd

from .reference import ExerciseRef

_ISO_DAY_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Parse a wire date into a calendar date.

    Accepts 'YYYY-MM-DD' or a full ISO timestamp (time of day is dropped).
    Returns None when the value is missing or is anything else, including
    words like 'today' that pandas would resolve against the clock.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    value = value.strip()
    if not _ISO_DAY_PREFIX.match(value):
        return None

    parsed = pd.to_datetime(value, format='ISO8601', errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.date()


def _as_number(value: Any, cast=float):
    # Missing or garbled numbers compare as 0
    if value is None:
        return cast(0)
    try:
        return cast(value)
    except (TypeError, ValueError):
        return cast(0)


@dataclass
class ExerciseRecord:
    """An exercise the lifter tracks records for"""
    id: str
    name: str = ""

    @classmethod
    def from_record(cls, record: Dict) -> "ExerciseRecord":
        return cls(id=str(record['id']), name=record.get('name') or "")

    def to_dict(self) -> Dict:
        return {'id': self.id, 'name': self.name}


@dataclass
class PrEntry:
    """
    A single logged attempt.

    `exercise_ref` is the opaque reference string pointing at the owning
    exercise; `ref.exercise_id` is the id it resolves to.
    """
    id: str
    exercise_ref: Optional[str]
    date: Optional[str]
    weight_kg: float = 0.0
    reps: int = 0
    sets: int = 1
    note: Optional[str] = None
    created_at: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_record(cls, record: Dict) -> "PrEntry":
        raw_date = record.get('date')
        if isinstance(raw_date, (date, datetime)):
            raw_date = raw_date.isoformat()

        created_at = record.get('created_at')
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat()

        sets = record.get('sets')
        return cls(
            id=str(record['id']),
            exercise_ref=record.get('exercise_ref'),
            date=raw_date,
            weight_kg=_as_number(record.get('weight_kg'), float),
            reps=_as_number(record.get('reps'), int),
            sets=_as_number(sets, int) if sets is not None else 1,
            note=record.get('note') or None,
            created_at=created_at,
        )

    @cached_property
    def day(self) -> Optional[date]:
        """Calendar date of the entry, or None if the date is unparseable"""
        return parse_calendar_date(self.date)

    @property
    def ref(self) -> ExerciseRef:
        return ExerciseRef(self.exercise_ref)

    @property
    def volume(self) -> float:
        return self.weight_kg * self.reps

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'exercise_ref': self.exercise_ref,
            'date': self.date,
            'weight_kg': self.weight_kg,
            'reps': self.reps,
            'sets': self.sets,
            'note': self.note,
        }
