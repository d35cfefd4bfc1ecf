"""
Entry Feeds
Recent-records carousel and the full history list
"""

from typing import Dict, List

from .aggregation import ExerciseAggregate, newest_first
from .calendar_buckets import UNKNOWN_EXERCISE
from .models import ExerciseRecord, PrEntry

RECENT_LIMIT = 10


def recent_entries(exercises: List[ExerciseRecord], entries: List[PrEntry],
                   limit: int = RECENT_LIMIT) -> List[Dict]:
    """
    Newest entries across all exercises.

    Reads the raw entry list, so entries with an unresolvable reference still
    show up, labelled "unknown".
    """
    names = {ex.id.lower(): ex.name for ex in exercises}
    feed = []
    for entry in newest_first(entries)[:limit]:
        exercise_id = entry.ref.exercise_id
        feed.append({
            **entry.to_dict(),
            'exercise_id': exercise_id,
            'exercise_name': names.get(exercise_id, UNKNOWN_EXERCISE),
        })
    return feed


def all_entries_feed(index: Dict[str, ExerciseAggregate]) -> List[Dict]:
    """Every resolved entry, grouped by exercise in exercise order"""
    return [
        {**entry.to_dict(), 'exercise_id': agg.exercise.id, 'exercise_name': agg.exercise.name}
        for agg in index.values()
        for entry in agg.sorted_entries
    ]
