"""
Analytics Snapshot
One pure pass from (exercises, entries, now) to everything the dashboard shows
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Union

from .aggregation import ExerciseAggregate, build_index
from .calendar_buckets import CalendarBuckets
from .feed import recent_entries
from .models import ExerciseRecord, PrEntry
from .stats import TrainingStats, compute_stats


@dataclass
class AnalyticsSnapshot:
    exercises: List[ExerciseRecord]
    entries: List[PrEntry]
    index: Dict[str, ExerciseAggregate]
    stats: TrainingStats
    calendar: CalendarBuckets
    recent: List[Dict]


def build_snapshot(exercises: List[ExerciseRecord], entries: List[PrEntry],
                   now: Union[date, datetime]) -> AnalyticsSnapshot:
    """
    Recompute every derived view from scratch.

    Callers replace their previous snapshot wholesale; nothing here is merged
    into an earlier result.
    """
    index = build_index(exercises, entries)
    return AnalyticsSnapshot(
        exercises=exercises,
        entries=entries,
        index=index,
        stats=compute_stats(exercises, entries, index, now),
        calendar=CalendarBuckets(entries),
        recent=recent_entries(exercises, entries),
    )
