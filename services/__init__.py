"""
Analytics Services Package

Contains the training analytics engine:
- resolve: Extracts exercise ids from entry references
- build_index: Per-exercise grouping, bests and latest entry
- classify: Which records a candidate entry breaks
- compute_stats: Sessions, streaks, strength gain, top exercises
- CalendarBuckets: Heatmap intensity and per-day detail

and the RecordStore the routers read from and append to.
"""

from .models import ExerciseRecord, PrEntry, parse_calendar_date
from .reference import ExerciseRef, resolve, make_reference
from .aggregation import ExerciseAggregate, build_index, search_exercises
from .classifier import PrClassification, RecordKind, classify
from .stats import TrainingStats, compute_stats
from .calendar_buckets import CalendarBuckets, Intensity, intensity_for_count, group_by_date
from .feed import recent_entries, all_entries_feed
from .snapshot import AnalyticsSnapshot, build_snapshot
from .one_rep_max import FORMULAS, estimate_1rm
from .record_store import RecordStore, RecordStoreError

__all__ = [
    'ExerciseRecord',
    'PrEntry',
    'parse_calendar_date',
    'ExerciseRef',
    'resolve',
    'make_reference',
    'ExerciseAggregate',
    'build_index',
    'search_exercises',
    'PrClassification',
    'RecordKind',
    'classify',
    'TrainingStats',
    'compute_stats',
    'CalendarBuckets',
    'Intensity',
    'intensity_for_count',
    'group_by_date',
    'recent_entries',
    'all_entries_feed',
    'AnalyticsSnapshot',
    'build_snapshot',
    'FORMULAS',
    'estimate_1rm',
    'RecordStore',
    'RecordStoreError',
]
