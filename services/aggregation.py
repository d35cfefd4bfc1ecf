"""
Aggregation Index
Groups PR entries by exercise and computes per-exercise bests

Entries whose reference does not resolve to a known exercise are left out of
every aggregate. They remain in the raw entry list for the recency feeds.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Iterable

from .models import ExerciseRecord, PrEntry
from .one_rep_max import DEFAULT_FORMULA, estimate_1rm


def newest_first(entries: Iterable[PrEntry]) -> List[PrEntry]:
    """
    Sort entries most recent first.

    Entries with unparseable dates sort as the oldest. Python's sort is
    stable under reverse=True, so ties keep their original order.
    """
    return sorted(entries, key=lambda e: e.day or date.min, reverse=True)


@dataclass
class ExerciseAggregate:
    """Everything the dashboard shows for one exercise"""
    exercise: ExerciseRecord
    sorted_entries: List[PrEntry] = field(default_factory=list)
    best_weight: Optional[float] = None
    best_reps: Optional[int] = None
    last_entry: Optional[PrEntry] = None

    @property
    def entry_count(self) -> int:
        return len(self.sorted_entries)

    @property
    def best_estimated_1rm(self) -> Optional[float]:
        return self.estimated_1rm(DEFAULT_FORMULA)

    def estimated_1rm(self, formula: str = DEFAULT_FORMULA) -> Optional[float]:
        """Highest estimated one-rep max over the history, None without entries"""
        if not self.sorted_entries:
            return None
        return round(max(estimate_1rm(e.weight_kg, e.reps, formula) for e in self.sorted_entries), 1)

    def summary(self, formula: str = DEFAULT_FORMULA) -> Dict:
        return {
            'id': self.exercise.id,
            'name': self.exercise.name,
            'entry_count': self.entry_count,
            'best_weight': self.best_weight,
            'best_reps': self.best_reps,
            'best_estimated_1rm': self.estimated_1rm(formula),
            'one_rep_max_formula': formula,
            'last_entry': self.last_entry.to_dict() if self.last_entry else None,
        }


def build_index(exercises: List[ExerciseRecord],
                entries: List[PrEntry]) -> Dict[str, ExerciseAggregate]:
    """
    Build the per-exercise aggregate for every known exercise.

    Args:
        exercises: All exercises, in display order
        entries: All PR entries, in storage order

    Returns:
        Dict keyed by (lower-cased) exercise id, in exercise order. Exercises
        without entries get an empty aggregate whose bests are None.
    """
    groups: Dict[str, List[PrEntry]] = {ex.id.lower(): [] for ex in exercises}

    for entry in entries:
        exercise_id = entry.ref.exercise_id
        if exercise_id in groups:
            groups[exercise_id].append(entry)

    index = {}
    for exercise in exercises:
        key = exercise.id.lower()
        if key in index:
            continue
        group = newest_first(groups[key])
        index[key] = ExerciseAggregate(
            exercise=exercise,
            sorted_entries=group,
            best_weight=max((e.weight_kg for e in group), default=None),
            best_reps=max((e.reps for e in group), default=None),
            last_entry=group[0] if group else None,
        )

    return index


def search_exercises(index: Dict[str, ExerciseAggregate], query: Optional[str]) -> List[ExerciseAggregate]:
    """Case-insensitive substring search on exercise names"""
    if not query:
        return list(index.values())
    needle = query.strip().lower()
    return [agg for agg in index.values() if needle in agg.exercise.name.lower()]
