"""
Stats Calculator
Session frequency, streaks, strength gain and exercise ranking

Every call recomputes from the full entry list; nothing is kept between calls.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from .aggregation import ExerciseAggregate, build_index
from .models import ExerciseRecord, PrEntry

WeekKey = Tuple[int, int]

MAX_STREAK_WEEKS = 52
TOP_EXERCISE_COUNT = 5


@dataclass
class TrainingStats:
    total_sessions: int = 0
    total_entries: int = 0
    sessions_per_week: float = 0.0
    strength_gain_percent: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    top_exercises: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'total_sessions': self.total_sessions,
            'total_entries': self.total_entries,
            'sessions_per_week': self.sessions_per_week,
            'strength_gain_percent': self.strength_gain_percent,
            'current_streak': self.current_streak,
            'longest_streak': self.longest_streak,
            'top_exercises': self.top_exercises,
        }


def _as_date(now: Union[date, datetime]) -> date:
    return now.date() if isinstance(now, datetime) else now


def week_key(day: date) -> WeekKey:
    """ISO (year, week) of a day; weeks start on Monday"""
    iso = day.isocalendar()
    return iso[0], iso[1]


def session_days(entries: List[PrEntry]) -> pd.Series:
    """Distinct training days, ascending. Unparseable dates are dropped."""
    days = pd.Series([e.day for e in entries if e.day is not None], dtype=object)
    if days.empty:
        return pd.Series([], dtype='datetime64[ns]')
    return pd.to_datetime(days).drop_duplicates().sort_values().reset_index(drop=True)


def sessions_by_week(days: pd.Series) -> Dict[WeekKey, int]:
    """Number of sessions in each ISO week"""
    if days.empty:
        return {}
    iso = days.dt.isocalendar()
    counts = iso.groupby(['year', 'week']).size()
    return {(int(year), int(week)): int(n) for (year, week), n in counts.items()}


def sessions_per_week(days: pd.Series, now: Union[date, datetime]) -> float:
    """
    Average sessions per week since the first session.

    Both the day span and the week count are floored at 1 so a single fresh
    session does not divide by zero.
    """
    if days.empty:
        return 0.0
    earliest = days.iloc[0].date()
    days_since_first = max(1, (_as_date(now) - earliest).days)
    weeks_active = max(1, math.ceil(days_since_first / 7))
    return round(len(days) / weeks_active, 1)


def current_streak(week_counts: Dict[WeekKey, int], now: Union[date, datetime]) -> int:
    """
    Consecutive trained weeks counting back from now.

    The current week gets a grace period: if it has no session yet the walk
    starts from the week before.
    """
    cursor = _as_date(now)
    if not week_counts.get(week_key(cursor)):
        cursor -= timedelta(weeks=1)

    streak = 0
    for _ in range(MAX_STREAK_WEEKS):
        if not week_counts.get(week_key(cursor)):
            break
        streak += 1
        cursor -= timedelta(weeks=1)
    return streak


def longest_streak(week_counts: Dict[WeekKey, int]) -> int:
    """Longest run of consecutive trained weeks over the whole history"""
    mondays = sorted(
        date.fromisocalendar(year, week, 1)
        for (year, week), n in week_counts.items() if n > 0
    )
    best = run = 0
    previous = None
    for monday in mondays:
        run = run + 1 if previous is not None and monday - previous == timedelta(weeks=1) else 1
        best = max(best, run)
        previous = monday
    return best


def strength_gain_percent(entries: List[PrEntry], index: Dict[str, ExerciseAggregate]) -> float:
    """
    Mean percentage gain from first logged weight to best weight.

    Only exercises with at least two entries, a positive baseline and an
    actual improvement contribute; the rest are left out of the mean.
    """
    rows = []
    for entry in entries:
        exercise_id = entry.ref.exercise_id
        if exercise_id in index:
            rows.append({'exercise_id': exercise_id, 'day': entry.day, 'weight_kg': entry.weight_kg})
    if not rows:
        return 0.0

    frame = pd.DataFrame(rows)
    frame['day'] = pd.to_datetime(frame['day'], errors='coerce')
    frame = frame.sort_values('day', kind='stable', na_position='first')

    grouped = frame.groupby('exercise_id', sort=False)['weight_kg'].agg(['count', 'first', 'max'])
    qualifying = grouped[
        (grouped['count'] >= 2) & (grouped['first'] > 0) & (grouped['max'] > grouped['first'])
    ]
    if qualifying.empty:
        return 0.0

    gains = (qualifying['max'] - qualifying['first']) / qualifying['first'] * 100
    return round(float(gains.mean()), 1)


def top_exercises(index: Dict[str, ExerciseAggregate], limit: int = TOP_EXERCISE_COUNT) -> List[Dict]:
    """
    Most frequently logged exercises; ties keep exercise order.

    Every exercise is ranked, so exercises without entries fill the tail
    with a count of 0.
    """
    ranked = sorted(
        index.values(),
        key=lambda agg: agg.entry_count,
        reverse=True,
    )
    return [
        {'exercise_id': agg.exercise.id, 'name': agg.exercise.name, 'entry_count': agg.entry_count}
        for agg in ranked[:limit]
    ]


def compute_stats(exercises: List[ExerciseRecord],
                  entries: List[PrEntry],
                  index: Optional[Dict[str, ExerciseAggregate]],
                  now: Union[date, datetime]) -> TrainingStats:
    """
    Compute the dashboard statistics.

    Args:
        exercises: All exercises
        entries: All PR entries, in storage order
        index: Aggregation index built from the same two lists, or None to
               build it here
        now: Reference point for the streak and weekly rate

    Returns:
        TrainingStats
    """
    if index is None:
        index = build_index(exercises, entries)

    days = session_days(entries)
    week_counts = sessions_by_week(days)

    return TrainingStats(
        total_sessions=len(days),
        total_entries=len(entries),
        sessions_per_week=sessions_per_week(days, now),
        strength_gain_percent=strength_gain_percent(entries, index),
        current_streak=current_streak(week_counts, now),
        longest_streak=longest_streak(week_counts),
        top_exercises=top_exercises(index),
    )
