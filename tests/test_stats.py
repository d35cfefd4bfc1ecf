"""
Unit tests for services/stats.py
"""

from datetime import date, datetime, timedelta

from services import build_index, compute_stats
from services.stats import (
    current_streak,
    longest_streak,
    session_days,
    sessions_by_week,
    sessions_per_week,
    strength_gain_percent,
    top_exercises,
)
from services.models import ExerciseRecord
from tests.fakes import (
    BENCH_ID,
    SQUAT_ID,
    DEADLIFT_ID,
    UNKNOWN_ID,
    make_entry,
    sample_exercises,
)

# Wednesday of ISO week 24 (Monday 2024-06-10)
NOW = datetime(2024, 6, 12, 10, 0)


def _stats(entries, now=NOW, exercises=None):
    exercises = exercises or sample_exercises()
    return compute_stats(exercises, entries, build_index(exercises, entries), now)


def _week_counts(days):
    return sessions_by_week(session_days([make_entry(BENCH_ID, d, 100, 5) for d in days]))


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def test_a_session_is_a_day_with_any_entry():
    entries = [
        make_entry(BENCH_ID, date(2024, 6, 10), 100, 5),
        make_entry(SQUAT_ID, date(2024, 6, 10), 140, 5),
        make_entry(BENCH_ID, "2024-06-10T18:45:00", 90, 8),
        make_entry(DEADLIFT_ID, date(2024, 6, 11), 180, 3),
    ]
    stats = _stats(entries)
    assert stats.total_sessions == 2
    assert stats.total_entries == 4


def test_unparseable_dates_do_not_count_as_sessions():
    entries = [
        make_entry(BENCH_ID, date(2024, 6, 10), 100, 5),
        make_entry(BENCH_ID, "garbage", 100, 5),
        make_entry(BENCH_ID, None, 100, 5),
    ]
    assert _stats(entries).total_sessions == 1


def test_clock_words_and_loose_formats_are_not_sessions():
    entries = [
        make_entry(BENCH_ID, date(2024, 6, 10), 100, 5),
        make_entry(BENCH_ID, "now", 100, 5),
        make_entry(BENCH_ID, "today", 100, 5),
        make_entry(BENCH_ID, "June", 100, 5),
        make_entry(BENCH_ID, "12/06/2024", 100, 5),
    ]
    stats = _stats(entries)
    assert stats.total_sessions == 1
    assert stats.sessions_per_week == 1.0
    assert stats.current_streak == 1


def test_sessions_are_counted_for_unresolvable_entries_too():
    entries = [make_entry(UNKNOWN_ID, date(2024, 6, 10), 100, 5)]
    assert _stats(entries).total_sessions == 1


def test_sessions_per_week_over_active_weeks():
    # First session 42 days before NOW: 6 active weeks, 3 sessions
    days = [date(2024, 5, 1), date(2024, 5, 2), date(2024, 6, 12)]
    entries = [make_entry(BENCH_ID, d, 100, 5) for d in days]
    assert _stats(entries).sessions_per_week == 0.5


def test_sessions_per_week_rounds_to_one_decimal():
    # 22 days -> 4 weeks, 3 sessions -> 0.75
    days = [date(2024, 5, 21), date(2024, 5, 22), date(2024, 5, 23)]
    assert sessions_per_week(session_days([make_entry(BENCH_ID, d, 1, 1) for d in days]), NOW) == 0.8


def test_single_session_today_is_one_per_week():
    entries = [make_entry(BENCH_ID, NOW.date(), 100, 5)]
    assert _stats(entries).sessions_per_week == 1.0


def test_empty_history():
    stats = _stats([])
    assert stats.total_sessions == 0
    assert stats.sessions_per_week == 0.0
    assert stats.strength_gain_percent == 0.0
    assert stats.current_streak == 0
    assert stats.longest_streak == 0
    assert [item['entry_count'] for item in stats.top_exercises] == [0, 0, 0]
    assert [item['name'] for item in stats.top_exercises] == ["Bench Press", "Back Squat", "Deadlift"]


# ---------------------------------------------------------------------------
# Strength gain
# ---------------------------------------------------------------------------


def test_strength_gain_ignores_exercises_with_a_single_entry():
    entries = [
        make_entry(BENCH_ID, date(2024, 1, 1), 100, 5),
        make_entry(BENCH_ID, date(2024, 1, 30), 120, 5),
        make_entry(SQUAT_ID, date(2024, 1, 1), 50, 5),
    ]
    assert _stats(entries).strength_gain_percent == 20.0


def test_strength_gain_averages_improving_exercises_only():
    entries = [
        make_entry(BENCH_ID, date(2024, 1, 1), 100, 5),
        make_entry(BENCH_ID, date(2024, 1, 30), 120, 5),
        make_entry(SQUAT_ID, date(2024, 1, 1), 50, 5),
        make_entry(SQUAT_ID, date(2024, 2, 1), 75, 5),
        # Got weaker: left out instead of counted as 0
        make_entry(DEADLIFT_ID, date(2024, 1, 1), 150, 5),
        make_entry(DEADLIFT_ID, date(2024, 2, 1), 140, 5),
    ]
    assert _stats(entries).strength_gain_percent == 35.0


def test_strength_gain_baseline_is_earliest_by_date_not_storage_order():
    entries = [
        make_entry(BENCH_ID, date(2024, 1, 30), 120, 5),
        make_entry(BENCH_ID, date(2024, 1, 1), 100, 5),
    ]
    assert _stats(entries).strength_gain_percent == 20.0


def test_strength_gain_uses_best_weight_not_latest():
    entries = [
        make_entry(BENCH_ID, date(2024, 1, 1), 100, 5),
        make_entry(BENCH_ID, date(2024, 2, 1), 150, 1),
        make_entry(BENCH_ID, date(2024, 3, 1), 110, 5),
    ]
    assert _stats(entries).strength_gain_percent == 50.0


def test_zero_baseline_does_not_contribute():
    entries = [
        make_entry(BENCH_ID, date(2024, 1, 1), 0, 10),
        make_entry(BENCH_ID, date(2024, 2, 1), 20, 10),
    ]
    index = build_index(sample_exercises(), entries)
    assert strength_gain_percent(entries, index) == 0.0


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------


def test_four_consecutive_weeks_ending_this_week():
    counts = _week_counts([date(2024, 6, 11), date(2024, 6, 4), date(2024, 5, 28), date(2024, 5, 21)])
    assert current_streak(counts, NOW) == 4


def test_gap_before_current_week_stops_the_streak():
    counts = _week_counts([date(2024, 6, 11), date(2024, 5, 28), date(2024, 5, 21)])
    assert current_streak(counts, NOW) == 1


def test_current_week_gets_a_grace_period():
    counts = _week_counts([date(2024, 6, 5), date(2024, 5, 29), date(2024, 5, 22)])
    assert current_streak(counts, NOW) == 3


def test_streak_is_zero_after_two_empty_weeks():
    counts = _week_counts([date(2024, 5, 29), date(2024, 5, 22)])
    assert current_streak(counts, NOW) == 0


def test_sunday_and_monday_fall_in_different_weeks():
    # Sunday 2024-06-09 closes week 23, Monday 2024-06-10 opens week 24
    counts = _week_counts([date(2024, 6, 9), date(2024, 6, 10)])
    assert current_streak(counts, NOW) == 2


def test_streak_crosses_year_boundary():
    now = datetime(2024, 1, 3)
    counts = _week_counts([date(2024, 1, 2), date(2023, 12, 27), date(2023, 12, 20)])
    assert current_streak(counts, now) == 3


def test_streak_walk_is_capped_at_52_weeks():
    counts = _week_counts([NOW.date() - timedelta(weeks=i) for i in range(60)])
    assert current_streak(counts, NOW) == 52


def test_longest_streak_finds_best_run():
    days = [
        date(2024, 1, 2), date(2024, 1, 9), date(2024, 1, 16),  # 3 weeks
        date(2024, 3, 5), date(2024, 3, 12),                    # 2 weeks
    ]
    assert longest_streak(_week_counts(days)) == 3


def test_multiple_sessions_in_one_week_count_once_for_streaks():
    counts = _week_counts([date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)])
    assert counts == {(2024, 24): 3}
    assert current_streak(counts, NOW) == 1


# ---------------------------------------------------------------------------
# Top exercises
# ---------------------------------------------------------------------------


def test_top_exercises_by_frequency_with_ties_in_exercise_order():
    entries = (
        [make_entry(DEADLIFT_ID, date(2024, 6, i), 180, 3) for i in range(1, 4)]
        + [make_entry(BENCH_ID, date(2024, 6, i), 100, 5) for i in range(1, 3)]
        + [make_entry(SQUAT_ID, date(2024, 6, i), 140, 5) for i in range(1, 3)]
    )
    top = _stats(entries).top_exercises
    assert [item['name'] for item in top] == ["Deadlift", "Bench Press", "Back Squat"]
    assert [item['entry_count'] for item in top] == [3, 2, 2]


def test_top_exercises_is_limited_to_five():
    exercises = [ExerciseRecord(id=f"{i:024x}", name=f"Exercise {i}") for i in range(1, 8)]
    entries = [make_entry(ex.id, date(2024, 6, 1), 10, 10) for ex in exercises[:6]]
    top = top_exercises(build_index(exercises, entries))
    assert len(top) == 5
    assert top[0]['name'] == "Exercise 1"


def test_unlogged_exercises_fill_the_ranking_in_exercise_order():
    exercises = [ExerciseRecord(id=f"{i:024x}", name=f"Exercise {i}") for i in range(1, 8)]
    entries = [make_entry(exercises[5].id, date(2024, 6, 1), 10, 10)]
    top = top_exercises(build_index(exercises, entries))
    assert [item['name'] for item in top] == [
        "Exercise 6", "Exercise 1", "Exercise 2", "Exercise 3", "Exercise 4",
    ]
    assert [item['entry_count'] for item in top] == [1, 0, 0, 0, 0]


def test_compute_stats_builds_index_when_not_given():
    entries = [make_entry(BENCH_ID, date(2024, 6, 10), 100, 5)]
    stats = compute_stats(sample_exercises(), entries, None, NOW)
    assert stats.top_exercises[0]['exercise_id'] == BENCH_ID


def test_compute_stats_accepts_a_plain_date():
    entries = [make_entry(BENCH_ID, date(2024, 6, 10), 100, 5)]
    assert _stats(entries, now=date(2024, 6, 12)).current_streak == 1
