"""
Unit tests for services/aggregation.py
"""

from datetime import date

from services import build_index, search_exercises
from tests.fakes import (
    BENCH_ID,
    SQUAT_ID,
    DEADLIFT_ID,
    UNKNOWN_ID,
    make_entry,
    sample_exercises,
)


def test_groups_entries_by_exercise_newest_first():
    old = make_entry(BENCH_ID, date(2024, 5, 1), 100, 5)
    new = make_entry(BENCH_ID, date(2024, 6, 1), 105, 3)
    squat = make_entry(SQUAT_ID, date(2024, 5, 15), 140, 5)

    index = build_index(sample_exercises(), [old, squat, new])

    assert index[BENCH_ID].sorted_entries == [new, old]
    assert index[BENCH_ID].last_entry is new
    assert index[SQUAT_ID].sorted_entries == [squat]


def test_index_keeps_exercise_order():
    index = build_index(sample_exercises(), [])
    assert list(index) == [BENCH_ID, SQUAT_ID, DEADLIFT_ID]


def test_best_weight_and_reps_are_independent_maxima():
    entries = [
        make_entry(BENCH_ID, date(2024, 5, 1), 100, 5),
        make_entry(BENCH_ID, date(2024, 5, 8), 80, 12),
    ]
    aggregate = build_index(sample_exercises(), entries)[BENCH_ID]
    assert aggregate.best_weight == 100
    assert aggregate.best_reps == 12


def test_empty_group_has_no_bests():
    aggregate = build_index(sample_exercises(), [])[DEADLIFT_ID]
    assert aggregate.sorted_entries == []
    assert aggregate.best_weight is None
    assert aggregate.best_reps is None
    assert aggregate.last_entry is None
    assert aggregate.best_estimated_1rm is None


def test_zero_weight_entry_is_a_best_of_zero_not_none():
    aggregate = build_index(sample_exercises(), [make_entry(BENCH_ID, date(2024, 5, 1), 0, 10)])[BENCH_ID]
    assert aggregate.best_weight == 0


def test_same_day_entries_keep_original_order():
    first = make_entry(BENCH_ID, date(2024, 5, 1), 100, 5)
    second = make_entry(BENCH_ID, date(2024, 5, 1), 90, 8)
    aggregate = build_index(sample_exercises(), [first, second])[BENCH_ID]
    assert aggregate.sorted_entries == [first, second]


def test_unparseable_dates_sort_as_oldest():
    garbled = make_entry(BENCH_ID, "someday", 120, 1)
    dated = make_entry(BENCH_ID, date(2024, 5, 1), 100, 5)
    aggregate = build_index(sample_exercises(), [garbled, dated])[BENCH_ID]
    assert aggregate.sorted_entries == [dated, garbled]
    assert aggregate.best_weight == 120


def test_unresolvable_entries_are_left_out():
    entries = [
        make_entry(UNKNOWN_ID, date(2024, 5, 1), 200, 1),
        make_entry(None, date(2024, 5, 1), 200, 1),
        make_entry(BENCH_ID, date(2024, 5, 1), 100, 5),
    ]
    index = build_index(sample_exercises(), entries)
    assert UNKNOWN_ID not in index
    assert sum(agg.entry_count for agg in index.values()) == 1


def test_best_estimated_1rm_uses_epley():
    aggregate = build_index(sample_exercises(), [make_entry(BENCH_ID, date(2024, 5, 1), 100, 5)])[BENCH_ID]
    assert aggregate.best_estimated_1rm == 116.7


def test_estimated_1rm_with_another_formula():
    aggregate = build_index(sample_exercises(), [make_entry(BENCH_ID, date(2024, 5, 1), 100, 10)])[BENCH_ID]
    assert aggregate.estimated_1rm('brzycki') == 133.3
    assert aggregate.summary('brzycki')['best_estimated_1rm'] == 133.3
    assert aggregate.summary('brzycki')['one_rep_max_formula'] == 'brzycki'


def test_summary_shape():
    entry = make_entry(BENCH_ID, date(2024, 5, 1), 100, 5)
    summary = build_index(sample_exercises(), [entry])[BENCH_ID].summary()
    assert summary['name'] == "Bench Press"
    assert summary['entry_count'] == 1
    assert summary['last_entry']['id'] == entry.id


def test_search_is_case_insensitive_substring():
    index = build_index(sample_exercises(), [])
    assert [agg.exercise.name for agg in search_exercises(index, "PRESS")] == ["Bench Press"]
    assert [agg.exercise.name for agg in search_exercises(index, "  lift ")] == ["Deadlift"]
    assert len(search_exercises(index, "")) == 3
    assert len(search_exercises(index, None)) == 3
    assert search_exercises(index, "curl") == []
