"""
Tests for summary statistics in `bp_tracker/utils/statistics.py`.
"""

from datetime import datetime

from hypothesis import given
from hypothesis import strategies as st

from bp_tracker.models.reading import Reading
from bp_tracker.utils.statistics import round_half_up, summarize


def _reading(systolic: int, diastolic: int, heart_rate: int) -> Reading:
    return Reading(
        timestamp=datetime(2024, 1, 1, 9, 0, 0),
        systolic=systolic,
        diastolic=diastolic,
        heart_rate=heart_rate,
    )


readings_strategy = st.lists(
    st.builds(
        _reading,
        st.integers(min_value=70, max_value=250),
        st.integers(min_value=40, max_value=150),
        st.integers(min_value=30, max_value=200),
    ),
    min_size=1,
    max_size=30,
)


def test_empty_collection_signals_no_data() -> None:
    assert summarize([]) is None
    assert summarize(iter(())) is None


def test_reference_summary() -> None:
    summary = summarize([_reading(120, 80, 70), _reading(130, 85, 75), _reading(110, 70, 65)])

    assert summary.count == 3

    assert summary.systolic.average == 120
    assert summary.systolic.rounded_average == 120
    assert summary.systolic.minimum == 110
    assert summary.systolic.maximum == 130

    assert round(summary.diastolic.average, 2) == 78.33
    assert summary.diastolic.rounded_average == 78
    assert summary.diastolic.minimum == 70
    assert summary.diastolic.maximum == 85

    assert summary.heart_rate.rounded_average == 70
    assert summary.heart_rate.minimum == 65
    assert summary.heart_rate.maximum == 75


def test_single_reading() -> None:
    summary = summarize([_reading(140, 90, 60)])
    assert summary.count == 1
    assert summary.systolic.minimum == summary.systolic.maximum == 140


def test_average_rounds_half_up() -> None:
    summary = summarize([_reading(121, 80, 61), _reading(120, 81, 60)])

    assert summary.systolic.average == 120.5
    assert summary.systolic.rounded_average == 121
    assert summary.heart_rate.rounded_average == 61


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(78.333) == 78


def test_to_dict_payload() -> None:
    summary = summarize([_reading(120, 80, 70), _reading(130, 90, 80)])

    assert summary.to_dict() == {
        'total': 2,
        'avg_systolic': 125.0,
        'min_systolic': 120,
        'max_systolic': 130,
        'avg_diastolic': 85.0,
        'min_diastolic': 80,
        'max_diastolic': 90,
        'avg_heart_rate': 75.0,
        'min_heart_rate': 70,
        'max_heart_rate': 80,
    }


@given(readings=readings_strategy, data=st.data())
def test_order_does_not_change_summary(readings, data) -> None:
    shuffled = data.draw(st.permutations(readings))
    first = summarize(readings)
    second = summarize(shuffled)

    assert first.count == second.count
    for name in ('systolic', 'diastolic', 'heart_rate'):
        a, b = getattr(first, name), getattr(second, name)
        assert (a.minimum, a.maximum, a.rounded_average) == (b.minimum, b.maximum, b.rounded_average)
        assert abs(a.average - b.average) < 1e-9


@given(readings=readings_strategy)
def test_repeated_calls_are_identical(readings) -> None:
    assert summarize(readings) == summarize(readings)


@given(readings=readings_strategy)
def test_bounds_bracket_average(readings) -> None:
    summary = summarize(readings)
    assert summary.count == len(readings)
    for name in ('systolic', 'diastolic', 'heart_rate'):
        metric = getattr(summary, name)
        assert metric.minimum <= metric.average <= metric.maximum
