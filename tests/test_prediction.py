"""
tests.test_prediction

Cycle prediction: insufficient history, averaging, rounding and date normalization.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from fractions import Fraction

import pytest

from sakhi_api.prediction import (
    INSUFFICIENT_DATA,
    CyclePrediction,
    predict,
    round_half_up,
    to_utc_date,
)


def test_no_history_is_insufficient() -> None:
    assert predict([]) is INSUFFICIENT_DATA


def test_single_log_is_insufficient() -> None:
    assert predict([date(2024, 1, 1)]) is INSUFFICIENT_DATA


def test_regular_cycles() -> None:
    result = predict([date(2024, 1, 1), date(2024, 1, 29), date(2024, 2, 26)])
    assert result == CyclePrediction(
        average_cycle_length_days=28,
        last_period_start=date(2024, 2, 26),
        predicted_next_period=date(2024, 3, 25),
    )


def test_irregular_cycles_are_averaged() -> None:
    # gaps 25, 35, 30 -> 30
    result = predict([date(2024, 1, 1), date(2024, 1, 26), date(2024, 3, 1), date(2024, 3, 31)])
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == 30
    assert result.predicted_next_period == date(2024, 4, 30)


def test_half_day_mean_rounds_up() -> None:
    # gaps 28 and 29 -> 28.5 -> 29
    result = predict([date(2024, 1, 1), date(2024, 1, 29), date(2024, 2, 27)])
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == 29
    assert result.predicted_next_period == date(2024, 2, 27) + timedelta(days=29)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Fraction(57, 2), 29),
        (Fraction(55, 2), 28),
        (Fraction(85, 3), 28),
        (Fraction(86, 3), 29),
        (Fraction(-5, 2), -2),
        (Fraction(0), 0),
    ],
)
def test_round_half_up(value: Fraction, expected: int) -> None:
    assert round_half_up(value) == expected


def test_duplicate_dates_are_tolerated() -> None:
    # gaps 0 and 28 -> 14
    result = predict([date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 29)])
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == 14


def test_out_of_order_dates_are_taken_as_given() -> None:
    # single gap of -28 days
    result = predict([date(2024, 1, 29), date(2024, 1, 1)])
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == -28
    assert result.last_period_start == date(2024, 1, 1)


def test_time_of_day_is_ignored() -> None:
    result = predict(
        [
            datetime(2024, 1, 1, 23, 30, tzinfo=UTC),
            datetime(2024, 1, 29, 0, 15, tzinfo=UTC),
        ]
    )
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == 28


def test_offsets_are_normalized_to_utc_days() -> None:
    # 2024-03-10T01:00+05:00 is still 2024-03-09 in UTC.
    plus_five = timezone(timedelta(hours=5))
    assert to_utc_date(datetime(2024, 3, 10, 1, 0, tzinfo=plus_five)) == date(2024, 3, 9)
    assert to_utc_date(datetime(2024, 3, 10, 1, 0)) == date(2024, 3, 10)
    assert to_utc_date(date(2024, 3, 10)) == date(2024, 3, 10)

    result = predict(
        [
            datetime(2024, 2, 11, 1, 0, tzinfo=plus_five),
            datetime(2024, 3, 10, 1, 0, tzinfo=plus_five),
        ]
    )
    assert isinstance(result, CyclePrediction)
    assert result.average_cycle_length_days == 28
    assert result.last_period_start == date(2024, 3, 9)
