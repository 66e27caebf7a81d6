"""
sakhi_api.prediction

Menstrual cycle length prediction.

Responsibilities:
- Average the day gaps between consecutive period start dates.
- Project the next period start from the most recent one.
- Report "not enough history" as a normal result, not an error.

Rounding:
- The mean gap is rounded half-up (floor(mean + 1/2)) using exact rational
  arithmetic, so 28.5 -> 29 and -2.5 -> -2.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from fractions import Fraction
from typing import Final


class InsufficientData(enum.Enum):
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


INSUFFICIENT_DATA: Final = InsufficientData.INSUFFICIENT_DATA


@dataclass(frozen=True, slots=True)
class CyclePrediction:
    average_cycle_length_days: int
    last_period_start: date
    predicted_next_period: date


def to_utc_date(value: date | datetime) -> date:
    # datetime is a subclass of date, so check it first. Naive datetimes are taken as UTC.
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    return value


def round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def predict(start_dates: Sequence[date | datetime]) -> CyclePrediction | InsufficientData:
    """
    Predict the next period start from start dates in chronological order.

    Order is taken as given; duplicate or out-of-order entries just produce
    zero or negative gaps.
    """

    if len(start_dates) < 2:
        return INSUFFICIENT_DATA

    days = [to_utc_date(d) for d in start_dates]
    gaps = [(curr - prev).days for prev, curr in zip(days, days[1:])]
    average = round_half_up(Fraction(sum(gaps), len(gaps)))

    last = days[-1]
    return CyclePrediction(
        average_cycle_length_days=average,
        last_period_start=last,
        predicted_next_period=last + timedelta(days=average),
    )
