"""
sakhi_api.api.models

Shared request/response model pieces.

Responsibilities:
- camelCase JSON on the wire (snake_case also accepted on input).
- Build responses directly from ORM instances.
- Normalize incoming timestamps: calendar dates on UTC days, datetimes as naive UTC.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from sakhi_api.prediction import to_utc_date


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    message: str


def _calendar_day(value: Any) -> Any:
    # Clients may send a full ISO timestamp for a day; keep only its UTC calendar date.
    if isinstance(value, str) and "T" in value:
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        return to_utc_date(value)
    return value


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


CalendarDate = Annotated[date, BeforeValidator(_calendar_day)]
UtcDateTime = Annotated[datetime, AfterValidator(_naive_utc)]


def _reject_null(value: Any) -> Any:
    # For partial updates: a field may be omitted, but not cleared when the column is required.
    if value is None:
        raise ValueError("field may be omitted but not null")
    return value


NotNull = AfterValidator(_reject_null)
