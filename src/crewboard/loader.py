"""Loading board input collections from JSON.

The engine consumes already-typed collections. This module is the
boundary that validates a JSON document of raw rows with pydantic and
turns each row into its domain record. Row keys may be camelCase or
snake_case.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from crewboard.domain.models import (
    Booking,
    InputError,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)


class _Row(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


def _clock(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value is not None else None


class WorkerRow(_Row):
    """A worker row."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    region: Optional[str] = Field(
        None, validation_alias=AliasChoices("region", "workerState", "worker_state")
    )
    is_active: bool = True

    def to_domain(self) -> Worker:
        return Worker(
            id=self.id,
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            region=self.region,
            is_active=self.is_active,
        )


class ScheduleRow(_Row):
    """A recurring schedule row. Weekdays run Sunday=0 to Saturday=6."""

    worker_id: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_active: bool = True

    def to_domain(self) -> RecurringScheduleEntry:
        return RecurringScheduleEntry(
            worker_id=self.worker_id,
            day_of_week=self.day_of_week,
            start_time=_clock(self.start_time),
            end_time=_clock(self.end_time),
            is_active=self.is_active,
        )


class UnavailabilityRow(_Row):
    """An unavailability range row."""

    worker_id: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    notes: Optional[str] = None

    def to_domain(self) -> UnavailabilityRange:
        return UnavailabilityRange(
            worker_id=self.worker_id,
            start_date=self.start_date,
            end_date=self.end_date,
            reason=self.reason,
            notes=self.notes,
        )


class OverrideRow(_Row):
    """A seasonal override row."""

    worker_id: str
    override_date: date = Field(
        validation_alias=AliasChoices("date", "overrideDate", "override_date")
    )
    tokens: Optional[list[str]] = Field(
        None, validation_alias=AliasChoices("tokens", "periods")
    )

    def to_domain(self) -> SeasonalOverride:
        return SeasonalOverride(
            worker_id=self.worker_id,
            override_date=self.override_date,
            tokens=list(self.tokens or []),
        )


class BookingRow(_Row):
    """A booking row."""

    id: Optional[str] = None
    start_time: datetime
    end_time: datetime
    worker_ids: Optional[list[str]] = None

    @model_validator(mode="after")
    def validate_timezones(self):
        if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
            raise ValueError("startTime and endTime must both carry a timezone or neither")
        return self

    def to_domain(self) -> Booking:
        return Booking(
            start_time=self.start_time,
            end_time=self.end_time,
            worker_ids=list(self.worker_ids or []),
            id=self.id,
        )


@dataclass
class BoardInput:
    """All collections needed for one computation pass."""

    workers: list[Worker] = field(default_factory=list)
    schedules: list[RecurringScheduleEntry] = field(default_factory=list)
    unavailability: list[UnavailabilityRange] = field(default_factory=list)
    overrides: list[SeasonalOverride] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)

    def as_args(self) -> tuple:
        """Positional arguments for BoardAssembler.assemble."""
        return (
            self.workers,
            self.schedules,
            self.unavailability,
            self.overrides,
            self.bookings,
        )


def _describe(error: ValidationError) -> str:
    """Flatten pydantic errors into "field: message" pairs."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)


def _parse_rows(
    data: dict[str, Any],
    collection: str,
    row_model: type[_Row],
    *keys: str,
) -> list:
    rows = None
    for key in (collection, *keys):
        if key in data:
            rows = data[key]
            break
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise InputError(collection, "expected a list of rows")

    parsed = []
    for i, row in enumerate(rows):
        try:
            parsed.append(row_model.model_validate(row).to_domain())
        except ValidationError as e:
            raise InputError(collection, _describe(e), index=i) from e
    return parsed


def parse_input(data: dict[str, Any]) -> BoardInput:
    """Convert a dict of raw row lists into typed collections.

    Missing collections are treated as empty.

    Raises:
        InputError: If a row is malformed.
    """
    return BoardInput(
        workers=_parse_rows(data, "workers", WorkerRow),
        schedules=_parse_rows(data, "schedules", ScheduleRow, "recurringSchedules"),
        unavailability=_parse_rows(
            data, "unavailability", UnavailabilityRow, "unavailabilityRanges"
        ),
        overrides=_parse_rows(
            data, "seasonalOverrides", OverrideRow, "seasonal_overrides"
        ),
        bookings=_parse_rows(data, "bookings", BookingRow),
    )


def load_input(path: Union[str, Path]) -> BoardInput:
    """Load a JSON input document from disk.

    Raises:
        InputError: If the file is not a JSON object or a row is malformed.
    """
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise InputError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(data, dict):
        raise InputError(str(path), "expected a JSON object at the top level")
    return parse_input(data)
