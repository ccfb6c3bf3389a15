"""Derive a student's displayed career status from their career records.

The status shown on a profile is computed on every request, never stored.
Each call receives an immutable snapshot of records (see ``CareerRecord``)
and returns an ``AggregatedStatus`` without touching any shared state.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from sipal.core.errors import MalformedCareerRecord
from sipal.models.entities import CareerStatus

REQUIRED_FIELDS: dict[CareerStatus, tuple[str, ...]] = {
    CareerStatus.working: ("employer", "position"),
    CareerStatus.searching: ("target_field",),
    CareerStatus.entrepreneur: ("business_name",),
    CareerStatus.studying: ("institution", "level"),
}

# Fields that identify a payload as belonging to one tag only.
SIGNATURE_FIELDS: dict[CareerStatus, frozenset[str]] = {
    CareerStatus.working: frozenset({"employer", "position"}),
    CareerStatus.searching: frozenset({"target_field", "duration_months"}),
    CareerStatus.entrepreneur: frozenset({"business_name", "business_type", "employees"}),
    CareerStatus.studying: frozenset({"institution", "program"}),
}

INTEGER_FIELDS = ("start_year", "end_year", "duration_months", "employees")

INACTIVE_SUFFIX = "no longer active"


def to_utc_naive(value):
    """Aware timestamps become naive UTC; anything else is returned unchanged."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@dataclass(frozen=True)
class CareerRecord:
    record_id: str
    student_id: str
    status: str
    submitted_at: datetime
    payload: Mapping[str, Any]
    is_active: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload or {})))
        object.__setattr__(self, "submitted_at", to_utc_naive(self.submitted_at))

    @classmethod
    def from_row(cls, row) -> "CareerRecord":
        return cls(
            record_id=str(row.id),
            student_id=str(row.student_id),
            status=row.status,
            submitted_at=row.submitted_at,
            payload=row.payload or {},
            is_active=row.is_active,
        )

    def text(self, key: str) -> str | None:
        value = self.payload.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None


@dataclass(frozen=True)
class AggregatedStatus:
    has_active_career: bool
    primary_text: str
    details: tuple[str, ...]


@dataclass(frozen=True)
class CareerBuckets:
    working: tuple[CareerRecord, ...]
    past_working: tuple[CareerRecord, ...]
    entrepreneur: tuple[CareerRecord, ...]
    past_entrepreneur: tuple[CareerRecord, ...]
    studying: tuple[CareerRecord, ...]
    searching: tuple[CareerRecord, ...]

    def current(self) -> tuple[CareerRecord, ...]:
        return self.working + self.entrepreneur + self.studying + self.searching

    def has_current(self) -> bool:
        return bool(self.current())


EMPTY_AGGREGATE = AggregatedStatus(has_active_career=False, primary_text="", details=())


def empty_state_message() -> dict[str, str]:
    return {
        "title": "No current career status yet",
        "body": "Add a career record to build your professional profile.",
        "cta_label": "Add career record",
    }


def _tag(record: CareerRecord) -> CareerStatus:
    try:
        return CareerStatus(record.status)
    except ValueError:
        raise MalformedCareerRecord(
            record.record_id, record.status, "status tag is not recognized"
        ) from None


def validate_record(record: CareerRecord) -> CareerStatus:
    """Check that a record's payload matches its status tag.

    Missing required fields, fields that belong to a different tag and
    non-integer years or counts all raise ``MalformedCareerRecord``.
    """
    tag = _tag(record)
    if not isinstance(record.submitted_at, datetime):
        raise MalformedCareerRecord(
            record.record_id, tag.value, "submitted_at must be a timestamp"
        )
    missing = [name for name in REQUIRED_FIELDS[tag] if record.text(name) is None]
    if missing:
        raise MalformedCareerRecord(
            record.record_id, tag.value, "missing " + ", ".join(missing)
        )

    for other, fields in SIGNATURE_FIELDS.items():
        if other is tag:
            continue
        foreign = sorted(
            name
            for name in fields - SIGNATURE_FIELDS[tag]
            if record.payload.get(name) not in (None, "")
        )
        if foreign:
            raise MalformedCareerRecord(
                record.record_id,
                tag.value,
                f"carries {other.value} fields: " + ", ".join(foreign),
            )

    for name in INTEGER_FIELDS:
        value = record.payload.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedCareerRecord(
                record.record_id, tag.value, f"{name} must be a non-negative integer"
            )
    return tag


def _newest_first(records: Iterable[CareerRecord]) -> tuple[CareerRecord, ...]:
    return tuple(
        sorted(records, key=lambda r: (r.submitted_at, r.record_id), reverse=True)
    )


def partition(records: Iterable[CareerRecord]) -> CareerBuckets:
    buckets: dict[str, list[CareerRecord]] = {
        "working": [],
        "past_working": [],
        "entrepreneur": [],
        "past_entrepreneur": [],
        "studying": [],
        "searching": [],
    }
    for record in records:
        tag = validate_record(record)
        if tag is CareerStatus.working:
            key = "working" if record.is_active is not False else "past_working"
        elif tag is CareerStatus.entrepreneur:
            key = "entrepreneur" if record.is_active is not False else "past_entrepreneur"
        elif tag is CareerStatus.studying:
            key = "studying"
        elif tag is CareerStatus.searching:
            key = "searching"
        else:
            raise MalformedCareerRecord(record.record_id, record.status, "unhandled status tag")
        buckets[key].append(record)
    return CareerBuckets(**{key: _newest_first(values) for key, values in buckets.items()})


def join_phrases(phrases: list[str]) -> str:
    if not phrases:
        return ""
    if len(phrases) == 1:
        return phrases[0]
    return ", ".join(phrases[:-1]) + " and " + phrases[-1]


def format_career_period(start_year: int | None, is_current: bool, end_year: int | None = None) -> str:
    if not start_year:
        return ""
    if is_current:
        return f"{start_year} - present"
    return f"{start_year} - {end_year}" if end_year else f"{start_year}"


def _with_period(text: str, period: str) -> str:
    return f"{text} ({period})" if period else text


def _job(record: CareerRecord) -> str:
    return f"{record.text('position')} at {record.text('employer')}"


def _business(record: CareerRecord) -> str:
    name = record.text("business_name")
    kind = record.text("business_type")
    return f"{name}, {kind}" if kind else name


def _study(record: CareerRecord) -> str:
    program = " ".join(
        part for part in (record.text("level"), record.text("program")) if part
    )
    return f"{program} at {record.text('institution')}"


def _primary_text(buckets: CareerBuckets) -> str:
    clauses: list[str] = []
    if buckets.working:
        clauses.append("working as " + join_phrases([_job(r) for r in buckets.working]))
    if buckets.entrepreneur:
        names = [r.text("business_name") for r in buckets.entrepreneur]
        lead = "running a business " if len(names) == 1 else "running businesses "
        clauses.append(lead + join_phrases(names))
    if buckets.studying:
        clauses.append("studying " + join_phrases([_study(r) for r in buckets.studying]))
    if buckets.searching:
        fields = [r.text("target_field") for r in buckets.searching]
        clauses.append("looking for work in " + join_phrases(fields))
    sentence = join_phrases(clauses)
    return sentence[:1].upper() + sentence[1:]


def _details(buckets: CareerBuckets) -> tuple[str, ...]:
    details: list[str] = []
    for r in buckets.working:
        period = format_career_period(r.payload.get("start_year"), True)
        details.append(_with_period(_job(r), period))
    for r in buckets.entrepreneur:
        text = _business(r)
        employees = r.payload.get("employees")
        if employees:
            text += f", {employees} employee" + ("s" if employees != 1 else "")
        period = format_career_period(r.payload.get("start_year"), True)
        details.append(_with_period(text, period))
    for r in buckets.studying:
        period = format_career_period(r.payload.get("start_year"), True)
        details.append(_with_period(_study(r), period))
    for r in buckets.searching:
        text = f"Looking for roles in {r.text('target_field')}"
        location = r.text("target_location")
        if location:
            text += f" ({location})"
        months = r.payload.get("duration_months")
        if months:
            text += f", searching for {months} month" + ("s" if months != 1 else "")
        details.append(text)
    for r in buckets.past_working:
        period = format_career_period(
            r.payload.get("start_year"), False, r.payload.get("end_year")
        )
        details.append(f"{_with_period(_job(r), period)}, {INACTIVE_SUFFIX}")
    for r in buckets.past_entrepreneur:
        period = format_career_period(
            r.payload.get("start_year"), False, r.payload.get("end_year")
        )
        details.append(f"{_with_period(_business(r), period)}, {INACTIVE_SUFFIX}")
    return tuple(details)


def aggregate(records: Iterable[CareerRecord]) -> AggregatedStatus:
    buckets = partition(records)
    if not buckets.has_current():
        return EMPTY_AGGREGATE
    return AggregatedStatus(
        has_active_career=True,
        primary_text=_primary_text(buckets),
        details=_details(buckets),
    )
