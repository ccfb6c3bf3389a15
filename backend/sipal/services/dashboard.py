from __future__ import annotations

import csv
import io
import logging
from collections import Counter
from typing import Iterable, Mapping

from sipal.core.errors import MalformedCareerRecord
from sipal.models.entities import CareerStatus, EnrollmentStatus
from sipal.services.career_status import CareerBuckets, CareerRecord, partition

logger = logging.getLogger(__name__)

CAREER_STATUS_LABELS: dict[CareerStatus, str] = {
    CareerStatus.working: "Working",
    CareerStatus.entrepreneur: "Entrepreneur",
    CareerStatus.studying: "Further study",
    CareerStatus.searching: "Searching for work",
}

CAREER_STATUS_COLORS: dict[CareerStatus, str] = {
    CareerStatus.working: "hsl(var(--primary))",
    CareerStatus.entrepreneur: "hsl(var(--success))",
    CareerStatus.studying: "hsl(var(--info))",
    CareerStatus.searching: "hsl(var(--warning))",
}


def alumni_buckets(
    students: Iterable, snapshots: Mapping[str, tuple[CareerRecord, ...]]
) -> dict[str, CareerBuckets]:
    """Partition each responding alumnus' records.

    Students whose records fail validation are logged and left out so one bad
    row does not blank the whole dashboard.
    """
    result: dict[str, CareerBuckets] = {}
    for student in students:
        if student.status != EnrollmentStatus.alumni.value:
            continue
        records = snapshots.get(str(student.id))
        if not records:
            continue
        try:
            result[str(student.id)] = partition(records)
        except MalformedCareerRecord:
            logger.exception("Skipping career records of student %s", student.id)
    return result


def student_statistics(students: Iterable) -> dict[str, int]:
    counts = Counter(student.status for student in students)
    return {
        "total": sum(counts.values()),
        "active": counts.get(EnrollmentStatus.active.value, 0),
        "on_leave": counts.get(EnrollmentStatus.on_leave.value, 0),
        "dropout": counts.get(EnrollmentStatus.dropout.value, 0),
        "alumni": counts.get(EnrollmentStatus.alumni.value, 0),
    }


def tracer_statistics(students: Iterable, buckets: Mapping[str, CareerBuckets]) -> dict:
    total_alumni = sum(1 for s in students if s.status == EnrollmentStatus.alumni.value)
    responded = len(buckets)
    return {
        "total_alumni": total_alumni,
        "responded": responded,
        "response_rate": round(responded / total_alumni * 100, 1) if total_alumni else 0.0,
        "working": sum(1 for b in buckets.values() if b.working),
        "searching": sum(1 for b in buckets.values() if b.searching),
        "entrepreneur": sum(1 for b in buckets.values() if b.entrepreneur),
        "studying": sum(1 for b in buckets.values() if b.studying),
    }


def career_chart(tracer_stats: Mapping) -> list[dict]:
    order = (
        CareerStatus.working,
        CareerStatus.entrepreneur,
        CareerStatus.studying,
        CareerStatus.searching,
    )
    return [
        {
            "name": CAREER_STATUS_LABELS[status],
            "value": tracer_stats[status.value],
            "color": CAREER_STATUS_COLORS[status],
        }
        for status in order
    ]


def _ranked(counter: Counter, limit: int | None = None) -> list[dict]:
    ordered = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    if limit is not None:
        ordered = ordered[:limit]
    return [{"name": name, "value": value} for name, value in ordered]


def industry_distribution(buckets: Mapping[str, CareerBuckets], limit: int = 5) -> list[dict]:
    counter: Counter = Counter()
    for student_buckets in buckets.values():
        for record in student_buckets.working:
            industry = record.text("industry")
            if industry:
                counter[industry] += 1
    return _ranked(counter, limit)


def achievement_category_chart(by_category: Mapping[str, int], labels: Mapping) -> list[dict]:
    points = [
        {"name": labels[category], "value": by_category.get(category.value, 0)}
        for category in labels
        if by_category.get(category.value, 0) > 0
    ]
    return sorted(points, key=lambda point: -point["value"])


def graduate_trend(
    students: Iterable, buckets: Mapping[str, CareerBuckets], years: Iterable[int]
) -> list[dict]:
    graduates: dict[int, list[CareerBuckets]] = {year: [] for year in years}
    for student in students:
        if student.graduation_year in graduates and str(student.id) in buckets:
            graduates[student.graduation_year].append(buckets[str(student.id)])
    return [
        {
            "year": str(year),
            "working": sum(1 for b in rows if b.working),
            "entrepreneur": sum(1 for b in rows if b.entrepreneur),
            "studying": sum(1 for b in rows if b.studying),
        }
        for year, rows in graduates.items()
    ]


def _to_csv(headers: list[str], rows: Iterable[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["-" if value in (None, "") else value for value in row])
    return buffer.getvalue()


def students_csv(students: Iterable) -> str:
    headers = ["Name", "NIM", "Status", "Entry Year", "Graduation Year", "Email", "Phone"]
    return _to_csv(
        headers,
        (
            [s.name, s.nim, s.status, s.entry_year, s.graduation_year, s.email, s.phone]
            for s in students
        ),
    )


def _record_entity(record: CareerRecord) -> tuple[str | None, str | None]:
    tag = record.status
    if tag == CareerStatus.working.value:
        return record.text("employer"), record.text("industry")
    if tag == CareerStatus.entrepreneur.value:
        return record.text("business_name"), record.text("business_type")
    if tag == CareerStatus.studying.value:
        return record.text("institution"), record.text("program")
    if tag == CareerStatus.searching.value:
        return None, record.text("target_field")
    return None, None


def tracer_csv(students: Iterable, snapshots: Mapping[str, tuple[CareerRecord, ...]]) -> str:
    headers = [
        "Name",
        "NIM",
        "Graduation Year",
        "Career Status",
        "Company/Business/Institution",
        "Field",
        "Active",
        "Submitted At",
    ]
    rows = []
    for student in students:
        if student.status != EnrollmentStatus.alumni.value:
            continue
        ordered = sorted(
            snapshots.get(str(student.id), ()),
            key=lambda r: (r.submitted_at, r.record_id),
        )
        for record in ordered:
            try:
                label = CAREER_STATUS_LABELS[CareerStatus(record.status)]
            except ValueError:
                label = record.status
            entity, field = _record_entity(record)
            rows.append(
                [
                    student.name,
                    student.nim,
                    student.graduation_year,
                    label,
                    entity,
                    field,
                    "no" if record.is_active is False else "yes",
                    record.submitted_at.isoformat(),
                ]
            )
    return _to_csv(headers, rows)
