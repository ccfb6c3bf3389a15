from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from sipal.models.entities import (
    Achievement,
    CareerRecordRow,
    EnrollmentStatus,
    GraduateRating,
    Student,
)
from sipal.services.access_gate import coerce_enrollment_status
from sipal.services.career_status import CareerRecord, to_utc_naive, validate_record


class StoreError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class NotFound(StoreError):
    status_code = 404


class Conflict(StoreError):
    status_code = 409


class NotEligible(StoreError):
    status_code = 403


def _as_uuid(value) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class StudentDirectory:
    def __init__(self, db: Session):
        self.db = db

    def find(
        self,
        *,
        search: str | None = None,
        status: str | None = None,
        entry_year: int | None = None,
        graduation_year: int | None = None,
    ) -> list[Student]:
        query = self.db.query(Student)
        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(func.lower(Student.name).like(pattern), Student.nim.like(pattern))
            )
        if status and status != "all":
            query = query.filter(Student.status == coerce_enrollment_status(status).value)
        if entry_year is not None:
            query = query.filter(Student.entry_year == entry_year)
        if graduation_year is not None:
            query = query.filter(Student.graduation_year == graduation_year)
        return query.order_by(Student.nim.asc()).all()

    def get(self, student_id) -> Student | None:
        key = _as_uuid(student_id)
        if key is None:
            return None
        return self.db.get(Student, key)

    def require(self, student_id) -> Student:
        student = self.get(student_id)
        if not student:
            raise NotFound("Student not found")
        return student

    def get_by_nim(self, nim: str) -> Student | None:
        return self.db.query(Student).filter(Student.nim == nim.strip()).one_or_none()

    def enrollment_status(self, student_id) -> EnrollmentStatus:
        return coerce_enrollment_status(self.require(student_id).status)

    def validate_identity(self, name: str, entry_year: int) -> Student | None:
        needle = name.strip().lower()
        candidates = (
            self.db.query(Student)
            .filter(func.lower(Student.name).like(f"%{needle}%"))
            .filter(Student.entry_year == entry_year)
            .order_by(Student.nim.asc())
            .all()
        )
        for student in candidates:
            if student.name.lower() == needle:
                return student
        return candidates[0] if candidates else None

    def create(self, data: dict[str, Any]) -> Student:
        if self.get_by_nim(data["nim"]):
            raise Conflict("A student with this NIM already exists")
        values = dict(data)
        values["status"] = coerce_enrollment_status(values.get("status", "active")).value
        student = Student(**values)
        self.db.add(student)
        self.db.commit()
        self.db.refresh(student)
        return student

    def update(self, student_id, data: dict[str, Any]) -> Student:
        student = self.require(student_id)
        nim = data.get("nim")
        if nim and nim != student.nim and self.get_by_nim(nim):
            raise Conflict("A student with this NIM already exists")
        for key, value in data.items():
            if key == "status":
                value = coerce_enrollment_status(value).value
            setattr(student, key, value)
        student.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(student)
        return student

    def delete(self, student_id) -> None:
        student = self.require(student_id)
        self.db.delete(student)
        self.db.commit()


class CareerRecordStore:
    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        student: Student,
        *,
        status: str,
        payload: dict[str, Any],
        is_active: bool | None = None,
        summary: str | None = None,
        willing_to_be_contacted: bool = True,
        submitted_at: datetime | None = None,
    ) -> CareerRecordRow:
        if coerce_enrollment_status(student.status) is not EnrollmentStatus.alumni:
            raise NotEligible("Only alumni can submit career records")
        row = CareerRecordRow(
            student_id=student.id,
            status=status,
            payload=dict(payload),
            is_active=is_active,
            summary=summary,
            willing_to_be_contacted=willing_to_be_contacted,
            submitted_at=to_utc_naive(submitted_at) or datetime.utcnow(),
        )
        # Reject the submission before it reaches the table.
        validate_record(
            CareerRecord(
                record_id="new",
                student_id=str(student.id),
                status=status,
                submitted_at=row.submitted_at,
                payload=row.payload,
                is_active=is_active,
            )
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def rows(self, student_id) -> list[CareerRecordRow]:
        key = _as_uuid(student_id)
        if key is None:
            return []
        return (
            self.db.query(CareerRecordRow)
            .filter(CareerRecordRow.student_id == key)
            .order_by(CareerRecordRow.submitted_at.desc())
            .all()
        )

    def snapshot(self, student_id) -> tuple[CareerRecord, ...]:
        return tuple(CareerRecord.from_row(row) for row in self.rows(student_id))

    def all_snapshots(self) -> dict[str, tuple[CareerRecord, ...]]:
        grouped: dict[str, list[CareerRecord]] = defaultdict(list)
        for row in self.db.query(CareerRecordRow).all():
            grouped[str(row.student_id)].append(CareerRecord.from_row(row))
        return {key: tuple(values) for key, values in grouped.items()}

    def all_rows(self) -> list[CareerRecordRow]:
        return self.db.query(CareerRecordRow).order_by(CareerRecordRow.submitted_at.asc()).all()


class AchievementStore:
    def __init__(self, db: Session):
        self.db = db

    def find(
        self,
        *,
        student_id=None,
        category: str | None = None,
        year: int | None = None,
        level: str | None = None,
        verified: bool | None = None,
    ) -> list[Achievement]:
        query = self.db.query(Achievement)
        if student_id is not None:
            query = query.filter(Achievement.student_id == _as_uuid(student_id))
        if category and category != "all":
            query = query.filter(Achievement.category == category)
        if level and level != "all":
            query = query.filter(Achievement.level == level)
        if verified is not None:
            query = query.filter(Achievement.verified == verified)
        rows = query.order_by(Achievement.achieved_on.desc(), Achievement.title.asc()).all()
        if year is not None:
            rows = [row for row in rows if row.achieved_on.year == year]
        return rows

    def count_by_student(self) -> dict[str, int]:
        rows = (
            self.db.query(Achievement.student_id, func.count(Achievement.id))
            .group_by(Achievement.student_id)
            .all()
        )
        return {str(student_id): count for student_id, count in rows}

    def get(self, achievement_id) -> Achievement | None:
        key = _as_uuid(achievement_id)
        if key is None:
            return None
        return self.db.get(Achievement, key)

    def require(self, achievement_id) -> Achievement:
        achievement = self.get(achievement_id)
        if not achievement:
            raise NotFound("Achievement not found")
        return achievement

    def create(self, student: Student, data: dict[str, Any]) -> Achievement:
        values = dict(data)
        if isinstance(values.get("achieved_on"), datetime):
            values["achieved_on"] = values["achieved_on"].date()
        achievement = Achievement(student_id=student.id, verified=False, **values)
        self.db.add(achievement)
        self.db.commit()
        self.db.refresh(achievement)
        return achievement

    def set_verified(self, achievement_id, verified: bool) -> Achievement:
        achievement = self.require(achievement_id)
        achievement.verified = verified
        achievement.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(achievement)
        return achievement

    def delete(self, achievement_id) -> None:
        achievement = self.require(achievement_id)
        self.db.delete(achievement)
        self.db.commit()


class RatingStore:
    def __init__(self, db: Session):
        self.db = db

    def append(self, student: Student, data: dict[str, Any]) -> GraduateRating:
        if coerce_enrollment_status(student.status) is not EnrollmentStatus.alumni:
            raise NotEligible("Only alumni can be rated by employers")
        values = dict(data)
        values["submitted_at"] = to_utc_naive(values.get("submitted_at")) or datetime.utcnow()
        rating = GraduateRating(student_id=student.id, **values)
        self.db.add(rating)
        self.db.commit()
        self.db.refresh(rating)
        return rating

    def find(self, student_id) -> list[GraduateRating]:
        key = _as_uuid(student_id)
        if key is None:
            return []
        return (
            self.db.query(GraduateRating)
            .filter(GraduateRating.student_id == key)
            .order_by(GraduateRating.submitted_at.desc())
            .all()
        )
