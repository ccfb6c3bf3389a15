"""Visibility rules that depend only on a student's enrollment status."""
from __future__ import annotations

from dataclasses import dataclass

from sipal.core.config import settings
from sipal.core.errors import InvalidEnrollmentStatus
from sipal.models.entities import EnrollmentStatus


@dataclass(frozen=True)
class LockedMessage:
    title: str
    body: str


STATUS_LABELS: dict[EnrollmentStatus, str] = {
    EnrollmentStatus.alumni: "Alumni",
    EnrollmentStatus.active: "Active student",
    EnrollmentStatus.on_leave: "Student on leave",
    EnrollmentStatus.dropout: "Former student",
}


def coerce_enrollment_status(value) -> EnrollmentStatus:
    if isinstance(value, EnrollmentStatus):
        return value
    try:
        return EnrollmentStatus(value)
    except ValueError:
        raise InvalidEnrollmentStatus(value) from None


def can_show_career(enrollment_status) -> bool:
    return coerce_enrollment_status(enrollment_status) is EnrollmentStatus.alumni


def can_log_achievements(enrollment_status) -> bool:
    # Former students keep their achievements, read-only.
    return coerce_enrollment_status(enrollment_status) is not EnrollmentStatus.dropout


def locked_message(enrollment_status) -> LockedMessage:
    status = coerce_enrollment_status(enrollment_status)
    institution = settings.institution_name
    if status is EnrollmentStatus.alumni:
        return LockedMessage(
            title="Career history is available",
            body="Add career records to build your professional profile.",
        )
    if status is EnrollmentStatus.active:
        return LockedMessage(
            title="You are currently an active student",
            body=(
                f"Career history opens once you graduate from {institution}. "
                "Until then you can keep logging your achievements."
            ),
        )
    if status is EnrollmentStatus.on_leave:
        return LockedMessage(
            title="You are currently on academic leave",
            body=(
                "Career history is reserved for alumni. Resume your studies and "
                "graduate to start building your career profile."
            ),
        )
    if status is EnrollmentStatus.dropout:
        return LockedMessage(
            title="You are no longer enrolled",
            body=(
                f"Career history is only kept for alumni of {institution}. "
                "Achievements you logged earlier remain visible as read-only."
            ),
        )
    raise InvalidEnrollmentStatus(enrollment_status)
