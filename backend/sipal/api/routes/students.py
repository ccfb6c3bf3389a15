import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from sipal.api.deps import (
    get_achievement_store,
    get_career_store,
    get_status_filter,
    get_student_directory,
)
from sipal.core.errors import MalformedCareerRecord
from sipal.models.entities import EnrollmentStatus
from sipal.schemas.api import IdentityCheckIn, StudentIn, StudentOut, StudentSummaryOut, StudentUpdateIn
from sipal.services.career_status import aggregate
from sipal.services.stores import AchievementStore, CareerRecordStore, StudentDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students")
CLEARABLE_FIELDS = {"graduation_year", "email", "phone", "address"}


@router.get("", response_model=list[StudentSummaryOut])
def list_students(
    search: Optional[str] = None,
    status: Optional[str] = Depends(get_status_filter),
    entry_year: Optional[int] = None,
    graduation_year: Optional[int] = None,
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    students = directory.find(
        search=search,
        status=status,
        entry_year=entry_year,
        graduation_year=graduation_year,
    )
    snapshots = careers.all_snapshots()
    achievement_counts = achievements.count_by_student()
    results = []
    for student in students:
        records = snapshots.get(str(student.id), ())
        career_summary = None
        if student.status == EnrollmentStatus.alumni.value and records:
            try:
                career_summary = aggregate(records).primary_text or None
            except MalformedCareerRecord:
                logger.exception("Career summary failed for student %s", student.id)
        results.append(
            {
                "id": student.id,
                "nim": student.nim,
                "name": student.name,
                "status": student.status,
                "entry_year": student.entry_year,
                "graduation_year": student.graduation_year,
                "has_career_records": bool(records) and student.status == EnrollmentStatus.alumni.value,
                "achievement_count": achievement_counts.get(str(student.id), 0),
                "career_summary": career_summary,
            }
        )
    return results


@router.post("", response_model=StudentOut, status_code=201)
def create_student(
    payload: StudentIn,
    directory: StudentDirectory = Depends(get_student_directory),
):
    data = payload.model_dump(exclude_none=True)
    data["status"] = payload.status.value
    return directory.create(data)


@router.post("/validate", response_model=StudentOut)
def validate_student(
    payload: IdentityCheckIn,
    directory: StudentDirectory = Depends(get_student_directory),
):
    student = directory.validate_identity(payload.name, payload.entry_year)
    if not student:
        raise HTTPException(status_code=404, detail="No student matches this name and entry year")
    return student


@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: str, directory: StudentDirectory = Depends(get_student_directory)):
    return directory.require(student_id)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    student_id: str,
    payload: StudentUpdateIn,
    directory: StudentDirectory = Depends(get_student_directory),
):
    data = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key in CLEARABLE_FIELDS
    }
    if "status" in data:
        data["status"] = data["status"].value
    return directory.update(student_id, data)


@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: str, directory: StudentDirectory = Depends(get_student_directory)):
    directory.delete(student_id)
