from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from sipal.api.deps import get_career_store, get_student_directory
from sipal.schemas.api import CareerRecordIn, CareerRecordOut, CareerViewOut
from sipal.services.access_gate import can_show_career, coerce_enrollment_status, locked_message
from sipal.services.career_status import aggregate, empty_state_message
from sipal.services.stores import CareerRecordStore, StudentDirectory

router = APIRouter(prefix="/students/{student_id}/career")


@router.get("", response_model=CareerViewOut)
def career_view(
    student_id: str,
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    student = directory.require(student_id)
    status = coerce_enrollment_status(student.status)
    if not can_show_career(status):
        return {
            "student_id": student.id,
            "enrollment_status": status.value,
            "visible": False,
            "locked": asdict(locked_message(status)),
        }

    aggregated = aggregate(careers.snapshot(student.id))
    return {
        "student_id": student.id,
        "enrollment_status": status.value,
        "visible": True,
        "status": {
            "has_active_career": aggregated.has_active_career,
            "primary_text": aggregated.primary_text,
            "details": list(aggregated.details),
        },
        "empty_state": None if aggregated.has_active_career else empty_state_message(),
    }


@router.get("/records", response_model=list[CareerRecordOut])
def list_career_records(
    student_id: str,
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    student = directory.require(student_id)
    if not can_show_career(student.status):
        raise HTTPException(status_code=403, detail=asdict(locked_message(student.status)))
    return careers.rows(student.id)


@router.post("/records", response_model=CareerRecordOut, status_code=201)
def submit_career_record(
    student_id: str,
    payload: CareerRecordIn,
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    student = directory.require(student_id)
    return careers.append(
        student,
        status=payload.status.value,
        payload=payload.payload,
        is_active=payload.is_active,
        summary=payload.summary,
        willing_to_be_contacted=payload.willing_to_be_contacted,
        submitted_at=payload.submitted_at,
    )
