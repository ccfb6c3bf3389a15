from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from sipal.core.database import SessionLocal
from sipal.core.errors import InvalidEnrollmentStatus
from sipal.services.access_gate import coerce_enrollment_status
from sipal.services.stores import AchievementStore, CareerRecordStore, RatingStore, StudentDirectory


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_student_directory(db: Session = Depends(get_db)) -> StudentDirectory:
    return StudentDirectory(db)


def get_career_store(db: Session = Depends(get_db)) -> CareerRecordStore:
    return CareerRecordStore(db)


def get_achievement_store(db: Session = Depends(get_db)) -> AchievementStore:
    return AchievementStore(db)


def get_rating_store(db: Session = Depends(get_db)) -> RatingStore:
    return RatingStore(db)


def get_status_filter(status: Optional[str] = None) -> Optional[str]:
    """Query parameter for list filters; ``all`` or nothing means no filter."""
    if status and status != "all":
        try:
            coerce_enrollment_status(status)
        except InvalidEnrollmentStatus:
            raise HTTPException(status_code=422, detail=f"Unknown status filter: {status}") from None
    return status
