from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from sipal.api.deps import get_achievement_store, get_student_directory
from sipal.schemas.api import AchievementIn, AchievementOut
from sipal.services.access_gate import can_log_achievements
from sipal.services.achievements import category_counts, subcategory_matches
from sipal.services.stores import AchievementStore, StudentDirectory

router = APIRouter()


@router.get("/students/{student_id}/achievements", response_model=list[AchievementOut])
def list_achievements(
    student_id: str,
    category: Optional[str] = None,
    directory: StudentDirectory = Depends(get_student_directory),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    student = directory.require(student_id)
    return achievements.find(student_id=student.id, category=category)


@router.get("/students/{student_id}/achievements/stats", response_model=dict[str, int])
def achievement_counts(
    student_id: str,
    directory: StudentDirectory = Depends(get_student_directory),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    student = directory.require(student_id)
    return category_counts(achievements.find(student_id=student.id))


@router.post("/students/{student_id}/achievements", response_model=AchievementOut, status_code=201)
def log_achievement(
    student_id: str,
    payload: AchievementIn,
    directory: StudentDirectory = Depends(get_student_directory),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    student = directory.require(student_id)
    if not can_log_achievements(student.status):
        raise HTTPException(status_code=403, detail="Achievements are read-only for former students")
    if not subcategory_matches(payload.category.value, payload.subcategory):
        raise HTTPException(status_code=422, detail="Subcategory does not belong to this category")

    data = payload.model_dump(exclude_none=True)
    data["category"] = payload.category.value
    if payload.level is not None:
        data["level"] = payload.level.value
    return achievements.create(student, data)


@router.delete("/achievements/{achievement_id}", status_code=204)
def delete_achievement(
    achievement_id: str,
    achievements: AchievementStore = Depends(get_achievement_store),
):
    achievements.delete(achievement_id)
