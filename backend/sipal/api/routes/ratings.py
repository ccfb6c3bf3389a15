from fastapi import APIRouter, Depends

from sipal.api.deps import get_rating_store, get_student_directory
from sipal.schemas.api import GraduateRatingIn, GraduateRatingOut, RatingOptionsOut, RatingStatsOut
from sipal.services.ratings import CATEGORY_LABELS, SCORE_LABELS, SECTOR_LABELS, rating_stats
from sipal.services.stores import RatingStore, StudentDirectory

router = APIRouter()


@router.get("/ratings/options", response_model=RatingOptionsOut)
def rating_options():
    return {
        "scores": SCORE_LABELS,
        "categories": {category.value: label for category, label in CATEGORY_LABELS.items()},
        "industry_sectors": {sector.value: label for sector, label in SECTOR_LABELS.items()},
    }


@router.get("/students/{student_id}/ratings", response_model=list[GraduateRatingOut])
def list_ratings(
    student_id: str,
    directory: StudentDirectory = Depends(get_student_directory),
    ratings: RatingStore = Depends(get_rating_store),
):
    student = directory.require(student_id)
    return ratings.find(student.id)


@router.get("/students/{student_id}/ratings/stats", response_model=RatingStatsOut)
def rating_statistics(
    student_id: str,
    directory: StudentDirectory = Depends(get_student_directory),
    ratings: RatingStore = Depends(get_rating_store),
):
    student = directory.require(student_id)
    return rating_stats(ratings.find(student.id))


@router.post("/students/{student_id}/ratings", response_model=GraduateRatingOut, status_code=201)
def submit_rating(
    student_id: str,
    payload: GraduateRatingIn,
    directory: StudentDirectory = Depends(get_student_directory),
    ratings: RatingStore = Depends(get_rating_store),
):
    student = directory.require(student_id)
    data = payload.model_dump(exclude_none=True)
    data["industry_sector"] = payload.industry_sector.value
    return ratings.append(student, data)
