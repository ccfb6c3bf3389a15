from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from sipal.api.deps import (
    get_achievement_store,
    get_career_store,
    get_status_filter,
    get_student_directory,
)
from sipal.core.config import settings
from sipal.schemas.api import (
    AchievementOut,
    AchievementVerifyIn,
    DashboardOut,
    InsightOut,
    MetricsOut,
)
from sipal.services.achievements import CATEGORY_LABELS, achievement_statistics
from sipal.services.dashboard import (
    achievement_category_chart,
    alumni_buckets,
    career_chart,
    graduate_trend,
    industry_distribution,
    student_statistics,
    students_csv,
    tracer_csv,
    tracer_statistics,
)
from sipal.services.insights import calculate_metrics, generate_insights
from sipal.services.stores import AchievementStore, CareerRecordStore, StudentDirectory

router = APIRouter(prefix="/admin")


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    students = directory.find()
    buckets = alumni_buckets(students, careers.all_snapshots())
    tracer = tracer_statistics(students, buckets)
    achievement_stats = achievement_statistics(achievements.find())
    return {
        "students": student_statistics(students),
        "tracer": tracer,
        "achievements": achievement_stats,
        "career_chart": career_chart(tracer),
        "industry_distribution": industry_distribution(buckets),
        "achievement_categories": achievement_category_chart(
            achievement_stats["by_category"], CATEGORY_LABELS
        ),
        "graduate_trend": graduate_trend(students, buckets, settings.trend_years()),
    }


@router.get("/insights/metrics", response_model=MetricsOut)
def insight_metrics(
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    students = directory.find()
    return calculate_metrics(students, alumni_buckets(students, careers.all_snapshots()))


@router.get("/insights", response_model=InsightOut)
def insights(
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    students = directory.find()
    metrics = calculate_metrics(students, alumni_buckets(students, careers.all_snapshots()))
    return generate_insights(metrics, generated_at=datetime.utcnow())


@router.get("/achievements", response_model=list[AchievementOut])
def list_all_achievements(
    category: Optional[str] = None,
    level: Optional[str] = None,
    year: Optional[int] = None,
    verified: Optional[bool] = None,
    achievements: AchievementStore = Depends(get_achievement_store),
):
    return achievements.find(category=category, level=level, year=year, verified=verified)


@router.put("/achievements/{achievement_id}/verify", response_model=AchievementOut)
def verify_achievement(
    achievement_id: str,
    payload: AchievementVerifyIn,
    achievements: AchievementStore = Depends(get_achievement_store),
):
    return achievements.set_verified(achievement_id, payload.verified)


@router.get("/export/students.csv", response_class=PlainTextResponse)
def export_students(
    search: Optional[str] = None,
    status: Optional[str] = Depends(get_status_filter),
    entry_year: Optional[int] = None,
    graduation_year: Optional[int] = None,
    directory: StudentDirectory = Depends(get_student_directory),
):
    students = directory.find(
        search=search,
        status=status,
        entry_year=entry_year,
        graduation_year=graduation_year,
    )
    return PlainTextResponse(students_csv(students), media_type="text/csv")


@router.get("/export/tracer.csv", response_class=PlainTextResponse)
def export_tracer(
    directory: StudentDirectory = Depends(get_student_directory),
    careers: CareerRecordStore = Depends(get_career_store),
):
    return PlainTextResponse(
        tracer_csv(directory.find(), careers.all_snapshots()),
        media_type="text/csv",
    )
