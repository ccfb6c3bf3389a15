from pydantic import BaseModel, Field
from uuid import UUID
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sipal.models.entities import (
    AchievementCategory,
    AchievementLevel,
    CareerStatus,
    EnrollmentStatus,
    IndustrySector,
)


class StudentIn(BaseModel):
    nim: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=160)
    status: EnrollmentStatus = EnrollmentStatus.active
    entry_year: int = Field(ge=1950, le=2100)
    graduation_year: Optional[int] = Field(default=None, ge=1950, le=2100)
    department: Optional[str] = None
    study_program: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class StudentUpdateIn(BaseModel):
    nim: Optional[str] = Field(default=None, min_length=1, max_length=20)
    name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    status: Optional[EnrollmentStatus] = None
    entry_year: Optional[int] = Field(default=None, ge=1950, le=2100)
    graduation_year: Optional[int] = Field(default=None, ge=1950, le=2100)
    department: Optional[str] = None
    study_program: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class StudentOut(BaseModel):
    id: UUID
    nim: str
    name: str
    department: str
    study_program: str
    status: str
    entry_year: int
    graduation_year: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class StudentSummaryOut(BaseModel):
    id: UUID
    nim: str
    name: str
    status: str
    entry_year: int
    graduation_year: Optional[int] = None
    has_career_records: bool
    achievement_count: int
    career_summary: Optional[str] = None


class IdentityCheckIn(BaseModel):
    name: str = Field(min_length=1)
    entry_year: int


class LockedMessageOut(BaseModel):
    title: str
    body: str


class EmptyStateOut(BaseModel):
    title: str
    body: str
    cta_label: str


class AggregatedStatusOut(BaseModel):
    has_active_career: bool
    primary_text: str
    details: List[str] = []


class CareerViewOut(BaseModel):
    student_id: UUID
    enrollment_status: str
    visible: bool
    locked: Optional[LockedMessageOut] = None
    status: Optional[AggregatedStatusOut] = None
    empty_state: Optional[EmptyStateOut] = None


class CareerRecordIn(BaseModel):
    status: CareerStatus
    payload: Dict[str, Any]
    is_active: Optional[bool] = None
    summary: Optional[str] = None
    willing_to_be_contacted: bool = True
    submitted_at: Optional[datetime] = None


class CareerRecordOut(BaseModel):
    id: UUID
    student_id: UUID
    status: str
    payload: Dict[str, Any]
    is_active: Optional[bool] = None
    summary: Optional[str] = None
    willing_to_be_contacted: bool = True
    submitted_at: datetime


class AchievementIn(BaseModel):
    category: AchievementCategory
    subcategory: Optional[str] = None
    title: str = Field(min_length=1, max_length=240)
    description: Optional[str] = None
    achieved_on: date
    location: Optional[str] = None
    organizer: Optional[str] = None
    level: Optional[AchievementLevel] = None
    rank: Optional[str] = None
    evidence_url: Optional[str] = None


class AchievementOut(BaseModel):
    id: UUID
    student_id: UUID
    category: str
    subcategory: Optional[str] = None
    title: str
    description: Optional[str] = None
    achieved_on: date
    location: Optional[str] = None
    organizer: Optional[str] = None
    level: Optional[str] = None
    rank: Optional[str] = None
    evidence_url: Optional[str] = None
    verified: bool
    created_at: datetime
    updated_at: datetime


class AchievementVerifyIn(BaseModel):
    verified: bool = True


class StudentStatisticsOut(BaseModel):
    total: int
    active: int
    on_leave: int
    dropout: int
    alumni: int


class TracerStatisticsOut(BaseModel):
    total_alumni: int
    responded: int
    response_rate: float
    working: int
    searching: int
    entrepreneur: int
    studying: int


class AchievementStatisticsOut(BaseModel):
    total: int
    by_category: Dict[str, int]
    by_level: Dict[str, int]
    verified: int
    pending: int


class ChartPointOut(BaseModel):
    name: str
    value: int
    color: Optional[str] = None


class TrendPointOut(BaseModel):
    year: str
    working: int
    entrepreneur: int
    studying: int


class DashboardOut(BaseModel):
    students: StudentStatisticsOut
    tracer: TracerStatisticsOut
    achievements: AchievementStatisticsOut
    career_chart: List[ChartPointOut]
    industry_distribution: List[ChartPointOut]
    achievement_categories: List[ChartPointOut]
    graduate_trend: List[TrendPointOut]


class TopEntryOut(BaseModel):
    name: str
    count: int


class MetricsOut(BaseModel):
    employment_rate: int
    entrepreneurship_rate: int
    top_industry: Optional[TopEntryOut] = None
    top_location: Optional[TopEntryOut] = None
    top_department: Optional[TopEntryOut] = None
    study_count: int
    searching_count: int
    data_points: int


class InsightOut(BaseModel):
    insights: List[str]
    generated_at: datetime
    data_points_analyzed: int


class GraduateRatingIn(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    evaluator_name: Optional[str] = Field(default=None, max_length=160)
    evaluator_position: str = Field(min_length=1, max_length=160)
    industry_sector: IndustrySector
    company_email: Optional[str] = None
    contact_number: Optional[str] = None
    evaluation_period: str = Field(pattern=r"^\d{4}-Q[1-4]$")
    technical_competence: int = Field(ge=1, le=5)
    work_ethics: int = Field(ge=1, le=5)
    communication: int = Field(ge=1, le=5)
    initiative: int = Field(ge=1, le=5)
    overall: int = Field(ge=1, le=5)
    strengths: Optional[str] = None
    improvements: Optional[str] = None
    general_comments: Optional[str] = None
    submitted_at: Optional[datetime] = None


class GraduateRatingOut(BaseModel):
    id: UUID
    student_id: UUID
    company_name: str
    evaluator_name: Optional[str] = None
    evaluator_position: str
    industry_sector: str
    company_email: Optional[str] = None
    contact_number: Optional[str] = None
    evaluation_period: str
    technical_competence: int
    work_ethics: int
    communication: int
    initiative: int
    overall: int
    strengths: Optional[str] = None
    improvements: Optional[str] = None
    general_comments: Optional[str] = None
    submitted_at: datetime


class RatingStatsOut(BaseModel):
    total_evaluations: int
    average_overall: float
    average_label: Optional[str] = None
    category_averages: Dict[str, float]
    latest_evaluation: Optional[GraduateRatingOut] = None


class RatingOptionsOut(BaseModel):
    scores: Dict[int, str]
    categories: Dict[str, str]
    industry_sectors: Dict[str, str]
