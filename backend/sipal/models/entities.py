from enum import Enum
from uuid import uuid4
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, Integer, Date, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from sipal.core.database import Base


class EnrollmentStatus(str, Enum):
    active = "active"
    alumni = "alumni"
    on_leave = "on_leave"
    dropout = "dropout"


class CareerStatus(str, Enum):
    working = "working"
    searching = "searching"
    entrepreneur = "entrepreneur"
    studying = "studying"


class EducationLevel(str, Enum):
    s1 = "S1"
    s2 = "S2"
    s3 = "S3"


class AchievementCategory(str, Enum):
    event_participation = "event_participation"
    scientific_work = "scientific_work"
    intellectual_property = "intellectual_property"
    applied_academic = "applied_academic"
    entrepreneurship = "entrepreneurship"
    self_development = "self_development"


class AchievementLevel(str, Enum):
    local = "local"
    regional = "regional"
    national = "national"
    international = "international"


class RatingCategory(str, Enum):
    technical_competence = "technical_competence"
    work_ethics = "work_ethics"
    communication = "communication"
    initiative = "initiative"
    overall = "overall"


class IndustrySector(str, Enum):
    banking_finance = "banking_finance"
    manufacturing = "manufacturing"
    retail_commerce = "retail_commerce"
    technology = "technology"
    healthcare = "healthcare"
    education = "education"
    government = "government"
    hospitality = "hospitality"
    logistics = "logistics"
    consulting = "consulting"
    media = "media"
    other = "other"


class Student(Base):
    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid4)
    nim = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(160), nullable=False)
    department = Column(String(120), nullable=False, default="Administrasi Bisnis")
    study_program = Column(String(120), nullable=False, default="Administrasi Bisnis Terapan")
    status = Column(String(16), nullable=False, default=EnrollmentStatus.active.value)
    entry_year = Column(Integer, nullable=False)
    graduation_year = Column(Integer, nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(40), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    career_records = relationship(
        "CareerRecordRow", back_populates="student", cascade="all, delete-orphan"
    )
    achievements = relationship(
        "Achievement", back_populates="student", cascade="all, delete-orphan"
    )
    ratings = relationship(
        "GraduateRating", back_populates="student", cascade="all, delete-orphan"
    )


class CareerRecordRow(Base):
    __tablename__ = "career_records"

    id = Column(Uuid, primary_key=True, default=uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    status = Column(String(16), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=True)
    summary = Column(Text, nullable=True)
    willing_to_be_contacted = Column(Boolean, default=True, nullable=False)
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="career_records")


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Uuid, primary_key=True, default=uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    category = Column(String(40), nullable=False)
    subcategory = Column(String(40), nullable=True)
    title = Column(String(240), nullable=False)
    description = Column(Text, nullable=True)
    achieved_on = Column(Date, nullable=False)
    location = Column(String(160), nullable=True)
    organizer = Column(String(200), nullable=True)
    level = Column(String(16), nullable=True)
    rank = Column(String(80), nullable=True)
    evidence_url = Column(Text, nullable=True)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="achievements")


class GraduateRating(Base):
    __tablename__ = "graduate_ratings"

    id = Column(Uuid, primary_key=True, default=uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    company_name = Column(String(200), nullable=False)
    evaluator_name = Column(String(160), nullable=True)
    evaluator_position = Column(String(160), nullable=False)
    industry_sector = Column(String(40), nullable=False)
    company_email = Column(String(200), nullable=True)
    contact_number = Column(String(40), nullable=True)
    evaluation_period = Column(String(16), nullable=False)
    technical_competence = Column(Integer, nullable=False)
    work_ethics = Column(Integer, nullable=False)
    communication = Column(Integer, nullable=False)
    initiative = Column(Integer, nullable=False)
    overall = Column(Integer, nullable=False)
    strengths = Column(Text, nullable=True)
    improvements = Column(Text, nullable=True)
    general_comments = Column(Text, nullable=True)
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="ratings")
