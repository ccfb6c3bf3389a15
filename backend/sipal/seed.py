import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from sipal.core.database import SessionLocal, init_db
from sipal.models.entities import Achievement, CareerRecordRow, Student

logger = logging.getLogger(__name__)


# (nim, name, status, entry_year, graduation_year, email, phone)
STUDENTS = [
    ("20190001", "Ahmad Rizki Pratama", "alumni", 2019, 2023, "ahmad.rizki@gmail.com", "081234567890"),
    ("20210001", "Eko Prasetyo", "active", 2021, None, "eko.prasetyo@student.polines.ac.id", "081234567894"),
    ("20220002", "Hana Safira", "on_leave", 2022, None, "hana.safira@student.polines.ac.id", "081234567897"),
    ("20200005", "Rudi Hermawan", "dropout", 2020, None, "rudi.hermawan@gmail.com", "081234567912"),
    ("20190002", "Siti Nurhaliza", "alumni", 2019, 2023, "siti.nurhaliza@gmail.com", "081234567891"),
    ("20200001", "Budi Santoso", "alumni", 2020, 2024, "budi.santoso@gmail.com", "081234567892"),
    ("20200002", "Dewi Lestari", "alumni", 2020, 2024, "dewi.lestari@gmail.com", "081234567893"),
    ("20210002", "Fitri Handayani", "active", 2021, None, "fitri.handayani@student.polines.ac.id", "081234567895"),
    ("20220001", "Gunawan Wibowo", "active", 2022, None, "gunawan.wibowo@student.polines.ac.id", "081234567896"),
    ("20230001", "Irfan Maulana", "active", 2023, None, "irfan.maulana@student.polines.ac.id", "081234567898"),
    ("20180001", "Kevin Wijaya", "alumni", 2018, 2022, "kevin.wijaya@gmail.com", "081234567800"),
    ("20180002", "Linda Kusuma", "alumni", 2018, 2022, "linda.kusuma@gmail.com", "081234567801"),
]

# (nim, status, is_active, submitted_at, payload)
CAREER_RECORDS = [
    (
        "20190001",
        "working",
        True,
        datetime(2024, 3, 15),
        {
            "employer": "PT Bank Central Asia Tbk",
            "position": "Customer Service Officer",
            "industry": "Banking & Finance",
            "location": "Jakarta",
            "start_year": 2023,
        },
    ),
    (
        "20190001",
        "entrepreneur",
        True,
        datetime(2024, 8, 1),
        {
            "business_name": "Kopi Rizki",
            "business_type": "Food & Beverage",
            "location": "Semarang",
            "start_year": 2024,
            "employees": 2,
        },
    ),
    (
        "20190002",
        "entrepreneur",
        False,
        datetime(2023, 9, 10),
        {
            "business_name": "Siti Batik Online",
            "business_type": "Retail & E-Commerce",
            "location": "Semarang",
            "start_year": 2022,
            "end_year": 2023,
        },
    ),
    (
        "20190002",
        "entrepreneur",
        True,
        datetime(2024, 2, 20),
        {
            "business_name": "Siti Creative Agency",
            "business_type": "Digital Marketing",
            "location": "Semarang",
            "start_year": 2023,
            "employees": 5,
        },
    ),
    (
        "20200001",
        "working",
        True,
        datetime(2024, 6, 15),
        {
            "employer": "PT Shopee Indonesia",
            "position": "Business Development Associate",
            "industry": "Retail & E-Commerce",
            "location": "Jakarta",
            "start_year": 2024,
        },
    ),
    (
        "20200002",
        "studying",
        None,
        datetime(2024, 7, 10),
        {
            "institution": "Universitas Diponegoro",
            "program": "Management",
            "level": "S1",
            "location": "Semarang",
            "start_year": 2024,
        },
    ),
    (
        "20180001",
        "working",
        True,
        datetime(2024, 1, 20),
        {
            "employer": "PT Pertamina (Persero)",
            "position": "Administrative Staff",
            "industry": "State-Owned Enterprise",
            "location": "Jakarta",
            "start_year": 2022,
        },
    ),
    (
        "20180002",
        "searching",
        None,
        datetime(2024, 2, 15),
        {
            "target_field": "Human Resources",
            "target_location": "Semarang, Yogyakarta",
            "duration_months": 2,
        },
    ),
]

# (nim, category, subcategory, title, achieved_on, level, rank, verified)
ACHIEVEMENTS = [
    ("20190001", "event_participation", "competition", "Business Plan Competition HIMABI", date(2022, 5, 15), "regional", "2nd place", True),
    ("20190001", "applied_academic", "internship", "Internship at PT Bank Mandiri", date(2022, 7, 1), "national", None, True),
    ("20210001", "event_participation", "seminar", "National Digital Marketing Seminar", date(2023, 10, 12), "national", None, False),
    ("20210001", "self_development", "certification", "Google Analytics Certification", date(2024, 2, 3), "international", None, True),
    ("20220002", "scientific_work", "research_paper", "MSME Branding Study", date(2023, 11, 20), "local", None, False),
    ("20200005", "event_participation", "workshop", "Entrepreneurship Workshop", date(2021, 4, 8), "local", None, True),
]


def get_or_create(session: Session, model, defaults=None, **kwargs):
    instance = session.query(model).filter_by(**kwargs).one_or_none()
    if instance:
        return instance
    params = dict(kwargs)
    if defaults:
        params.update(defaults)
    instance = model(**params)
    session.add(instance)
    session.flush()
    return instance


def ensure_career_record(session: Session, student: Student, status, is_active, submitted_at, payload):
    existing = (
        session.query(CareerRecordRow)
        .filter(CareerRecordRow.student_id == student.id)
        .filter(CareerRecordRow.submitted_at == submitted_at)
        .one_or_none()
    )
    if existing:
        return existing
    record = CareerRecordRow(
        student_id=student.id,
        status=status,
        payload=payload,
        is_active=is_active,
        submitted_at=submitted_at,
    )
    session.add(record)
    session.flush()
    return record


def seed_session(session: Session) -> None:
    students = {}
    for nim, name, status, entry_year, graduation_year, email, phone in STUDENTS:
        students[nim] = get_or_create(
            session,
            Student,
            nim=nim,
            defaults={
                "name": name,
                "status": status,
                "entry_year": entry_year,
                "graduation_year": graduation_year,
                "email": email,
                "phone": phone,
            },
        )

    for nim, status, is_active, submitted_at, payload in CAREER_RECORDS:
        ensure_career_record(session, students[nim], status, is_active, submitted_at, payload)

    for nim, category, subcategory, title, achieved_on, level, rank, verified in ACHIEVEMENTS:
        get_or_create(
            session,
            Achievement,
            student_id=students[nim].id,
            title=title,
            defaults={
                "category": category,
                "subcategory": subcategory,
                "achieved_on": achieved_on,
                "level": level,
                "rank": rank,
                "verified": verified,
            },
        )
    session.commit()


def seed():
    init_db()
    session = SessionLocal()
    try:
        seed_session(session)
        logger.info("Seeded %d demo students", len(STUDENTS))
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
