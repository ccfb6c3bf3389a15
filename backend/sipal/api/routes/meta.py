from fastapi import APIRouter
from sqlalchemy import func, text

from sipal.core.config import settings
from sipal.core.database import SessionLocal, engine
from sipal.models.entities import Student

router = APIRouter(prefix="/meta")


@router.get("/health")
def health_meta():
    db_ok = False
    db_error = None
    students = None
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
        with SessionLocal() as db:
            students = db.query(func.count(Student.id)).scalar()
    except Exception as exc:
        db_error = str(exc)
    return {
        "ok": db_ok,
        "database": {"ok": db_ok, "error": db_error},
        "seed": {"enabled": settings.seed_demo_data, "students": students},
    }
