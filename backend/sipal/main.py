import logging
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from sipal.api.routes import achievements, admin, career, meta, ratings, students
from sipal.core.config import settings
from sipal.core.database import init_db
from sipal.core.errors import SipalError
from sipal.seed import seed
from sipal.services.stores import StoreError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    if settings.seed_demo_data:
        seed()
    logger.info("SIPAL API ready")
    yield


app = FastAPI(title="SIPAL API", version="0.1.0", lifespan=lifespan)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-Id"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


@app.exception_handler(SipalError)
async def domain_error_handler(request: Request, exc: SipalError):
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "message": exc.fallback_message},
    )


@app.exception_handler(StoreError)
async def store_error_handler(_: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def _register_routes(prefix: str = "") -> None:
    app.include_router(students.router, tags=["students"], prefix=prefix)
    app.include_router(career.router, tags=["career"], prefix=prefix)
    app.include_router(achievements.router, tags=["achievements"], prefix=prefix)
    app.include_router(ratings.router, tags=["ratings"], prefix=prefix)
    app.include_router(admin.router, tags=["admin"], prefix=prefix)
    app.include_router(meta.router, tags=["meta"], prefix=prefix)


_register_routes("")
_register_routes("/api")
