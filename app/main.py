import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from app.config import settings
from app.database import Base, SessionLocal, engine
from app.routers import aadhaar, analytics, auth, bicycles, faqs, users
from app.utils.db_migrations import ensure_bicycle_geo_columns, ensure_user_profile_image_column
from app.utils.response import create_response, handle_exception, validation_errors
from seed import run_seed

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
    same_site="strict" if settings.is_production else "lax",
    https_only=settings.is_production,
)

# Auto create tables
Base.metadata.create_all(bind=engine)
ensure_bicycle_geo_columns(engine)
ensure_user_profile_image_column(engine)

# CORS for SPA / API access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return create_response(
        "Validation failed",
        validation_errors(exc.errors()),
        status.HTTP_400_BAD_REQUEST,
        status_text="error",
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return handle_exception(exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    return handle_exception(exc)


# Seed default admin and FAQs on startup
@app.on_event("startup")
async def startup_event():
    if settings.SEED_ON_STARTUP:
        run_seed()


# Add routes
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(aadhaar.router)
app.include_router(bicycles.router)
app.include_router(faqs.router)
app.include_router(faqs.admin_router)
app.include_router(analytics.router)

# Serve locally stored uploads
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/")
def home():
    try:
        return create_response(
            message="Pedal Market API running",
            data={"service": "pedal-market-backend"},
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc)


@app.get("/api-info")
def api_info():
    return create_response(
        message="API information",
        data={"service": settings.PROJECT_NAME, "docs_url": "/docs", "environment": settings.ENVIRONMENT},
        status_code=status.HTTP_200_OK,
    )


@app.get("/health")
def health():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return create_response(message="OK", data={"database": "up"}, status_code=status.HTTP_200_OK)
    except Exception as exc:
        logger.exception("Health check failed")
        return create_response(
            message="Database unavailable",
            data={"database": "down", "error": None if settings.is_production else str(exc)},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    finally:
        db.close()
