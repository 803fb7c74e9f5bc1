"""
UniLeave API - Main Application
FastAPI application with CORS, error handling, request logging and database startup
"""
import logging
import traceback
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from unileave.api.routes import (
    admin_router,
    auth_router,
    leave_requests_router,
    notifications_router,
    reports_router,
    settings_router,
    staff_router,
)
from unileave.core.config import settings
from unileave.core.exceptions import LeaveManagementError
from unileave.database import SessionLocal, close_db_connection, init_db, test_connection
from unileave.db.seed import seed_demo_data


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ==================== STARTUP & SHUTDOWN ====================


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 70)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info("=" * 70)

    if not test_connection():
        logger.warning("[WARN] Database connection failed - continuing in degraded mode")

    init_db()

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    logger.info("[OK] Application startup complete!")
    yield

    logger.info("Shutting down application...")
    close_db_connection()


# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.PROJECT_DESCRIPTION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)


# ==================== MIDDLEWARE ====================


# Compression: GZip responses
app.add_middleware(GZipMiddleware, minimum_size=1000)


# CORS: Cross-Origin Resource Sharing
allowed_origins = list(dict.fromkeys([settings.FRONTEND_URL, *settings.ALLOWED_ORIGINS]))

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
    max_age=3600,
)


# ==================== ROUTERS ====================


app.include_router(auth_router, prefix="/api/auth")
app.include_router(staff_router, prefix="/api/staff")
app.include_router(leave_requests_router, prefix="/api")
app.include_router(settings_router, prefix="/api/settings")
app.include_router(notifications_router, prefix="/api/notifications")
app.include_router(admin_router, prefix="/api/admin")
app.include_router(reports_router, prefix="/api/reports")


# ==================== ERROR HANDLERS ====================


@app.exception_handler(LeaveManagementError)
async def leave_management_exception_handler(request: Request, exc: LeaveManagementError):
    """Domain errors carry their own status code"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "detail": exc.detail},
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are reported as 400"""
    logger.warning(f"Validation error on {request.url}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "detail": "Validation error",
            "errors": jsonable_errors(exc),
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    # Don't expose internal errors in production
    error_message = str(exc) if settings.DEBUG else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "detail": error_message,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ==================== HEALTH ====================


@app.get("/", tags=["System"])
async def root():
    """Root endpoint - API information"""
    return {
        "success": True,
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "docs": "/api/docs",
    }


@app.get("/health", tags=["System"])
async def health_check():
    """Liveness plus a database round trip"""
    if test_connection():
        return {
            "success": True,
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.utcnow().isoformat(),
        }
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "success": False,
            "status": "unhealthy",
            "database": "disconnected",
            "timestamp": datetime.utcnow().isoformat(),
        }
    )


# ==================== REQUEST LOGGING ====================


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    # Skip logging for health checks
    if request.url.path == "/health":
        return await call_next(request)

    start_time = datetime.utcnow()
    client = request.client.host if request.client else "-"
    logger.info(f">> {request.method} {request.url.path} - {client}")

    try:
        response = await call_next(request)
        duration = (datetime.utcnow() - start_time).total_seconds()
        logger.info(f"<< {request.method} {request.url.path} - {response.status_code} ({duration:.2f}s)")
        return response
    except Exception as e:
        duration = (datetime.utcnow() - start_time).total_seconds()
        logger.error(f"[ERROR] {request.method} {request.url.path} - Error: {str(e)} ({duration:.2f}s)")
        raise
