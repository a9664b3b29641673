"""
FastAPI application entry point for the job board API.

This is the main app that:
- Initializes FastAPI with CORS
- Registers all API routers under /api/v1
- Maps domain errors to {"success": false, "error": ...} payloads
- Provides health check and server time endpoints
- Sets up database connection lifecycle
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from jobboard import database
from jobboard.config import settings
from jobboard.errors import JobBoardError, StoreError
# Import API routers
from jobboard.api import auth, profile, posts, applications, messages

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    On startup: Create missing tables in debug mode only; otherwise the
    schema is managed by `alembic upgrade head`
    On shutdown: Close database connections gracefully
    """
    # Startup
    logger.info("🚀 Starting Job Board API...")
    logger.info(f"📊 Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")
    logger.info(f"🔧 Debug mode: {settings.debug}")
    if not settings.hash_secret:
        logger.warning("HASH_SECRET is not set; registration and login will fail")

    if settings.debug:
        logger.info("Debug mode: creating missing tables without Alembic")
        await database.init_models()

    yield

    # Shutdown
    logger.info("👋 Shutting down Job Board API...")
    await database.engine.dispose()


# Initialize FastAPI app
app = FastAPI(
    title="Job Board API",
    description="Students, employers and administrators: postings, applications and messages",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS
# Set ALLOWED_ORIGINS environment variable with comma-separated domains
allowed_origins = [
    "http://localhost:5173",  # Local development
]

if settings.allowed_origins:
    allowed_origins.extend(origin.strip() for origin in settings.allowed_origins.split(','))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Accept", "Content-Type"],
)


# Error handlers
def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request format: {location}: {first.get('msg')}" if location else f"Invalid request format: {first.get('msg')}"
    else:
        message = "Invalid request format"
    return error_response(400, message)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    # Anything the services did not already wrap
    logger.error(f"Unhandled database error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return error_response(StoreError.status_code, StoreError.message)


# Health check endpoint
@app.get("/health_check")
async def health_check():
    """Simple health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": int(datetime.now(timezone.utc).timestamp()),
    }


@app.get("/get_server_time")
async def get_server_time():
    return {"timestamp": int(datetime.now(timezone.utc).timestamp())}


# Root endpoint
@app.get("/")
async def root():
    """API root with basic info."""
    return {
        "message": "Job Board API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health_check",
    }


# Register API routers
app.include_router(auth.router, prefix="/api/v1", tags=["auth"])
app.include_router(profile.router, prefix="/api/v1", tags=["profile"])
app.include_router(posts.router, prefix="/api/v1", tags=["posts"])
app.include_router(applications.router, prefix="/api/v1", tags=["applications"])
app.include_router(messages.router, prefix="/api/v1", tags=["messages"])
