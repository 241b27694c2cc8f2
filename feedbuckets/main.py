from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.domain.exceptions import FeedBucketsException
from feedbuckets.infrastructure.config.settings import get_settings
from feedbuckets.infrastructure.persistence.database import engine, get_db
from feedbuckets.presentation.api.v1.routes import buckets
from feedbuckets.presentation.middleware.correlation import CorrelationIDMiddleware
from feedbuckets.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    setup_logging(settings.debug)
    logger.info(f"Bucket scheme: {settings.bucket_scheme}")

    # Database schema is managed outside the application (migrations or create_all)

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Correlation ID for request tracing
app.add_middleware(CorrelationIDMiddleware)

# CORS middleware
# Security: Using allow_credentials=True requires specific origins (not wildcard)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FeedBucketsException)
async def feedbuckets_exception_handler(request: Request, exc: FeedBucketsException):
    """Identity and domain failures abort the request as a server error"""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures surface as a single opaque server error"""
    logger.exception(f"{request.method} {request.url.path} storage failure")
    return JSONResponse(
        status_code=500,
        content={"error": "STORAGE_ERROR", "message": "Entry storage failure", "details": {}},
    )


# Routers
app.include_router(buckets.router, prefix="/entries", tags=["entries"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint for load balancers and monitoring.

    Returns:
    - 200 OK if the database answers
    - 503 Service Unavailable otherwise
    """
    checks: dict[str, Any] = {
        "api": True,  # If we got here, API is responding
        "database": False,
    }

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
        return {"status": "healthy", "checks": checks}
    except SQLAlchemyError as e:
        checks["error"] = str(e)
        return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})
