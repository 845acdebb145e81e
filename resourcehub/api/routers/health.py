"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/storage

Dependencies: resourcehub.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.api.deps.dependencies import get_storage_client
from resourcehub.boundary.aws.s3_client import S3StorageClient
from resourcehub.boundary.db import get_async_db
from resourcehub.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check (SELECT 1)."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed",
        )
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/storage", response_model=HealthResponse)
async def health_check_storage(
    storage: S3StorageClient = Depends(get_storage_client),
) -> HealthResponse:
    """Object storage health check (bucket reachable)."""
    try:
        storage.check_bucket()
    except StorageError as e:
        logger.error("Storage health check failed", extra={"error": e.message})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage bucket not reachable",
        )
    return HealthResponse(status="healthy", message="Storage bucket accessible")
