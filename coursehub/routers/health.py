"""
Health Check Router

Provides health check endpoints for load balancers and monitoring.
"""

import asyncio
import os
import time
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.db.config import STORAGE_TIMEOUT_SECONDS, get_session
from coursehub.models.schemas import HealthCheckResponse

# Initialize router
router = APIRouter()

# Application start time for uptime calculation
_start_time = time.time()


@router.get("/health", response_model=HealthCheckResponse, summary="Basic Health Check")
async def health_check():
    """
    Basic health check endpoint

    Returns application status, version, and environment information.
    Does not touch the database.
    """
    uptime = time.time() - _start_time

    return HealthCheckResponse(
        status="healthy",
        version=os.getenv("APP_VERSION", "1.0.0"),
        environment=os.getenv("ENVIRONMENT", "development"),
        timestamp=datetime.utcnow(),
        uptime=uptime
    )


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check(session: AsyncSession = Depends(get_session)):
    """
    Kubernetes-style readiness probe

    Returns 200 if the database answers within the storage timeout,
    503 otherwise.
    """
    try:
        await asyncio.wait_for(
            session.execute(text("SELECT 1")), timeout=STORAGE_TIMEOUT_SECONDS
        )
    except (SQLAlchemyError, asyncio.TimeoutError):
        raise HTTPException(
            status_code=503,
            detail="Application not ready: database unavailable"
        )
    finally:
        await session.rollback()

    return {"status": "ready", "timestamp": datetime.utcnow().isoformat()}


@router.get("/health/live", summary="Liveness Check")
async def liveness_check():
    """
    Kubernetes-style liveness probe

    Returns 200 if the application is alive and responding.
    """
    return {
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat(),
        "pid": os.getpid()
    }
