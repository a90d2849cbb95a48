# =============================================================================
# formflow/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# Readiness pings the redis instance configured by REDIS_HOST/REDIS_PORT.
# =============================================================================

import logging
from datetime import datetime, timezone

import redis
from fastapi import APIRouter, Request
from pydantic import BaseModel

from formflow import __version__

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    redis: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def ping_redis(host: str, port: int) -> str:
    """
    Ping redis once with a short timeout.

    Returns:
        "healthy" or "unhealthy: <reason>"
    """
    client = redis.Redis(host=host, port=port, socket_connect_timeout=1, socket_timeout=1)
    try:
        client.ping()
        return "healthy"
    except redis.RedisError as e:
        logger.warning(f"Redis check failed for {host}:{port}: {e}")
        return f"unhealthy: {str(e)[:50]}"
    finally:
        client.close()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=request.app.options.env,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Reports "ready" only when redis answers a ping.
    """
    options = request.app.options
    checks = ChecksResponse(redis=ping_redis(options.redis.host, options.redis.port))

    return ReadinessResponse(
        status="ready" if checks.redis == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
