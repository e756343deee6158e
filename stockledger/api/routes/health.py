"""Liveness and database readiness endpoints."""

import time

from fastapi import APIRouter

from stockledger import __version__
from stockledger.application.dto.responses import HealthResponse, ProviderHealthResponse
from stockledger.config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


def _uptime() -> float:
    return round(time.monotonic() - _started_at, 3)


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Process is up. Does not touch storage."""
    return HealthResponse(status="healthy", version=__version__, uptime_seconds=_uptime())


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database readiness.

    Borrows a pooled connection, reads the applied schema version and
    reports the round-trip latency. On failure only the error class is
    exposed, never the driver message.
    """
    from stockledger.infrastructure.storage.sqlite import get_connection_pool

    started = time.perf_counter()
    try:
        pool = await get_connection_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT MAX(version) FROM schema_migrations")
            row = await cursor.fetchone()
    except Exception as e:
        logger.warning("db_health_failed", error_type=e.__class__.__name__, error=str(e))
        database = ProviderHealthResponse(
            name="sqlite",
            available=False,
            error=e.__class__.__name__,
        )
    else:
        database = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
            schema_version=row[0] if row else None,
        )

    return HealthResponse(
        status="healthy" if database.available else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=database,
    )
