"""Health service implementation."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict

import redis.asyncio as redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ...config import get_settings
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService

logger = logging.getLogger(__name__)


async def _probe(check: Callable[[], Awaitable[Any]]) -> Dict[str, Any]:
    """Run ``check`` and report whether it worked and how long it took."""
    started = time.perf_counter()
    try:
        await check()
    except Exception as e:
        logger.warning(f"Health probe failed: {e}")
        return {"connected": False, "status": "unhealthy", "error": str(e)}
    elapsed = (time.perf_counter() - started) * 1000
    return {"connected": True, "status": "healthy", "response_time_ms": round(elapsed, 2)}


class HealthService(IHealthService):
    """Database and Redis reachability."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.settings = get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Overall status.

        The database is required. Redis only backs token revocation and
        rate limiting, so losing it reports "degraded" instead of
        "unhealthy".
        """
        checks = {
            "database": await self.check_database_health(),
            "redis": await self.check_redis_health(),
        }

        if not checks["database"]["connected"]:
            overall = "unhealthy"
        elif not checks["redis"]["connected"]:
            overall = "degraded"
        else:
            overall = "healthy"

        return HealthCheckResponse(
            status=overall,
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            checks=checks,
        )

    async def check_database_health(self) -> Dict[str, Any]:
        return await _probe(lambda: self.session.execute(text("SELECT 1")))

    async def check_redis_health(self) -> Dict[str, Any]:
        # own short lived connection, the shared client may be disconnected
        async def ping():
            conn = redis.from_url(self.settings.redis_url)
            try:
                await conn.ping()
            finally:
                await conn.aclose()

        return await _probe(ping)
