"""
Statistics and health endpoints.

``/stats`` returns the summary counts of the directory.  ``/health``
is a liveness probe: it always answers 200 and reports whether the
database connection responds.
"""

from fastapi import APIRouter, Depends

from consultant_directory_api.app.api.dependencies import get_database, get_statistics_service
from consultant_directory_api.app.core.db import Database, utc_timestamp
from consultant_directory_api.app.schemas.statistics import DirectoryStats, HealthStatus
from consultant_directory_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats", response_model=DirectoryStats)
async def get_stats(stats: StatisticsService = Depends(get_statistics_service)) -> DirectoryStats:
    """Return total, custom and built‑in counts plus distinct services/regions."""
    return await stats.overview()


@router.get("/health", response_model=HealthStatus)
async def health(db: Database = Depends(get_database)) -> HealthStatus:
    return HealthStatus(
        status="ok",
        timestamp=utc_timestamp(),
        database="connected" if db.ping() else "disconnected",
    )
