"""
Dependency factories for API routes.

The ``Database`` client is created and opened by the application's
startup hook and stored on ``app.state``.  Routes receive services
built around it through ``Depends``, which keeps handlers thin and lets
tests substitute their own instances with ``dependency_overrides``.
"""

from fastapi import Depends, Path, Request

from consultant_directory_api.app.core.db import MAX_ROW_ID, Database
from consultant_directory_api.app.core.errors import NotFoundError
from consultant_directory_api.app.services.consultant_service import ConsultantService
from consultant_directory_api.app.services.statistics_service import StatisticsService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_consultant_service(db: Database = Depends(get_database)) -> ConsultantService:
    return ConsultantService(db)


def get_statistics_service(db: Database = Depends(get_database)) -> StatisticsService:
    return StatisticsService(db)


def get_consultant_id(consultant_id: str = Path(..., description="Consultant ID")) -> int:
    """Parse the ``{consultant_id}`` path segment.

    Anything that cannot name a stored row (not a plain decimal number,
    or beyond SQLite's integer range) is reported as an unknown
    consultant rather than a malformed request.
    """
    if not (consultant_id.isascii() and consultant_id.isdigit()):
        raise NotFoundError("Consultant not found")
    value = int(consultant_id)
    if value > MAX_ROW_ID:
        raise NotFoundError("Consultant not found")
    return value
