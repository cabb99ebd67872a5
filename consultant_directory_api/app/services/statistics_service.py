"""
Service layer for directory catalogs and statistics.

This module derives read‑only views from the consultant collection:
the distinct services, the flattened list of unique regions and the
summary counts shown on the dashboard.  Regions live inside a JSON
array per row, so they are collected in Python rather than with SQL
``DISTINCT``.
"""

from __future__ import annotations

from typing import List, Set

from consultant_directory_api.app.core.db import Database, utc_timestamp
from consultant_directory_api.app.schemas.statistics import DirectoryStats
from consultant_directory_api.app.services.consultant_service import decode_regions


class StatisticsService:
    """Aggregations over the full consultant collection."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_services(self) -> List[str]:
        """Return distinct service names sorted ascending."""
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                "SELECT DISTINCT service FROM consultants ORDER BY service ASC"
            ).fetchall()
        return [row["service"] for row in rows]

    async def list_regions(self) -> List[str]:
        """Return every region used by any consultant, deduplicated and sorted."""
        with self.db.cursor() as cursor:
            rows = cursor.execute("SELECT regions FROM consultants").fetchall()
        return sorted(self._collect_regions(rows))

    async def overview(self) -> DirectoryStats:
        """Return summary counts computed from one read of the collection."""
        with self.db.cursor() as cursor:
            rows = cursor.execute("SELECT service, regions, is_custom FROM consultants").fetchall()
        total = len(rows)
        custom = sum(1 for row in rows if row["is_custom"])
        services = {row["service"] for row in rows}
        return DirectoryStats(
            total_consultants=total,
            custom_consultants=custom,
            built_in_consultants=total - custom,
            total_services=len(services),
            total_regions=len(self._collect_regions(rows)),
            last_updated=utc_timestamp(),
        )

    @staticmethod
    def _collect_regions(rows) -> Set[str]:
        regions: Set[str] = set()
        for row in rows:
            regions.update(decode_regions(row["regions"]))
        return regions
