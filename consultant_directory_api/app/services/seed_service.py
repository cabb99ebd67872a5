"""
Loading of built‑in consultants from the seed file.

The seed file is a JSON array of objects with ``firm``, ``contact``,
``email``, optional ``phone``, ``service`` and ``regions``.  Entries
are inserted as built‑in records (``is_custom = 0``) with ``INSERT OR
IGNORE``; the unique email index makes a second load a no‑op, so the
loader can run on every startup.  Bad entries are logged and skipped
one by one and never prevent the API from starting.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from consultant_directory_api.app.core.db import Database, utc_timestamp
from consultant_directory_api.app.core.errors import ValidationError
from consultant_directory_api.app.schemas.consultant import ConsultantWrite
from consultant_directory_api.app.services.consultant_service import validate_consultant


logger = logging.getLogger(__name__)


class SeedService:
    """Insert the static list of built‑in consultants."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def read_entries(self, path: str) -> List[Dict[str, Any]]:
        """Return the entries of the seed file, or an empty list if unusable."""
        seed_path = Path(path)
        if not seed_path.exists():
            logger.info("No seed file at %s, skipping initial data", seed_path)
            return []
        try:
            with seed_path.open("r", encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read seed file %s: %s", seed_path, exc)
            return []
        if not isinstance(entries, list):
            logger.error("Seed file %s must contain a JSON array", seed_path)
            return []
        return entries

    def load(self, path: str) -> int:
        """Insert the seed entries and return how many rows were added."""
        entries = self.read_entries(path)
        rows = []
        for index, entry in enumerate(entries):
            try:
                values = validate_consultant(ConsultantWrite.model_validate(entry))
            except (PydanticValidationError, ValidationError) as exc:
                logger.warning("Skipping seed entry %s: %s", index, exc)
                continue
            rows.append(values)
        if not rows:
            return 0

        now = utc_timestamp()
        inserted = 0
        with self.db.transaction() as cursor:
            for values in rows:
                cursor.execute(
                    """
                    INSERT OR IGNORE INTO consultants
                        (firm, contact, email, phone, service, regions, is_custom, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, 0, ?, ?)
                    """,
                    (
                        values["firm"],
                        values["contact"],
                        values["email"],
                        values["phone"],
                        values["service"],
                        json.dumps(values["regions"]),
                        now,
                        now,
                    ),
                )
                inserted += cursor.rowcount
        logger.info("Initial consultant data loaded: %s of %s entries inserted", inserted, len(entries))
        return inserted
