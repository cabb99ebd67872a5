"""
Service layer for consultants.

``ConsultantService`` implements listing with filters, single lookup,
creation, update and deletion of consultant records.  Regions are
stored as a JSON array in a TEXT column and decoded on every read.

Rules enforced here:

* every write is preceded by input validation, so an invalid request
  never touches the database;
* email addresses are unique across the directory.  The comparison is
  exact (case‑sensitive), the same as the unique index in storage;
* built‑in consultants (``is_custom = 0``, loaded from the seed file)
  can be updated but never deleted.

All queries use parameterized statements.
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
from typing import Any, Dict, List

from consultant_directory_api.app.core.db import Database, utc_timestamp
from consultant_directory_api.app.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from consultant_directory_api.app.schemas.consultant import (
    ConsultantDeleted,
    ConsultantFilters,
    ConsultantRead,
    ConsultantWrite,
)


logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_FIELDS = ("firm", "contact", "email", "service", "regions")


def validate_consultant(data: ConsultantWrite) -> Dict[str, Any]:
    """Check a create/update payload and return the cleaned column values.

    Text fields are trimmed, a blank phone becomes ``None`` and blank
    region names are dropped.  Raises ``ValidationError`` listing every
    missing field, or for a malformed email.
    """
    def clean(value: str | None) -> str:
        return value.strip() if value is not None else ""

    values: Dict[str, Any] = {
        "firm": clean(data.firm),
        "contact": clean(data.contact),
        "email": clean(data.email),
        "phone": clean(data.phone) or None,
        "service": clean(data.service),
        "regions": [region.strip() for region in data.regions or [] if region and region.strip()],
    }
    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        raise ValidationError("Missing required fields: " + ", ".join(missing), fields=missing)
    if not EMAIL_PATTERN.match(values["email"]):
        raise ValidationError("Invalid email format", fields=["email"])
    return values


def decode_regions(raw: str | None) -> List[str]:
    """Decode the stored JSON array; unreadable values yield an empty list."""
    if not raw:
        return []
    try:
        regions = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        logger.warning("Ignoring malformed regions value %r", raw)
        return []
    if not isinstance(regions, list):
        return []
    return [str(region) for region in regions]


def row_to_consultant(row: sqlite3.Row) -> ConsultantRead:
    """Convert a database row to a ConsultantRead schema instance."""
    return ConsultantRead(
        id=row["id"],
        firm=row["firm"],
        contact=row["contact"],
        email=row["email"],
        phone=row["phone"],
        service=row["service"],
        regions=decode_regions(row["regions"]),
        is_custom=bool(row["is_custom"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ConsultantService:
    """Filtering and mutation of the consultant collection."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_consultants(self, filters: ConsultantFilters | None = None) -> List[ConsultantRead]:
        """Return consultants matching every supplied filter, ordered by firm.

        * ``service`` must equal the record's service;
        * ``region`` must be one of the record's regions (exact element,
          so ``"ESC 1"`` does not match ``["ESC 11"]``);
        * ``search`` is a case‑insensitive substring of firm, contact,
          email or service.

        Blank filters are ignored.  Ties on firm keep insertion order.
        """
        filters = filters or ConsultantFilters()
        service = (filters.service or "").strip()
        region = (filters.region or "").strip()
        search = (filters.search or "").strip()

        query = "SELECT * FROM consultants WHERE 1=1"
        params: List[Any] = []
        if service:
            query += " AND service = ?"
            params.append(service)
        if search:
            pattern = f"%{_escape_like(search)}%"
            query += (
                " AND (firm LIKE ? ESCAPE '\\' OR contact LIKE ? ESCAPE '\\'"
                " OR email LIKE ? ESCAPE '\\' OR service LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern] * 4)
        query += " ORDER BY firm ASC, id ASC"

        with self.db.cursor() as cursor:
            rows = cursor.execute(query, params).fetchall()
        consultants = [row_to_consultant(row) for row in rows]
        if region:
            consultants = [consultant for consultant in consultants if region in consultant.regions]
        return consultants

    async def get_consultant(self, consultant_id: int) -> ConsultantRead:
        """Retrieve a single consultant by its ID or raise ``NotFoundError``."""
        with self.db.cursor() as cursor:
            row = cursor.execute("SELECT * FROM consultants WHERE id = ?", (consultant_id,)).fetchone()
        if row is None:
            raise NotFoundError("Consultant not found")
        return row_to_consultant(row)

    async def create_consultant(self, data: ConsultantWrite) -> ConsultantRead:
        """Insert a custom consultant and return the stored record.

        Raises ``ValidationError`` for missing/malformed fields and
        ``ConflictError`` if the email is already taken.
        """
        values = validate_consultant(data)
        now = utc_timestamp()
        with self.db.transaction() as cursor:
            duplicate = cursor.execute(
                "SELECT id FROM consultants WHERE email = ?", (values["email"],)
            ).fetchone()
            if duplicate:
                raise ConflictError("Consultant with this email already exists")
            try:
                cursor.execute(
                    """
                    INSERT INTO consultants (firm, contact, email, phone, service, regions, is_custom, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, 1, ?, ?)
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
            except sqlite3.IntegrityError as exc:
                # Another process inserted the same email after our check.
                raise ConflictError("Consultant with this email already exists") from exc
            consultant_id = cursor.lastrowid
            row = cursor.execute("SELECT * FROM consultants WHERE id = ?", (consultant_id,)).fetchone()
        logger.info("Created consultant %s (%s)", consultant_id, values["email"])
        return row_to_consultant(row)

    async def update_consultant(self, consultant_id: int, data: ConsultantWrite) -> ConsultantRead:
        """Replace the editable fields of a consultant.

        ``id``, ``created_at`` and ``is_custom`` are preserved and
        ``updated_at`` is refreshed.  Keeping the current email is not
        a conflict; taking another consultant's email is.
        """
        values = validate_consultant(data)
        now = utc_timestamp()
        with self.db.transaction() as cursor:
            existing = cursor.execute(
                "SELECT id FROM consultants WHERE id = ?", (consultant_id,)
            ).fetchone()
            if existing is None:
                raise NotFoundError("Consultant not found")
            duplicate = cursor.execute(
                "SELECT id FROM consultants WHERE email = ? AND id != ?",
                (values["email"], consultant_id),
            ).fetchone()
            if duplicate:
                raise ConflictError("Another consultant with this email already exists")
            try:
                cursor.execute(
                    """
                    UPDATE consultants
                    SET firm = ?, contact = ?, email = ?, phone = ?, service = ?, regions = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        values["firm"],
                        values["contact"],
                        values["email"],
                        values["phone"],
                        values["service"],
                        json.dumps(values["regions"]),
                        now,
                        consultant_id,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ConflictError("Another consultant with this email already exists") from exc
            row = cursor.execute("SELECT * FROM consultants WHERE id = ?", (consultant_id,)).fetchone()
        logger.info("Updated consultant %s", consultant_id)
        return row_to_consultant(row)

    async def delete_consultant(self, consultant_id: int) -> ConsultantDeleted:
        """Delete a custom consultant.

        Raises ``NotFoundError`` for an unknown ID and ``ForbiddenError``
        for built‑in consultants, which stay untouched.
        """
        with self.db.transaction() as cursor:
            row = cursor.execute(
                "SELECT id, is_custom FROM consultants WHERE id = ?", (consultant_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError("Consultant not found")
            if not row["is_custom"]:
                raise ForbiddenError("Built-in consultants cannot be deleted")
            cursor.execute("DELETE FROM consultants WHERE id = ?", (consultant_id,))
        logger.info("Deleted consultant %s", consultant_id)
        return ConsultantDeleted(message="Consultant deleted successfully", deleted_id=consultant_id)
