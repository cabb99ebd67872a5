#!/usr/bin/env python3
"""
Rebuild the consultants table of a Consultant Directory SQLite database.

The script creates the schema if needed, clears the existing
consultants (unless --keep-existing is given) and loads every entry of
a JSON data file as a built-in consultant.  Entries with missing values
are stored with placeholders ("Unknown Firm", "Unknown Contact",
"Unknown", a no-email-<n>@placeholder.com address and an
"Unassigned" region) rather than being dropped.

Usage:
    python migrate.py --db ./consultant_directory_api/consultants.db --data ./consultant_directory_api/data/consultants.json
"""

import argparse
import json
import os
import sqlite3
import sys

from consultant_directory_api.app.core.db import Database, utc_timestamp
from consultant_directory_api.app.core.errors import StorageError


def normalize_entry(entry, index):
    """Return the column values for one data file entry, filling placeholders."""
    def text(key, default):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return default

    email = text("email", f"no-email-{entry.get('id', index)}@placeholder.com")
    regions = entry.get("regions")
    if not isinstance(regions, list):
        regions = []
    regions = [str(region).strip() for region in regions if str(region).strip()] or ["Unassigned"]
    phone = entry.get("phone")
    return (
        text("firm", "Unknown Firm"),
        text("contact", "Unknown Contact"),
        email,
        phone.strip() if isinstance(phone, str) and phone.strip() else None,
        text("service", "Unknown"),
        json.dumps(regions),
    )


def migrate(db, entries, keep_existing=False):
    """Load ``entries`` into ``db``; return ``(inserted, failed)``."""
    inserted = 0
    failed = 0
    now = utc_timestamp()
    with db.transaction() as cur:
        if not keep_existing:
            cur.execute("DELETE FROM consultants")
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                print(f"[!] Entry {index} is not an object, skipped", file=sys.stderr)
                failed += 1
                continue
            values = normalize_entry(entry, index)
            try:
                cur.execute(
                    "INSERT INTO consultants (firm, contact, email, phone, service, regions, is_custom, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, 0, ?, ?)",
                    values + (now, now),
                )
                inserted += 1
            except sqlite3.IntegrityError as exc:
                print(f"[!] Error inserting {values[0]}: {exc}", file=sys.stderr)
                failed += 1
    return inserted, failed


def main(argv=None):
    ap = argparse.ArgumentParser(description="Rebuild the consultants table from a JSON data file (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./consultant_directory_api/consultants.db)")
    ap.add_argument("--data", required=True, help="JSON file containing an array of consultants")
    ap.add_argument("--keep-existing", action="store_true", help="Do not clear the table before loading")
    args = ap.parse_args(argv)

    if not os.path.exists(args.data):
        print(f"[!] Data file not found: {args.data}", file=sys.stderr)
        return 1
    try:
        with open(args.data, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"[!] Could not read data file {args.data}: {exc}", file=sys.stderr)
        return 1
    if not isinstance(entries, list):
        print("[!] Data file must contain a JSON array", file=sys.stderr)
        return 1

    print(f"[+] Found {len(entries)} consultants to migrate")
    db = Database(args.db)
    try:
        db.open()
        inserted, failed = migrate(db, entries, keep_existing=args.keep_existing)
        with db.cursor() as cur:
            total = cur.execute("SELECT COUNT(*) FROM consultants").fetchone()[0]
    except StorageError as exc:
        print(f"[!] Migration failed: {exc}", file=sys.stderr)
        return 2
    finally:
        db.close()

    print(f"[+] Inserted: {inserted}")
    print(f"[+] Failed: {failed}")
    print(f"[+] Total consultants in database: {total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
