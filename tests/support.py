"""
Helpers shared by the test modules: sample payloads, seed files and a
runner for the async service methods.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List

from consultant_directory_api.app.core.db import Database
from consultant_directory_api.app.schemas.consultant import ConsultantCreate
from consultant_directory_api.app.services.seed_service import SeedService


ABADI: Dict[str, Any] = {
    "firm": "Abadi Architecture",
    "contact": "Marcela Rhoads",
    "email": "marhoads@abadiaccess.com",
    "service": "ADA Review",
    "regions": ["ESC 1", "ESC 2"],
}


def run(coro):
    return asyncio.run(coro)


def consultant_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "firm": "Lone Star Access",
        "contact": "Dana Ortiz",
        "email": "dana@lonestaraccess.com",
        "phone": "(512) 555-0100",
        "service": "ADA Review",
        "regions": ["ESC 13"],
    }
    payload.update(overrides)
    return payload


def make_consultant(**overrides: Any) -> ConsultantCreate:
    return ConsultantCreate(**consultant_payload(**overrides))


def write_seed_file(path: Path, entries: List[Any]) -> Path:
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


def load_builtins(db: Database, tmp_path: Path, entries: List[Dict[str, Any]]) -> int:
    """Insert ``entries`` as built-in consultants through the seed loader."""
    seed = write_seed_file(tmp_path / "builtins.json", entries)
    return SeedService(db).load(str(seed))
