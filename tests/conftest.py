"""
Shared test configuration.

Every test gets its own temporary SQLite file, so tests never touch the
database of a running server and can run in any order.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from consultant_directory_api.app.core.config import Settings  # noqa: E402
from consultant_directory_api.app.core.db import Database  # noqa: E402
from consultant_directory_api.app.main import create_app  # noqa: E402
from consultant_directory_api.app.services.consultant_service import ConsultantService  # noqa: E402
from consultant_directory_api.app.services.statistics_service import StatisticsService  # noqa: E402
from tests.support import ABADI, write_seed_file  # noqa: E402


@pytest.fixture
def database(tmp_path: Path):
    db = Database(str(tmp_path / "service.db"))
    db.open()
    yield db
    db.close()


@pytest.fixture
def consultant_service(database: Database) -> ConsultantService:
    return ConsultantService(database)


@pytest.fixture
def statistics_service(database: Database) -> StatisticsService:
    return StatisticsService(database)


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    return write_seed_file(tmp_path / "seed.json", [ABADI])


@pytest.fixture
def settings(tmp_path: Path, seed_file: Path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "api.db"),
        seed_data_path=str(seed_file),
        log_level="INFO",
        log_file="",
        cors_origins="*",
    )


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
