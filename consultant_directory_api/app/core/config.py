"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; in a deployment you
should override them via environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List


# Directory of the ``consultant_directory_api`` package.  Relative
# database and seed paths are resolved against it.
PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Consultant Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the package directory by ``resolve_path``.
    database_url: str = os.getenv("DATABASE_URL", "consultants.db")

    # JSON file with the built-in consultants loaded at startup.  Set to
    # an empty string to disable seeding.
    seed_data_path: str = os.getenv("SEED_DATA_PATH", "data/consultants.json")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    # Comma‑separated list of origins allowed by the CORS middleware.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def resolve_path(path: str) -> str:
    """Return ``path`` unchanged if absolute, else relative to the package."""
    if path == ":memory:" or os.path.isabs(path):
        return path
    return str((PACKAGE_DIR / path).resolve())


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation, environment variables should be
# set before importing this module.
settings = Settings()
