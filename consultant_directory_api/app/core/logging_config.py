"""
Logging setup for the consultant directory service.

``create_app`` calls ``setup_logging`` with the ``LOG_LEVEL`` and
``LOG_FILE`` settings.  Records go to the console and, when
``LOG_FILE`` is set, are also appended to that file.  Services log
through module loggers (``consultant_directory_api.app.services...``),
so every mutation, seed load and storage failure ends up here.

Uvicorn and pytest install their own handlers first; in that case the
existing configuration is left alone.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the directory's handlers to the root logger.

    Parameters
    ----------
    level : str
        Value of ``LOG_LEVEL``.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Value of ``LOG_FILE``.  Missing parent directories are created.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(root.level))
