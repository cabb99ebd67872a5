"""
Top‑level package for the Consultant Directory API.

This file makes ``consultant_directory_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``consultant_directory_api.app.main``.  The bundled seed data
lives next to it in ``data/``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
