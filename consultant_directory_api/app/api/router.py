"""
Top‑level API router.

This router aggregates the endpoint routers.  ``main.create_app``
mounts it under ``/api``, giving ``/api/consultants``,
``/api/services``, ``/api/regions``, ``/api/stats`` and
``/api/health``.
"""

from fastapi import APIRouter

from .endpoints import catalog, consultants, statistics

router = APIRouter()

router.include_router(consultants.router, prefix="/consultants", tags=["consultants"])
router.include_router(catalog.router, tags=["catalog"])
router.include_router(statistics.router, tags=["statistics"])
