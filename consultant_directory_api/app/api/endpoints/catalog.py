"""
Catalog endpoints.

Clients use these lists to populate filter drop‑downs: every distinct
service and every region covered by at least one consultant.
"""

from typing import List

from fastapi import APIRouter, Depends

from consultant_directory_api.app.api.dependencies import get_statistics_service
from consultant_directory_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/services", response_model=List[str])
async def list_services(stats: StatisticsService = Depends(get_statistics_service)) -> List[str]:
    return await stats.list_services()


@router.get("/regions", response_model=List[str])
async def list_regions(stats: StatisticsService = Depends(get_statistics_service)) -> List[str]:
    return await stats.list_regions()
