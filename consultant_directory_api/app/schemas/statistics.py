"""
Pydantic schemas for directory statistics and health checks.
"""

from pydantic import BaseModel, Field


class DirectoryStats(BaseModel):
    """Aggregate counts over the whole consultant collection.

    ``built_in_consultants`` is always ``total_consultants -
    custom_consultants``.  ``last_updated`` is the time the numbers were
    computed, not a stored value.
    """

    total_consultants: int = Field(..., alias="totalConsultants")
    custom_consultants: int = Field(..., alias="customConsultants")
    built_in_consultants: int = Field(..., alias="builtInConsultants")
    total_services: int = Field(..., alias="totalServices")
    total_regions: int = Field(..., alias="totalRegions")
    last_updated: str = Field(..., alias="lastUpdated")

    model_config = {
        "populate_by_name": True,
    }


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    database: str
