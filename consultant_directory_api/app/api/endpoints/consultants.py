"""
Consultant endpoints.

These routes expose the CRUD API for consultants.  Listing accepts
optional ``service``, ``region`` and ``search`` query parameters which
are combined with AND.  Only custom consultants (created through this
API) can be deleted; built‑in records answer 403.  An ID that cannot
name a stored row answers 404 like any other unknown consultant.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from consultant_directory_api.app.api.dependencies import get_consultant_id, get_consultant_service
from consultant_directory_api.app.schemas.consultant import (
    ConsultantCreate,
    ConsultantDeleted,
    ConsultantFilters,
    ConsultantRead,
    ConsultantUpdate,
)
from consultant_directory_api.app.services.consultant_service import ConsultantService

router = APIRouter()


@router.get("", response_model=List[ConsultantRead])
async def list_consultants(
    service: Optional[str] = Query(None, description="Exact service name"),
    region: Optional[str] = Query(None, description="Region the consultant must cover"),
    search: Optional[str] = Query(None, description="Text to look for in firm, contact, email or service"),
    consultants: ConsultantService = Depends(get_consultant_service),
) -> List[ConsultantRead]:
    """Return consultants ordered by firm name, optionally filtered."""
    filters = ConsultantFilters(service=service, region=region, search=search)
    return await consultants.list_consultants(filters)


@router.get("/{consultant_id}", response_model=ConsultantRead)
async def get_consultant(
    consultant_id: int = Depends(get_consultant_id),
    consultants: ConsultantService = Depends(get_consultant_service),
) -> ConsultantRead:
    """Retrieve a single consultant by ID; 404 if it does not exist."""
    return await consultants.get_consultant(consultant_id)


@router.post("", response_model=ConsultantRead, status_code=status.HTTP_201_CREATED)
async def create_consultant(
    consultant_in: ConsultantCreate,
    consultants: ConsultantService = Depends(get_consultant_service),
) -> ConsultantRead:
    """Create a custom consultant.

    Returns 400 for missing fields or a malformed email and 409 when
    the email is already registered.
    """
    return await consultants.create_consultant(consultant_in)


@router.put("/{consultant_id}", response_model=ConsultantRead)
async def update_consultant(
    consultant_in: ConsultantUpdate,
    consultant_id: int = Depends(get_consultant_id),
    consultants: ConsultantService = Depends(get_consultant_service),
) -> ConsultantRead:
    """Replace a consultant's editable fields."""
    return await consultants.update_consultant(consultant_id, consultant_in)


@router.delete("/{consultant_id}", response_model=ConsultantDeleted)
async def delete_consultant(
    consultant_id: int = Depends(get_consultant_id),
    consultants: ConsultantService = Depends(get_consultant_service),
) -> ConsultantDeleted:
    """Delete a custom consultant (403 for built‑in records)."""
    return await consultants.delete_consultant(consultant_id)
