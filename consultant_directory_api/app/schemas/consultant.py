"""
Pydantic schemas for consultant records.

A consultant is a firm contact offering one service in one or more
regions.  ``ConsultantWrite`` describes the request body accepted by
the create and update endpoints.  Its fields are typed but optional so
that a body with missing values still parses and the service layer can
report every missing field at once.  ``ConsultantRead`` is the record
returned to clients; it serializes with camelCase keys (``isCustom``,
``createdAt``, ``updatedAt``).
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ConsultantWrite(BaseModel):
    """Request body for creating or replacing a consultant."""

    firm: Optional[str] = Field(None, description="Firm name")
    contact: Optional[str] = Field(None, description="Name of the contact person")
    email: Optional[str] = Field(None, description="Contact email, unique across the directory")
    phone: Optional[str] = Field(None, description="Optional phone number")
    service: Optional[str] = Field(None, description="Service type, e.g. 'ADA Review'")
    regions: Optional[List[str]] = Field(None, description="Regions covered; at least one")


class ConsultantCreate(ConsultantWrite):
    """Schema for creating a consultant."""
    pass


class ConsultantUpdate(ConsultantWrite):
    """Schema for updating a consultant.

    Updates replace every editable field, so the same fields are
    required as for creation.  ``id``, ``createdAt`` and ``isCustom``
    cannot be changed and are ignored if a client sends them.
    """
    pass


class ConsultantRead(BaseModel):
    """Schema for reading a consultant from the API."""

    id: int
    firm: str
    contact: str
    email: str
    phone: Optional[str] = None
    service: str
    regions: List[str]
    is_custom: bool = Field(..., alias="isCustom")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }


class ConsultantFilters(BaseModel):
    """Optional constraints for listing consultants; combined with AND."""

    service: Optional[str] = None
    region: Optional[str] = None
    search: Optional[str] = None


class ConsultantDeleted(BaseModel):
    """Confirmation returned after a consultant has been deleted."""

    message: str
    deleted_id: int = Field(..., alias="deletedId")

    model_config = {
        "populate_by_name": True,
    }
