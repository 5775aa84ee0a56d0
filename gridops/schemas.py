"""
gridops/schemas.py

Pydantic request schemas. Validation failures here never reach a resource
manager; the boundary reports them as 400 invalid input.

Ownership fields (belongsToId) are never accepted from the client.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Generic, Optional, TypeVar

from pydantic import BeforeValidator, Field, field_validator

from gridops.config import NAME_MAX_LENGTH, PASSWORD_MAX_BYTES
from gridops.errors import ValidationFailure
from gridops.lifecycle import MaintenanceStatus, parse_status
from gridops.models import ApiModel


class RequestModel(ApiModel):
    def changes(self) -> Dict[str, Any]:
        """Fields the client actually supplied with a non-null value."""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


# ========================================================================
# USERS
# ========================================================================

class CredentialsRequest(RequestModel):
    """Body of POST /user and POST /signin."""
    username: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationFailure(f"password longer than {PASSWORD_MAX_BYTES} bytes")
        return v


class TokenResponse(ApiModel):
    token: str


T = TypeVar("T")


class DataResponse(ApiModel, Generic[T]):
    """Success envelope for every /api route."""
    data: T


class ErrorResponse(ApiModel):
    message: str


# ========================================================================
# ASSETS
# ========================================================================

class AssetCreateRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, description="Equipment name, e.g. Turbine-TR-505")

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class AssetUpdateRequest(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


# ========================================================================
# MAINTENANCE RECORDS
# ========================================================================

def _status_or_none(v):
    if v is None:
        return None
    return parse_status(v)


StatusField = Annotated[Optional[MaintenanceStatus], BeforeValidator(_status_or_none)]


class MaintenanceRecordCreateRequest(RequestModel):
    title: str = Field(..., description="Service type, e.g. Annual Safety Inspection")
    body: str = Field(..., description="Technician notes")
    asset_id: str = Field(..., min_length=1)
    status: StatusField = None
    version: Optional[str] = Field(None, description="Firmware version, if applicable")


class MaintenanceRecordUpdateRequest(RequestModel):
    title: Optional[str] = None
    body: Optional[str] = None
    status: StatusField = None
    version: Optional[str] = None


# ========================================================================
# CHECKLIST TASKS
# ========================================================================

class ChecklistTaskCreateRequest(RequestModel):
    name: str = Field(..., max_length=NAME_MAX_LENGTH, description="Task name, e.g. Voltage Output Checked")
    description: str = Field(..., description="Result, e.g. Output stable at 240V")
    maintenance_record_id: str = Field(..., min_length=1)


class ChecklistTaskUpdateRequest(RequestModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
