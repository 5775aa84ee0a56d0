from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

from gridops.lifecycle import DEFAULT_STATUS, MaintenanceStatus


class ApiModel(BaseModel):
    """snake_case in Python, camelCase on the wire; rows may carry extra columns."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# Models
class User(ApiModel):
    id: str
    username: str
    created_at: str


class Asset(ApiModel):
    id: str
    name: str
    belongs_to_id: str
    created_at: str
    updated_at: str


class MaintenanceRecord(ApiModel):
    id: str
    title: str
    body: str
    status: MaintenanceStatus = DEFAULT_STATUS
    version: Optional[str] = None
    asset_id: str
    created_at: str
    updated_at: str


class ChecklistTask(ApiModel):
    id: str
    name: str
    description: str
    maintenance_record_id: str
    created_at: str
