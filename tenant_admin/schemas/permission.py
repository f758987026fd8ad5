"""Permission API schemas."""

from pydantic import BaseModel, Field

from tenant_admin.schemas.common import EntityResponse


class PermissionCreate(BaseModel):
    """Request body for creating a permission (e.g. 'doc:write')."""

    name: str = Field(..., min_length=1, max_length=128)


class PermissionUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)


class PermissionResponse(EntityResponse):
    id: int
    name: str
