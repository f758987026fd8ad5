"""Role API schemas."""

from pydantic import BaseModel, Field

from tenant_admin.schemas.common import EntityResponse


class RoleCreate(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=1, max_length=128)


class RoleUpdate(BaseModel):
    """Request body for renaming a role."""

    name: str | None = Field(default=None, min_length=1, max_length=128)


class RolePermissionAssign(BaseModel):
    permission_id: int


class RoleResponse(EntityResponse):
    id: str
    name: str
