"""User API schemas."""

from pydantic import BaseModel, EmailStr, Field

from tenant_admin.schemas.common import EntityResponse


class UserCreate(BaseModel):
    """Request body for linking an existing provider identity to a local user."""

    external_subject_id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=128)
    email: EmailStr


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None


class UserRoleAssign(BaseModel):
    role_id: str


class UserResponse(EntityResponse):
    id: str
    external_subject_id: str
    username: str
    email: str
    is_active: bool


class CurrentIdentityResponse(BaseModel):
    """The caller as resolved from their bearer token."""

    user_id: str
    subject_id: str
    username: str
    email: str | None
    roles: list[str]
    permissions: list[str]
