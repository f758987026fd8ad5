"""Tenant API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from tenant_admin.schemas.common import EntityResponse


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class TenantUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class TenantWithAdminCreate(BaseModel):
    """Request body for creating a tenant together with its first admin user."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    admin_username: str = Field(..., min_length=1, max_length=128)
    admin_email: EmailStr
    admin_role_name: str | None = Field(default=None, max_length=128)


class TenantResponse(EntityResponse):
    id: str
    name: str
    description: str | None


class TenantCreationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tenant_id: str
    tenant_name: str
    admin_user_id: str
    admin_username: str
    admin_email: str
    admin_subject_id: str
    admin_role_assigned: bool


class MembershipCreate(BaseModel):
    user_id: str


class MembershipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    tenant_id: str
    is_active: bool
    created_at: datetime
