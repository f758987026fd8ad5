"""Persistence models: ORM entities and mixins."""

from tenant_admin.infrastructure.persistence.models.mixins import (
    CuidMixin,
    Entity,
    SoftDeleteEntity,
    SoftDeleteMixin,
    TimestampMixin,
)
from tenant_admin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from tenant_admin.infrastructure.persistence.models.role import Role
from tenant_admin.infrastructure.persistence.models.tenant import Tenant
from tenant_admin.infrastructure.persistence.models.user import User
from tenant_admin.infrastructure.persistence.models.user_tenant import UserTenant

__all__ = [
    "Tenant",
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "UserTenant",
    "CuidMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
    "Entity",
    "SoftDeleteEntity",
]
