"""Persistence repositories. Re-exports for dependency injection."""

from tenant_admin.infrastructure.persistence.repositories.base import (
    AssociationRepository,
    EntityRepository,
    SoftDeleteRepository,
)
from tenant_admin.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from tenant_admin.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from tenant_admin.infrastructure.persistence.repositories.role_repo import RoleRepository
from tenant_admin.infrastructure.persistence.repositories.tenant_repo import (
    TenantRepository,
)
from tenant_admin.infrastructure.persistence.repositories.user_repo import UserRepository
from tenant_admin.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)
from tenant_admin.infrastructure.persistence.repositories.user_tenant_repo import (
    UserTenantRepository,
)

__all__ = [
    "AssociationRepository",
    "EntityRepository",
    "SoftDeleteRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "TenantRepository",
    "UserRepository",
    "UserRoleRepository",
    "UserTenantRepository",
]
