"""Ports: repository and service protocols the application layer depends on."""

from tenant_admin.application.interfaces.repositories import (
    IEntityStore,
    INamedEntityStore,
    IRolePermissionRepository,
    IUserRepository,
    IUserRoleRepository,
    IUserTenantRepository,
)
from tenant_admin.application.interfaces.services import (
    IIdentityAdmin,
    IIdentityVerifier,
)

__all__ = [
    "IEntityStore",
    "IIdentityAdmin",
    "IIdentityVerifier",
    "INamedEntityStore",
    "IRolePermissionRepository",
    "IUserRepository",
    "IUserRoleRepository",
    "IUserTenantRepository",
]
