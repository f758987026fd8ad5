"""API v1 dependencies. Re-exports for endpoint modules."""

from tenant_admin.api.v1.dependencies.auth import (
    get_authorization_resolver,
    get_current_identity,
    require_any_permission,
    require_identity,
    require_permissions,
    require_roles,
)
from tenant_admin.api.v1.dependencies.services import (
    get_identity_admin,
    get_permission_service,
    get_permission_service_for_write,
    get_role_service,
    get_role_service_for_write,
    get_tenant_service,
    get_tenant_service_for_write,
    get_user_service,
    get_user_service_for_write,
)

__all__ = [
    "get_authorization_resolver",
    "get_current_identity",
    "get_identity_admin",
    "get_permission_service",
    "get_permission_service_for_write",
    "get_role_service",
    "get_role_service_for_write",
    "get_tenant_service",
    "get_tenant_service_for_write",
    "get_user_service",
    "get_user_service_for_write",
    "require_any_permission",
    "require_identity",
    "require_permissions",
    "require_roles",
]
