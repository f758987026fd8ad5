"""Application services (use cases)."""

from tenant_admin.application.services.permission_service import PermissionService
from tenant_admin.application.services.role_service import RoleService
from tenant_admin.application.services.tenant_service import TenantService
from tenant_admin.application.services.user_service import UserService

__all__ = ["PermissionService", "RoleService", "TenantService", "UserService"]
