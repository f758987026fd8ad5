"""DTOs for tenant use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantCreationResult:
    """Result of creating a tenant together with its first admin user.

    admin_role_assigned is False when no role name was given or the role did
    not exist.
    """

    tenant_id: str
    tenant_name: str
    admin_user_id: str
    admin_username: str
    admin_email: str
    admin_subject_id: str
    admin_role_assigned: bool = False
