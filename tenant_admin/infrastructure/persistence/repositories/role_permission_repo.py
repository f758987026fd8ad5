"""RolePermission repository: role-permission assignments and a role's permissions."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from tenant_admin.infrastructure.persistence.repositories.base import (
    AssociationRepository,
)


class RolePermissionRepository(AssociationRepository[RolePermission]):
    """Pairs (role_id, permission_id). Assigning twice or removing a missing pair is a no-op."""

    entity_name = "RolePermission"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(
            db, RolePermission, RolePermission.role_id, RolePermission.permission_id
        )

    async def assign_permission_to_role(self, role_id: str, permission_id: int) -> bool:
        return await self.add(role_id, permission_id)

    async def remove_permission_from_role(
        self, role_id: str, permission_id: int
    ) -> bool:
        return await self.remove(role_id, permission_id)

    async def get_permissions_for_role(self, role_id: str) -> list[Permission]:
        """Active permissions assigned to the role, ordered by name (single join)."""
        result = await self._execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id, Permission.deleted_at.is_(None))
            .order_by(Permission.name),
            "get_permissions_for_role",
        )
        return list(result.scalars().all())

