"""UserRole repository: user-role assignments and the user's active roles."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.permission import UserRole
from tenant_admin.infrastructure.persistence.models.role import Role
from tenant_admin.infrastructure.persistence.repositories.base import (
    AssociationRepository,
)


class UserRoleRepository(AssociationRepository[UserRole]):
    """Pairs (user_id, role_id). Assigning twice or removing a missing pair is a no-op."""

    entity_name = "UserRole"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserRole, UserRole.user_id, UserRole.role_id)

    async def assign_role_to_user(self, user_id: str, role_id: str) -> bool:
        return await self.add(user_id, role_id)

    async def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        return await self.remove(user_id, role_id)

    async def get_roles_for_user(self, user_id: str) -> list[Role]:
        """Active roles assigned to the user, ordered by name (single join)."""
        result = await self._execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.deleted_at.is_(None))
            .order_by(Role.name),
            "get_roles_for_user",
        )
        return list(result.scalars().all())
