"""Role repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.role import Role
from tenant_admin.infrastructure.persistence.repositories.base import (
    SoftDeleteRepository,
)


class RoleRepository(SoftDeleteRepository[Role, str]):
    entity_name = "Role"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role, Role.id, Role.deleted_at)

    async def find_by_name(self, name: str) -> Role | None:
        """Return the active role with this exact name (case-sensitive), if any."""
        result = await self._execute(
            select(Role).where(Role.name == name, Role.deleted_at.is_(None)),
            "find_by_name",
        )
        return result.scalars().first()
