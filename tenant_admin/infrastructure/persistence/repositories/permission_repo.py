"""Permission repository. Permissions use integer ids."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.permission import Permission
from tenant_admin.infrastructure.persistence.repositories.base import (
    SoftDeleteRepository,
)


class PermissionRepository(SoftDeleteRepository[Permission, int]):
    entity_name = "Permission"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission, Permission.id, Permission.deleted_at)

    async def find_by_name(self, name: str) -> Permission | None:
        """Return the active permission with this exact name, if any."""
        result = await self._execute(
            select(Permission).where(
                Permission.name == name, Permission.deleted_at.is_(None)
            ),
            "find_by_name",
        )
        return result.scalars().first()
