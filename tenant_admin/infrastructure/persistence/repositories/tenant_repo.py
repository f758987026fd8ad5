"""Tenant repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.tenant import Tenant
from tenant_admin.infrastructure.persistence.repositories.base import (
    SoftDeleteRepository,
)


class TenantRepository(SoftDeleteRepository[Tenant, str]):
    entity_name = "Tenant"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant, Tenant.id, Tenant.deleted_at)

    async def find_by_name(self, name: str) -> Tenant | None:
        result = await self._execute(
            select(Tenant).where(Tenant.name == name, Tenant.deleted_at.is_(None)),
            "find_by_name",
        )
        return result.scalars().first()
