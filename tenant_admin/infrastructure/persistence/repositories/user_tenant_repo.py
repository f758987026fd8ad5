"""UserTenant repository: tenant membership rows (hard delete)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.user_tenant import UserTenant
from tenant_admin.infrastructure.persistence.repositories.base import EntityRepository


class UserTenantRepository(EntityRepository[UserTenant, str]):
    """Membership of users in tenants. delete() removes the row."""

    entity_name = "UserTenant"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserTenant, UserTenant.id)

    async def find_membership(self, user_id: str, tenant_id: str) -> UserTenant | None:
        result = await self._execute(
            select(UserTenant).where(
                UserTenant.user_id == user_id, UserTenant.tenant_id == tenant_id
            ),
            "find_membership",
        )
        return result.scalars().first()

    async def list_for_tenant(self, tenant_id: str) -> list[UserTenant]:
        result = await self._execute(
            select(UserTenant)
            .where(UserTenant.tenant_id == tenant_id)
            .order_by(UserTenant.created_at, UserTenant.id),
            "list_for_tenant",
        )
        return list(result.scalars().all())
