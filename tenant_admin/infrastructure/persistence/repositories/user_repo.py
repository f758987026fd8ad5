"""User repository: soft-delete entity store plus lookups by subject and username."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.infrastructure.persistence.models.user import User
from tenant_admin.infrastructure.persistence.repositories.base import (
    SoftDeleteRepository,
)


class UserRepository(SoftDeleteRepository[User, str]):
    """Users keyed by CUID. Lookups below only see active (non-deleted) rows."""

    entity_name = "User"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User, User.id, User.deleted_at)

    async def find_by_external_subject_id(self, subject_id: str) -> User | None:
        """Return the active user linked to this identity-provider subject, if any."""
        result = await self._execute(
            select(User).where(
                User.external_subject_id == subject_id, User.deleted_at.is_(None)
            ),
            "find_by_external_subject_id",
        )
        return result.scalars().first()

    async def find_by_username(self, username: str) -> User | None:
        result = await self._execute(
            select(User).where(User.username == username, User.deleted_at.is_(None)),
            "find_by_username",
        )
        return result.scalars().first()
