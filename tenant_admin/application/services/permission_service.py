"""Permission application service: CRUD with name uniqueness."""

from __future__ import annotations

from typing import Any

from tenant_admin.application.interfaces.repositories import INamedEntityStore
from tenant_admin.application.services.validation import require_text
from tenant_admin.domain.exceptions import ConflictException
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_MSG_DUPLICATE_PERMISSION = "Permission with name '%s' already exists"


class PermissionService:
    """Permissions are opaque names such as 'doc:write'."""

    def __init__(self, permission_repo: INamedEntityStore[Any, int]) -> None:
        self._repo = permission_repo

    async def _ensure_name_available(self, name: str, own_id: int | None = None) -> None:
        existing = await self._repo.find_by_name(name)
        if existing is not None and existing.id != own_id:
            raise ConflictException(
                _MSG_DUPLICATE_PERMISSION % name,
                resource_type="Permission",
                field="name",
                value=name,
            )

    async def create_permission(self, name: str) -> Any:
        """Create a permission. Raises ConflictException if the name is taken."""
        name = require_text(name, "name", max_length=128)
        await self._ensure_name_available(name)
        permission = await self._repo.create({"name": name})
        logger.info(
            "Permission created",
            extra={"permission_id": permission.id, "permission_name": name},
        )
        return permission

    async def get_permission(self, permission_id: int) -> Any:
        return await self._repo.find_by_id(permission_id)

    async def list_permissions(self, include_deleted: bool = False) -> list[Any]:
        return await self._repo.find_all(include_deleted=include_deleted)

    async def update_permission(self, permission_id: int, name: str | None = None) -> Any:
        current = await self._repo.find_by_id(permission_id)
        if name is None:
            return current
        name = require_text(name, "name", max_length=128)
        if name != current.name:
            await self._ensure_name_available(name, own_id=permission_id)
        return await self._repo.update(permission_id, {"name": name})

    async def delete_permission(self, permission_id: int) -> None:
        await self._repo.find_by_id(permission_id)
        await self._repo.delete(permission_id)
        logger.info("Permission deleted", extra={"permission_id": permission_id})
