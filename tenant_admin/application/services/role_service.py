"""Role application service: CRUD with name uniqueness and permission assignment."""

from __future__ import annotations

from typing import Any

from tenant_admin.application.interfaces.repositories import (
    INamedEntityStore,
    IRolePermissionRepository,
)
from tenant_admin.application.services.validation import require_text
from tenant_admin.domain.exceptions import ConflictException
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_MSG_DUPLICATE_ROLE = "Role with name '%s' already exists"


class RoleService:
    """Roles are global; names are unique among active roles."""

    def __init__(
        self,
        role_repo: INamedEntityStore[Any, str],
        permission_repo: INamedEntityStore[Any, int],
        role_permission_repo: IRolePermissionRepository[Any],
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo

    async def _ensure_name_available(self, name: str, own_id: str | None = None) -> None:
        # Fast path only: the partial unique index on role.name settles races.
        existing = await self._role_repo.find_by_name(name)
        if existing is not None and existing.id != own_id:
            raise ConflictException(
                _MSG_DUPLICATE_ROLE % name, resource_type="Role", field="name", value=name
            )

    async def create_role(self, name: str) -> Any:
        """Create a role. Raises ConflictException if an active role has this name."""
        name = require_text(name, "name", max_length=128)
        await self._ensure_name_available(name)
        role = await self._role_repo.create({"name": name})
        logger.info("Role created", extra={"role_id": role.id, "role_name": name})
        return role

    async def get_role(self, role_id: str) -> Any:
        return await self._role_repo.find_by_id(role_id)

    async def list_roles(self, include_deleted: bool = False) -> list[Any]:
        return await self._role_repo.find_all(include_deleted=include_deleted)

    async def update_role(self, role_id: str, name: str | None = None) -> Any:
        """Rename a role. Uniqueness is checked only when the name actually changes."""
        current = await self._role_repo.find_by_id(role_id)
        if name is None:
            return current
        name = require_text(name, "name", max_length=128)
        if name != current.name:
            await self._ensure_name_available(name, own_id=role_id)
        return await self._role_repo.update(role_id, {"name": name})

    async def delete_role(self, role_id: str) -> None:
        """Soft-delete a role. Raises ResourceNotFoundException if missing or already deleted."""
        await self._role_repo.find_by_id(role_id)
        await self._role_repo.delete(role_id)
        logger.info("Role deleted", extra={"role_id": role_id})

    async def assign_permission_to_role(self, role_id: str, permission_id: int) -> bool:
        """Attach a permission. Both must be active; assigning twice is a no-op.

        Returns True if a new assignment was stored.
        """
        await self._role_repo.find_by_id(role_id)
        await self._permission_repo.find_by_id(permission_id)
        added = await self._role_permission_repo.assign_permission_to_role(
            role_id, permission_id
        )
        logger.info(
            "Permission assigned to role",
            extra={"role_id": role_id, "permission_id": permission_id, "added": added},
        )
        return added

    async def remove_permission_from_role(
        self, role_id: str, permission_id: int
    ) -> bool:
        """Detach a permission. The role must exist; a missing pair is not an error."""
        await self._role_repo.find_by_id(role_id)
        return await self._role_permission_repo.remove_permission_from_role(
            role_id, permission_id
        )

    async def get_permissions_for_role(self, role_id: str) -> list[Any]:
        """Active permissions of the role, ordered by name."""
        await self._role_repo.find_by_id(role_id)
        return await self._role_permission_repo.get_permissions_for_role(role_id)
