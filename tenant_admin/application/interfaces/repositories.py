"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Entities are returned as attribute-bearing objects (ORM rows in practice).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

T = TypeVar("T")
IdT = TypeVar("IdT")
RoleT = TypeVar("RoleT")
PermissionT = TypeVar("PermissionT")


class IEntityStore(Protocol[T, IdT]):
    """Generic entity store: create / find_by_id / find_all / update / delete."""

    async def create(self, data: Mapping[str, Any]) -> T:
        """Persist and return the entity with generated id and timestamps."""

    async def find_by_id(self, entity_id: IdT, include_deleted: bool = False) -> T:
        """Return the entity or raise ResourceNotFoundException."""

    async def find_all(self, include_deleted: bool = False) -> list[T]:
        """Return all entities (active only unless include_deleted)."""

    async def update(self, entity_id: IdT, data: Mapping[str, Any]) -> T:
        """Partial update; ResourceNotFoundException on zero rows."""

    async def delete(self, entity_id: IdT) -> bool:
        """Soft or hard delete depending on the store."""


class INamedEntityStore(IEntityStore[T, IdT], Protocol[T, IdT]):
    """Entity store whose rows carry a name unique among active rows."""

    async def find_by_name(self, name: str) -> T | None:
        """Return the active entity with this name, or None."""


class IUserRepository(IEntityStore[T, str], Protocol[T]):
    async def find_by_external_subject_id(self, subject_id: str) -> T | None:
        """Return the active user for an identity-provider subject, or None."""

    async def find_by_username(self, username: str) -> T | None:
        """Return the active user with this username, or None."""


class IUserRoleRepository(Protocol[RoleT]):
    async def assign_role_to_user(self, user_id: str, role_id: str) -> bool:
        """Insert the pair if absent; True if inserted."""

    async def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        """Delete the pair; True if a row was removed."""

    async def get_roles_for_user(self, user_id: str) -> list[RoleT]:
        """Active roles for the user, ordered by name."""


class IRolePermissionRepository(Protocol[PermissionT]):
    async def assign_permission_to_role(self, role_id: str, permission_id: int) -> bool:
        """Insert the pair if absent; True if inserted."""

    async def remove_permission_from_role(
        self, role_id: str, permission_id: int
    ) -> bool:
        """Delete the pair; True if a row was removed."""

    async def get_permissions_for_role(self, role_id: str) -> list[PermissionT]:
        """Active permissions for the role, ordered by name."""


class IUserTenantRepository(IEntityStore[T, str], Protocol[T]):
    async def find_membership(self, user_id: str, tenant_id: str) -> T | None:
        """Return the membership row for (user, tenant), or None."""

    async def list_for_tenant(self, tenant_id: str) -> list[T]:
        """Memberships of a tenant, oldest first."""
