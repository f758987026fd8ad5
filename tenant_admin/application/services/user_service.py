"""User application service: local user records, role assignment, activation."""

from __future__ import annotations

from typing import Any

from tenant_admin.application.interfaces.repositories import (
    IEntityStore,
    IUserRepository,
    IUserRoleRepository,
)
from tenant_admin.application.interfaces.services import IIdentityAdmin
from tenant_admin.application.services.validation import require_email, require_text
from tenant_admin.domain.exceptions import ConflictException
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class UserService:
    """Users mirror identities held by the identity provider; no passwords are stored.

    When an identity admin is configured, activate/deactivate are mirrored to the
    provider; callers run these in a transactional session so a provider failure
    rolls back the local change.
    """

    def __init__(
        self,
        user_repo: IUserRepository[Any],
        role_repo: IEntityStore[Any, str],
        user_role_repo: IUserRoleRepository[Any],
        identity_admin: IIdentityAdmin | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._user_role_repo = user_role_repo
        self._identity_admin = identity_admin

    async def _ensure_username_available(
        self, username: str, own_id: str | None = None
    ) -> None:
        existing = await self._user_repo.find_by_username(username)
        if existing is not None and existing.id != own_id:
            raise ConflictException(
                f"User with username '{username}' already exists",
                resource_type="User",
                field="username",
                value=username,
            )

    async def create_user(
        self, external_subject_id: str, username: str, email: str
    ) -> Any:
        """Create the local record for an existing provider identity.

        Raises:
            ConflictException: username or subject already linked to an active user.
        """
        external_subject_id = require_text(external_subject_id, "external_subject_id")
        username = require_text(username, "username", max_length=128)
        email = require_email(email)
        await self._ensure_username_available(username)
        if await self._user_repo.find_by_external_subject_id(external_subject_id):
            raise ConflictException(
                "A user is already linked to this identity",
                resource_type="User",
                field="external_subject_id",
                value=external_subject_id,
            )
        user = await self._user_repo.create(
            {
                "external_subject_id": external_subject_id,
                "username": username,
                "email": email,
                "is_active": True,
            }
        )
        logger.info("User created", extra={"user_id": user.id, "username": username})
        return user

    async def get_user(self, user_id: str) -> Any:
        return await self._user_repo.find_by_id(user_id)

    async def list_users(self, include_deleted: bool = False) -> list[Any]:
        return await self._user_repo.find_all(include_deleted=include_deleted)

    async def update_user(
        self, user_id: str, username: str | None = None, email: str | None = None
    ) -> Any:
        """Partial update of username and/or email."""
        current = await self._user_repo.find_by_id(user_id)
        data: dict[str, Any] = {}
        if username is not None:
            username = require_text(username, "username", max_length=128)
            if username != current.username:
                await self._ensure_username_available(username, own_id=user_id)
            data["username"] = username
        if email is not None:
            data["email"] = require_email(email)
        if not data:
            return current
        return await self._user_repo.update(user_id, data)

    async def delete_user(self, user_id: str) -> None:
        await self._user_repo.find_by_id(user_id)
        await self._user_repo.delete(user_id)
        logger.info("User deleted", extra={"user_id": user_id})

    async def deactivate_user(self, user_id: str) -> Any:
        """Mark inactive locally and disable sign-in at the provider."""
        return await self._set_active(user_id, False)

    async def activate_user(self, user_id: str) -> Any:
        return await self._set_active(user_id, True)

    async def _set_active(self, user_id: str, active: bool) -> Any:
        current = await self._user_repo.find_by_id(user_id)
        if current.is_active == active:
            return current
        updated = await self._user_repo.update(user_id, {"is_active": active})
        if self._identity_admin is not None:
            if active:
                await self._identity_admin.enable_user(updated.username)
            else:
                await self._identity_admin.disable_user(updated.username)
        logger.info(
            "User %s", "activated" if active else "deactivated", extra={"user_id": user_id}
        )
        return updated

    async def assign_role_to_user(self, user_id: str, role_id: str) -> bool:
        """Grant a role. Both must be active; assigning twice is a no-op.

        Returns True if a new assignment was stored.
        """
        await self._user_repo.find_by_id(user_id)
        await self._role_repo.find_by_id(role_id)
        added = await self._user_role_repo.assign_role_to_user(user_id, role_id)
        logger.info(
            "Role assigned to user",
            extra={"user_id": user_id, "role_id": role_id, "added": added},
        )
        return added

    async def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        """Revoke a role. The user must exist; a missing pair is not an error."""
        await self._user_repo.find_by_id(user_id)
        return await self._user_role_repo.remove_role_from_user(user_id, role_id)

    async def get_roles_for_user(self, user_id: str) -> list[Any]:
        """Active roles of the user, ordered by name."""
        await self._user_repo.find_by_id(user_id)
        return await self._user_role_repo.get_roles_for_user(user_id)
