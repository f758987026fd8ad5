"""Tenant application service: CRUD, membership, and tenant creation with its first admin."""

from __future__ import annotations

from typing import Any

from tenant_admin.application.dtos.tenant import TenantCreationResult
from tenant_admin.application.interfaces.repositories import (
    INamedEntityStore,
    IUserRepository,
    IUserRoleRepository,
    IUserTenantRepository,
)
from tenant_admin.application.interfaces.services import IIdentityAdmin
from tenant_admin.application.services.validation import require_email, require_text
from tenant_admin.domain.exceptions import ConflictException, ValidationException
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_MSG_DUPLICATE_TENANT = "Tenant with name '%s' already exists"


class TenantService:
    """Tenants, their members, and the tenant + admin creation flow."""

    def __init__(
        self,
        tenant_repo: INamedEntityStore[Any, str],
        user_repo: IUserRepository[Any],
        user_tenant_repo: IUserTenantRepository[Any],
        role_repo: INamedEntityStore[Any, str] | None = None,
        user_role_repo: IUserRoleRepository[Any] | None = None,
        identity_admin: IIdentityAdmin | None = None,
    ) -> None:
        self._tenant_repo = tenant_repo
        self._user_repo = user_repo
        self._user_tenant_repo = user_tenant_repo
        self._role_repo = role_repo
        self._user_role_repo = user_role_repo
        self._identity_admin = identity_admin

    async def _ensure_name_available(self, name: str, own_id: str | None = None) -> None:
        existing = await self._tenant_repo.find_by_name(name)
        if existing is not None and existing.id != own_id:
            raise ConflictException(
                _MSG_DUPLICATE_TENANT % name,
                resource_type="Tenant",
                field="name",
                value=name,
            )

    async def create_tenant(self, name: str, description: str | None = None) -> Any:
        """Create a tenant. Raises ConflictException if an active tenant has this name."""
        name = require_text(name, "name")
        await self._ensure_name_available(name)
        tenant = await self._tenant_repo.create({"name": name, "description": description})
        logger.info("Tenant created", extra={"tenant_id": tenant.id, "tenant_name": name})
        return tenant

    async def get_tenant(self, tenant_id: str) -> Any:
        return await self._tenant_repo.find_by_id(tenant_id)

    async def list_tenants(self, include_deleted: bool = False) -> list[Any]:
        return await self._tenant_repo.find_all(include_deleted=include_deleted)

    async def update_tenant(
        self,
        tenant_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Any:
        current = await self._tenant_repo.find_by_id(tenant_id)
        data: dict[str, Any] = {}
        if name is not None:
            name = require_text(name, "name")
            if name != current.name:
                await self._ensure_name_available(name, own_id=tenant_id)
            data["name"] = name
        if description is not None:
            data["description"] = description
        if not data:
            return current
        return await self._tenant_repo.update(tenant_id, data)

    async def delete_tenant(self, tenant_id: str) -> None:
        await self._tenant_repo.find_by_id(tenant_id)
        await self._tenant_repo.delete(tenant_id)
        logger.info("Tenant deleted", extra={"tenant_id": tenant_id})

    async def add_member(self, tenant_id: str, user_id: str) -> Any:
        """Add an active user to an active tenant. Returns the membership (existing or new)."""
        await self._tenant_repo.find_by_id(tenant_id)
        await self._user_repo.find_by_id(user_id)
        existing = await self._user_tenant_repo.find_membership(user_id, tenant_id)
        if existing is not None:
            return existing
        return await self._user_tenant_repo.create(
            {"user_id": user_id, "tenant_id": tenant_id, "is_active": True}
        )

    async def remove_member(self, tenant_id: str, user_id: str) -> bool:
        """Remove a membership row. Returns False if the user was not a member."""
        await self._tenant_repo.find_by_id(tenant_id)
        membership = await self._user_tenant_repo.find_membership(user_id, tenant_id)
        if membership is None:
            return False
        return await self._user_tenant_repo.delete(membership.id)

    async def list_members(self, tenant_id: str) -> list[Any]:
        await self._tenant_repo.find_by_id(tenant_id)
        return await self._user_tenant_repo.list_for_tenant(tenant_id)

    async def create_with_admin(
        self,
        name: str,
        admin_username: str,
        admin_email: str,
        description: str | None = None,
        admin_role_name: str | None = None,
    ) -> TenantCreationResult:
        """Create tenant, provider user, local user and membership; optionally grant a role.

        Caller must run this within a single DB transaction (the transactional
        session dependency, or transaction(session)) so the tenant, user,
        membership and role assignment commit or roll back together. If any
        local write fails after the provider user was created, that provider
        user is deleted again before the error propagates.

        Raises:
            ConflictException: Tenant name or admin username already taken.
            IdentityProviderException: Provider refused to create the user.
        """
        if self._identity_admin is None:
            raise ValidationException("Identity provider is not configured")
        name = require_text(name, "name")
        admin_username = require_text(admin_username, "admin_username", max_length=128)
        admin_email = require_email(admin_email, "admin_email")

        await self._ensure_name_available(name)
        if await self._user_repo.find_by_username(admin_username):
            raise ConflictException(
                f"User with username '{admin_username}' already exists",
                resource_type="User",
                field="username",
                value=admin_username,
            )

        tenant = await self._tenant_repo.create({"name": name, "description": description})
        provider_user = await self._identity_admin.create_user(admin_username, admin_email)
        try:
            user = await self._user_repo.create(
                {
                    "external_subject_id": provider_user.subject_id,
                    "username": provider_user.username,
                    "email": provider_user.email,
                    "is_active": True,
                }
            )
            await self._user_tenant_repo.create(
                {"user_id": user.id, "tenant_id": tenant.id, "is_active": True}
            )
            role_assigned = await self._assign_admin_role(user.id, admin_role_name)
        except Exception:
            await self._compensate_provider_user(provider_user.username)
            raise

        logger.info(
            "Tenant created with admin",
            extra={"tenant_id": tenant.id, "admin_user_id": user.id},
        )
        return TenantCreationResult(
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            admin_user_id=user.id,
            admin_username=user.username,
            admin_email=user.email,
            admin_subject_id=provider_user.subject_id,
            admin_role_assigned=role_assigned,
        )

    async def _assign_admin_role(self, user_id: str, role_name: str | None) -> bool:
        if not role_name or self._role_repo is None or self._user_role_repo is None:
            return False
        role = await self._role_repo.find_by_name(role_name)
        if role is None:
            logger.warning("Admin role not found; skipping assignment: %s", role_name)
            return False
        await self._user_role_repo.assign_role_to_user(user_id, role.id)
        return True

    async def _compensate_provider_user(self, username: str) -> None:
        assert self._identity_admin is not None
        try:
            await self._identity_admin.delete_user(username)
        except Exception:
            logger.error(
                "Failed to delete provider user after tenant creation failed: %s",
                username,
                exc_info=True,
            )
