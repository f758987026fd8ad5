"""Service dependencies (composition root).

Read variants use get_db; *_for_write variants use get_db_transactional so
everything a request writes commits or rolls back together.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.application.services import (
    PermissionService,
    RoleService,
    TenantService,
    UserService,
)
from tenant_admin.infrastructure.persistence.database import get_db, get_db_transactional
from tenant_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    TenantRepository,
    UserRepository,
    UserRoleRepository,
    UserTenantRepository,
)


def get_identity_admin(request: Request) -> Any:
    """Cognito admin client set in lifespan; None when auth is disabled."""
    return getattr(request.app.state, "identity_admin", None)


def _role_service(db: AsyncSession) -> RoleService:
    return RoleService(
        RoleRepository(db), PermissionRepository(db), RolePermissionRepository(db)
    )


def _user_service(db: AsyncSession, identity_admin: Any) -> UserService:
    return UserService(
        UserRepository(db), RoleRepository(db), UserRoleRepository(db), identity_admin
    )


def _tenant_service(db: AsyncSession, identity_admin: Any) -> TenantService:
    return TenantService(
        TenantRepository(db),
        UserRepository(db),
        UserTenantRepository(db),
        role_repo=RoleRepository(db),
        user_role_repo=UserRoleRepository(db),
        identity_admin=identity_admin,
    )


async def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleService:
    return _role_service(db)


async def get_role_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RoleService:
    return _role_service(db)


async def get_permission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionService:
    return PermissionService(PermissionRepository(db))


async def get_permission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PermissionService:
    return PermissionService(PermissionRepository(db))


async def get_user_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity_admin: Annotated[Any, Depends(get_identity_admin)],
) -> UserService:
    return _user_service(db, identity_admin)


async def get_user_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    identity_admin: Annotated[Any, Depends(get_identity_admin)],
) -> UserService:
    return _user_service(db, identity_admin)


async def get_tenant_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity_admin: Annotated[Any, Depends(get_identity_admin)],
) -> TenantService:
    return _tenant_service(db, identity_admin)


async def get_tenant_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    identity_admin: Annotated[Any, Depends(get_identity_admin)],
) -> TenantService:
    return _tenant_service(db, identity_admin)
