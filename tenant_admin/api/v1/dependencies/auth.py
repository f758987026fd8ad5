"""Identity and RBAC dependencies.

get_current_identity resolves the caller once per request (FastAPI caches the
dependency and the resolver memoizes on request.state). Route guards are built
with require_permissions / require_any_permission / require_roles.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)
from tenant_admin.domain.identity import Identity
from tenant_admin.infrastructure.persistence.database import get_db
from tenant_admin.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    UserRepository,
    UserRoleRepository,
)
from tenant_admin.infrastructure.services import AuthorizationResolver

_http_bearer = HTTPBearer(auto_error=False)


async def get_authorization_resolver(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationResolver | None:
    """Resolver bound to this request's read session; None when no verifier is configured."""
    verifier = getattr(request.app.state, "identity_verifier", None)
    if verifier is None:
        return None
    return AuthorizationResolver(
        verifier,
        UserRepository(db),
        UserRoleRepository(db),
        RolePermissionRepository(db),
    )


async def get_current_identity(
    request: Request,
    resolver: Annotated[AuthorizationResolver | None, Depends(get_authorization_resolver)],
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ] = None,
) -> Identity | None:
    """The caller's Identity, or None when unauthenticated. Never raises."""
    if resolver is None:
        return None
    return await resolver.resolve_identity(request)


async def require_identity(
    identity: Annotated[Identity | None, Depends(get_current_identity)],
) -> Identity:
    """Raise AuthenticationException (401) when the caller is not authenticated."""
    if identity is None:
        raise AuthenticationException("Authentication required")
    return identity


IdentityGuard = Callable[..., Awaitable[Identity]]


def require_permissions(*permissions: str) -> IdentityGuard:
    """Guard: caller must hold every listed permission."""

    async def _guard(
        identity: Annotated[Identity, Depends(require_identity)],
    ) -> Identity:
        if not identity.has_all_permissions(permissions):
            raise AuthorizationException(list(permissions))
        return identity

    return _guard


def require_any_permission(*permissions: str) -> IdentityGuard:
    """Guard: caller must hold at least one listed permission."""

    async def _guard(
        identity: Annotated[Identity, Depends(require_identity)],
    ) -> Identity:
        if not identity.has_any_permission(permissions):
            raise AuthorizationException(list(permissions))
        return identity

    return _guard


def require_roles(*roles: str) -> IdentityGuard:
    """Guard: caller must hold at least one listed role."""

    async def _guard(
        identity: Annotated[Identity, Depends(require_identity)],
    ) -> Identity:
        if not any(identity.has_role(role) for role in roles):
            raise AuthorizationException(list(roles), message="Role required")
        return identity

    return _guard
