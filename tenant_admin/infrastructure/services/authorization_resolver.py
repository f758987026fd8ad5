"""Resolves the caller's Identity for one request (bearer token -> user -> roles -> permissions).

Every failure along the way yields None (unauthenticated); nothing is raised
to the caller. The result is stored on request.state so later lookups in the
same request reuse it. Nothing is cached across requests.
"""

from __future__ import annotations

from starlette.requests import Request

from tenant_admin.application.interfaces.services import IIdentityVerifier
from tenant_admin.domain.exceptions import TokenVerificationError
from tenant_admin.domain.identity import Identity
from tenant_admin.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from tenant_admin.infrastructure.persistence.repositories.user_repo import UserRepository
from tenant_admin.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_BEARER_PREFIX = "bearer "
_STATE_ATTR = "identity"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an 'Authorization: Bearer <token>' value, else None."""
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


class AuthorizationResolver:
    """Builds an Identity from a bearer credential. Fails closed."""

    def __init__(
        self,
        verifier: IIdentityVerifier,
        user_repo: UserRepository,
        user_role_repo: UserRoleRepository,
        role_permission_repo: RolePermissionRepository,
    ) -> None:
        self._verifier = verifier
        self._user_repo = user_repo
        self._user_role_repo = user_role_repo
        self._role_permission_repo = role_permission_repo

    async def resolve_identity(self, request: Request) -> Identity | None:
        """Return the caller's Identity, memoized on request.state for this request."""
        if hasattr(request.state, _STATE_ATTR):
            return getattr(request.state, _STATE_ATTR)
        identity = await self.resolve_authorization(request.headers.get("authorization"))
        setattr(request.state, _STATE_ATTR, identity)
        return identity

    async def resolve_authorization(self, authorization: str | None) -> Identity | None:
        """Resolve from a raw Authorization header value. No memoization."""
        token = extract_bearer_token(authorization)
        if token is None:
            return None
        try:
            return await self._resolve_token(token)
        except TokenVerificationError as e:
            logger.warning("Token verification failed: %s", e.details.get("reason"))
        except Exception:
            logger.warning("Identity resolution failed", exc_info=True)
        return None

    async def _resolve_token(self, token: str) -> Identity | None:
        verified = await self._verifier.verify(token)
        user = await self._user_repo.find_by_external_subject_id(verified.subject_id)
        if user is None:
            logger.info(
                "No local user for verified subject",
                extra={"subject_id": verified.subject_id},
            )
            return None
        if not user.is_active:
            logger.info("Inactive user rejected", extra={"user_id": user.id})
            return None

        roles = await self._user_role_repo.get_roles_for_user(user.id)
        permissions: set[str] = set()
        for role in roles:
            role_permissions = await self._role_permission_repo.get_permissions_for_role(
                role.id
            )
            permissions.update(p.name for p in role_permissions)

        return Identity(
            user_id=user.id,
            subject_id=verified.subject_id,
            username=user.username,
            email=user.email,
            roles=frozenset(role.name for role in roles),
            permissions=frozenset(permissions),
        )
