"""Service interfaces (ports) for the identity provider boundary.

The application never talks to Cognito directly; it depends on these protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tenant_admin.application.dtos.identity import ProviderUser, VerifiedToken


class IIdentityVerifier(Protocol):
    """Validates an opaque bearer credential issued by the identity provider."""

    async def verify(self, token: str) -> VerifiedToken:
        """Return the verified subject and claims.

        Raises TokenVerificationError when the token is malformed, expired,
        signed by an unknown key, or issued for another pool or client.
        """


class IIdentityAdmin(Protocol):
    """Administrative operations on users held by the identity provider."""

    async def create_user(self, username: str, email: str) -> ProviderUser:
        """Create a user (invitation sent by the provider); return its subject."""

    async def delete_user(self, username: str) -> None:
        """Delete the user. Used as compensation when local writes fail."""

    async def disable_user(self, username: str) -> None:
        """Block sign-in for the user."""

    async def enable_user(self, username: str) -> None:
        """Allow sign-in for the user again."""
