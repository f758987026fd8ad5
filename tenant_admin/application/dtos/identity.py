"""DTOs exchanged with the identity provider adapters."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VerifiedToken:
    """Outcome of a successful token verification.

    subject_id is the provider's stable subject ('sub'); claims holds the full
    decoded payload.
    """

    subject_id: str
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def username(self) -> str | None:
        return self.claims.get("username") or self.claims.get("cognito:username")


@dataclass(frozen=True)
class ProviderUser:
    """A user as created in the identity provider."""

    subject_id: str
    username: str
    email: str
