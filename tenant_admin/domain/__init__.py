"""Domain layer: exceptions and the resolved Identity value."""

from tenant_admin.domain.exceptions import (
    AdminException,
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    IdentityProviderException,
    InternalException,
    ResourceNotFoundException,
    TokenVerificationError,
    ValidationException,
)
from tenant_admin.domain.identity import Identity

__all__ = [
    "AdminException",
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "Identity",
    "IdentityProviderException",
    "InternalException",
    "ResourceNotFoundException",
    "TokenVerificationError",
    "ValidationException",
]
