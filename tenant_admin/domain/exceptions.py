"""Domain exceptions for the tenant administration backend.

Every failure leaving the repository or service layer is one of these
kinds. The presentation layer maps them to HTTP responses in
tenant_admin.core.exception_handlers.

Kinds: NotFound, Conflict, Validation, Unauthenticated, Forbidden, Internal.
"""

from typing import Any


class AdminException(Exception):
    """Base exception for all tenant-admin errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Client-facing representation: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AdminException):
    """Raised when input is malformed or rejected by the backend (e.g. bad type or length)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(AdminException):
    """Raised when an id does not resolve to an active row."""

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'permission').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ConflictException(AdminException):
    """Raised on a uniqueness violation (create or rename)."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        details: dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, "CONFLICT", details)


class AuthenticationException(AdminException):
    """Raised when a credential is missing, invalid, or maps to no local identity."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class TokenVerificationError(AuthenticationException):
    """Raised by an identity verifier when a token is expired, malformed, or badly signed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid token: {reason}")
        self.details = {"reason": reason}


class AuthorizationException(AdminException):
    """Raised when an authenticated caller lacks a required role or permission."""

    def __init__(
        self,
        required: list[str] | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the roles/permissions that were required.

        Args:
            required: Names the caller was expected to hold.
            message: Human-readable message.
        """
        details: dict[str, Any] = {}
        if required:
            details["required"] = list(required)
        super().__init__(message, "PERMISSION_DENIED", details)


class InternalException(AdminException):
    """Raised for unexpected storage or logic failures.

    The message shown to callers is generic; the original error is kept on
    __cause__ and in log output only.
    """

    def __init__(self, message: str = "Internal error", operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, "INTERNAL_ERROR", details)


class IdentityProviderException(AdminException):
    """Raised when an admin call to the external identity provider fails."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Identity provider operation failed: {operation}",
            "IDENTITY_PROVIDER_ERROR",
            {"operation": operation, "reason": reason},
        )
