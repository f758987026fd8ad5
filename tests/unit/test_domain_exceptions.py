"""Unit tests for the domain exception taxonomy and its HTTP mapping."""

from tenant_admin.core.exception_handlers import status_for
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


def test_to_dict_has_error_message_details() -> None:
    exc = ConflictException("Role with name 'editor' already exists", "Role", "name", "editor")
    assert exc.to_dict() == {
        "error": "CONFLICT",
        "message": "Role with name 'editor' already exists",
        "details": {"resource_type": "Role", "field": "name", "value": "editor"},
    }


def test_not_found_carries_resource_type_and_id() -> None:
    exc = ResourceNotFoundException("Role", "r1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details["resource_type"] == "Role"
    assert exc.details["resource_id"] == "r1"
    assert "r1" in exc.message


def test_token_verification_error_is_authentication_error() -> None:
    exc = TokenVerificationError("expired")
    assert isinstance(exc, AuthenticationException)
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.details == {"reason": "expired"}


def test_internal_exception_message_is_generic() -> None:
    exc = InternalException(operation="Role.create")
    assert exc.message == "Internal error"
    assert exc.details == {"operation": "Role.create"}


def test_status_mapping() -> None:
    assert status_for(ValidationException("bad")) == 400
    assert status_for(AuthenticationException()) == 401
    assert status_for(AuthorizationException(["doc:write"])) == 403
    assert status_for(ResourceNotFoundException("User", "u1")) == 404
    assert status_for(ConflictException("dup")) == 409
    assert status_for(InternalException()) == 500
    assert status_for(IdentityProviderException("admin_create_user", "Boom")) == 502


def test_all_exceptions_share_base() -> None:
    for exc in (
        ValidationException("x"),
        ResourceNotFoundException("User", 1),
        ConflictException("x"),
        AuthenticationException(),
        AuthorizationException(),
        InternalException(),
        IdentityProviderException("op", "reason"),
    ):
        assert isinstance(exc, AdminException)
