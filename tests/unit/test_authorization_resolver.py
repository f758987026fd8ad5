"""Unit tests for AuthorizationResolver (collaborators mocked with AsyncMock)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from tenant_admin.application.dtos.identity import VerifiedToken
from tenant_admin.domain.exceptions import TokenVerificationError
from tenant_admin.infrastructure.services.authorization_resolver import (
    AuthorizationResolver,
    extract_bearer_token,
)


def _request(authorization: str | None = None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def _user(user_id: str = "u1", is_active: bool = True) -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id, username="alice", email="alice@example.com", is_active=is_active
    )


@pytest.fixture
def verifier() -> AsyncMock:
    mock = AsyncMock()
    mock.verify.return_value = VerifiedToken(subject_id="sub-alice", claims={"sub": "sub-alice"})
    return mock


@pytest.fixture
def repos() -> SimpleNamespace:
    user_repo = AsyncMock()
    user_repo.find_by_external_subject_id.return_value = _user()
    user_role_repo = AsyncMock()
    user_role_repo.get_roles_for_user.return_value = [
        SimpleNamespace(id="r-editor", name="editor"),
        SimpleNamespace(id="r-writer", name="writer"),
    ]
    role_permission_repo = AsyncMock()
    role_permission_repo.get_permissions_for_role.side_effect = lambda role_id: {
        "r-editor": [SimpleNamespace(name="doc:read"), SimpleNamespace(name="doc:write")],
        "r-writer": [SimpleNamespace(name="doc:write")],
    }[role_id]
    return SimpleNamespace(
        user_repo=user_repo,
        user_role_repo=user_role_repo,
        role_permission_repo=role_permission_repo,
    )


@pytest.fixture
def resolver(verifier: AsyncMock, repos: SimpleNamespace) -> AuthorizationResolver:
    return AuthorizationResolver(
        verifier, repos.user_repo, repos.user_role_repo, repos.role_permission_repo
    )


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("Bearer tok", "tok"),
        ("bearer tok", "tok"),
    ],
)
def test_extract_bearer_token(header: str | None, expected: str | None) -> None:
    assert extract_bearer_token(header) == expected


async def test_no_credential_returns_none_without_verifying(
    resolver: AuthorizationResolver, verifier: AsyncMock
) -> None:
    assert await resolver.resolve_identity(_request()) is None
    verifier.verify.assert_not_awaited()


async def test_resolves_identity_with_deduplicated_permissions(
    resolver: AuthorizationResolver,
) -> None:
    identity = await resolver.resolve_identity(_request("Bearer good"))
    assert identity is not None
    assert identity.user_id == "u1"
    assert identity.subject_id == "sub-alice"
    assert identity.username == "alice"
    assert identity.roles == frozenset({"editor", "writer"})
    assert identity.permissions == frozenset({"doc:read", "doc:write"})


async def test_memoized_within_one_request(
    resolver: AuthorizationResolver, verifier: AsyncMock, repos: SimpleNamespace
) -> None:
    request = _request("Bearer good")
    first = await resolver.resolve_identity(request)
    second = await resolver.resolve_identity(request)
    assert first is second
    assert verifier.verify.await_count == 1
    assert repos.user_repo.find_by_external_subject_id.await_count == 1


async def test_not_shared_across_requests(
    resolver: AuthorizationResolver, verifier: AsyncMock
) -> None:
    await resolver.resolve_identity(_request("Bearer good"))
    await resolver.resolve_identity(_request("Bearer good"))
    assert verifier.verify.await_count == 2


async def test_anonymous_result_is_memoized_too(
    resolver: AuthorizationResolver, verifier: AsyncMock
) -> None:
    verifier.verify.side_effect = TokenVerificationError("expired")
    request = _request("Bearer expired")
    assert await resolver.resolve_identity(request) is None
    assert await resolver.resolve_identity(request) is None
    assert verifier.verify.await_count == 1


async def test_verification_failure_returns_none(
    resolver: AuthorizationResolver, verifier: AsyncMock, repos: SimpleNamespace
) -> None:
    verifier.verify.side_effect = TokenVerificationError("bad signature")
    assert await resolver.resolve_authorization("Bearer forged") is None
    repos.user_repo.find_by_external_subject_id.assert_not_awaited()


async def test_unprovisioned_subject_returns_none(
    resolver: AuthorizationResolver, repos: SimpleNamespace
) -> None:
    repos.user_repo.find_by_external_subject_id.return_value = None
    assert await resolver.resolve_authorization("Bearer good") is None
    repos.user_role_repo.get_roles_for_user.assert_not_awaited()


async def test_inactive_user_returns_none(
    resolver: AuthorizationResolver, repos: SimpleNamespace
) -> None:
    repos.user_repo.find_by_external_subject_id.return_value = _user(is_active=False)
    assert await resolver.resolve_authorization("Bearer good") is None


async def test_unexpected_error_fails_closed(
    resolver: AuthorizationResolver, repos: SimpleNamespace
) -> None:
    repos.user_role_repo.get_roles_for_user.side_effect = RuntimeError("db down")
    assert await resolver.resolve_authorization("Bearer good") is None


async def test_user_without_roles_has_empty_sets(
    resolver: AuthorizationResolver, repos: SimpleNamespace
) -> None:
    repos.user_role_repo.get_roles_for_user.return_value = []
    identity = await resolver.resolve_authorization("Bearer good")
    assert identity is not None
    assert identity.roles == frozenset()
    assert identity.permissions == frozenset()
