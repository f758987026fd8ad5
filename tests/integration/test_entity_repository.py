"""Entity store integration tests (soft and hard delete) against in-memory SQLite."""

from unittest.mock import AsyncMock

import pytest

from tenant_admin.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from tenant_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    TenantRepository,
    UserRepository,
    UserRoleRepository,
    UserTenantRepository,
)

pytestmark = pytest.mark.integration


async def test_create_assigns_id_and_timestamps(db_session) -> None:
    repo = RoleRepository(db_session)
    role = await repo.create({"name": "editor"})
    assert role.id
    assert role.name == "editor"
    assert role.created_at is not None
    assert role.updated_at is not None
    assert role.deleted_at is None


async def test_permission_ids_are_integers(db_session) -> None:
    repo = PermissionRepository(db_session)
    first = await repo.create({"name": "doc:read"})
    second = await repo.create({"name": "doc:write"})
    assert isinstance(first.id, int)
    assert second.id != first.id
    assert (await repo.find_by_id(second.id)).name == "doc:write"


async def test_find_by_id_missing_raises_not_found(db_session) -> None:
    with pytest.raises(ResourceNotFoundException):
        await RoleRepository(db_session).find_by_id("does-not-exist")


async def test_soft_deleted_rows_hidden_from_standard_reads(db_session) -> None:
    repo = RoleRepository(db_session)
    role = await repo.create({"name": "editor"})
    assert await repo.delete(role.id) is True

    with pytest.raises(ResourceNotFoundException):
        await repo.find_by_id(role.id)
    assert await repo.find_all() == []

    found = await repo.find_by_id(role.id, include_deleted=True)
    assert found.deleted_at is not None
    assert [r.id for r in await repo.find_all(include_deleted=True)] == [role.id]


async def test_double_soft_delete_raises_not_found(db_session) -> None:
    repo = TenantRepository(db_session)
    tenant = await repo.create({"name": "Acme"})
    await repo.delete(tenant.id)
    with pytest.raises(ResourceNotFoundException):
        await repo.delete(tenant.id)


async def test_update_soft_deleted_raises_not_found(db_session) -> None:
    repo = RoleRepository(db_session)
    role = await repo.create({"name": "editor"})
    await repo.delete(role.id)
    with pytest.raises(ResourceNotFoundException):
        await repo.update(role.id, {"name": "author"})


async def test_update_returns_changed_entity(db_session) -> None:
    repo = TenantRepository(db_session)
    tenant = await repo.create({"name": "Acme", "description": "old"})
    updated = await repo.update(tenant.id, {"description": "new"})
    assert updated.id == tenant.id
    assert updated.name == "Acme"
    assert updated.description == "new"


async def test_update_missing_raises_not_found(db_session) -> None:
    with pytest.raises(ResourceNotFoundException):
        await TenantRepository(db_session).update("nope", {"name": "x"})


@pytest.mark.parametrize("field", ["deleted_at", "id"])
async def test_update_rejects_protected_fields(db_session, field: str) -> None:
    repo = RoleRepository(db_session)
    role = await repo.create({"name": "editor"})
    with pytest.raises(ValidationException):
        await repo.update(role.id, {field: None})


async def test_unique_index_violation_is_conflict(db_session) -> None:
    repo = RoleRepository(db_session)
    await repo.create({"name": "editor"})
    with pytest.raises(ConflictException):
        await repo.create({"name": "editor"})


async def test_name_reusable_after_soft_delete(db_session) -> None:
    repo = RoleRepository(db_session)
    old = await repo.create({"name": "editor"})
    await repo.delete(old.id)
    new = await repo.create({"name": "editor"})
    assert new.id != old.id
    assert await repo.find_by_name("editor") is not None
    assert (await repo.find_by_name("editor")).id == new.id


async def test_find_by_name_is_case_sensitive(db_session) -> None:
    repo = RoleRepository(db_session)
    await repo.create({"name": "Editor"})
    assert await repo.find_by_name("editor") is None


async def test_user_lookups_skip_deleted(db_session) -> None:
    repo = UserRepository(db_session)
    user = await repo.create(
        {"external_subject_id": "sub-1", "username": "alice", "email": "a@example.com"}
    )
    assert (await repo.find_by_external_subject_id("sub-1")).id == user.id
    assert (await repo.find_by_username("alice")).id == user.id
    await repo.delete(user.id)
    assert await repo.find_by_external_subject_id("sub-1") is None
    assert await repo.find_by_username("alice") is None


async def test_hard_delete_removes_row(db_session) -> None:
    users = UserRepository(db_session)
    tenants = TenantRepository(db_session)
    memberships = UserTenantRepository(db_session)
    user = await users.create(
        {"external_subject_id": "sub-1", "username": "alice", "email": "a@example.com"}
    )
    tenant = await tenants.create({"name": "Acme"})
    membership = await memberships.create({"user_id": user.id, "tenant_id": tenant.id})

    assert await memberships.delete(membership.id) is True
    assert await memberships.delete(membership.id) is False
    with pytest.raises(ResourceNotFoundException):
        await memberships.find_by_id(membership.id, include_deleted=True)


async def test_foreign_key_violation_is_validation_error(db_session) -> None:
    with pytest.raises(ValidationException):
        await UserTenantRepository(db_session).create(
            {"user_id": "missing-user", "tenant_id": "missing-tenant"}
        )


async def test_not_null_violation_is_validation_error(db_session) -> None:
    with pytest.raises(ValidationException):
        await UserRepository(db_session).create(
            {"external_subject_id": "sub-1", "username": "alice"}
        )


@pytest.fixture
async def user_and_role(db_session):
    user = await UserRepository(db_session).create(
        {"external_subject_id": "sub-1", "username": "alice", "email": "a@example.com"}
    )
    role = await RoleRepository(db_session).create({"name": "editor"})
    return user, role


@pytest.fixture
def checked_user_roles(db_session, monkeypatch) -> UserRoleRepository:
    """UserRole store forced onto the portable insert-if-absent path."""
    repo = UserRoleRepository(db_session)
    monkeypatch.setattr(repo, "_dialect_name", lambda: "mssql")
    return repo


async def test_checked_add_is_idempotent(checked_user_roles, user_and_role) -> None:
    user, role = user_and_role
    assert await checked_user_roles.add(user.id, role.id) is True
    assert await checked_user_roles.add(user.id, role.id) is False
    assert await checked_user_roles.exists(user.id, role.id) is True


async def test_checked_add_tolerates_concurrent_insert(
    checked_user_roles, user_and_role, monkeypatch
) -> None:
    user, role = user_and_role
    assert await checked_user_roles.add(user.id, role.id) is True
    # Pretend the pair was absent at check time, as if another request inserted it.
    monkeypatch.setattr(
        checked_user_roles, "exists", AsyncMock(side_effect=[False, True])
    )
    assert await checked_user_roles.add(user.id, role.id) is False


async def test_checked_add_missing_reference_is_validation_error(
    checked_user_roles, user_and_role
) -> None:
    user, _ = user_and_role
    with pytest.raises(ValidationException):
        await checked_user_roles.add(user.id, "missing-role")
    assert await checked_user_roles.exists(user.id, "missing-role") is False
