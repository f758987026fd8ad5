"""Unit tests for Identity checks."""

from tenant_admin.domain.identity import Identity


def _identity(*permissions: str, roles: tuple[str, ...] = ()) -> Identity:
    return Identity(
        user_id="u1",
        subject_id="sub-1",
        username="alice",
        roles=frozenset(roles),
        permissions=frozenset(permissions),
    )


def test_has_role() -> None:
    identity = _identity(roles=("editor",))
    assert identity.has_role("editor")
    assert not identity.has_role("admin")


def test_has_permission() -> None:
    identity = _identity("doc:write")
    assert identity.has_permission("doc:write")
    assert not identity.has_permission("doc:delete")


def test_has_all_permissions() -> None:
    identity = _identity("doc:read", "doc:write")
    assert identity.has_all_permissions(["doc:read", "doc:write"])
    assert not identity.has_all_permissions(["doc:read", "doc:delete"])


def test_has_all_permissions_empty_list_is_satisfied() -> None:
    assert _identity().has_all_permissions([])


def test_has_any_permission() -> None:
    identity = _identity("doc:read")
    assert identity.has_any_permission(["doc:write", "doc:read"])
    assert not identity.has_any_permission(["doc:write", "doc:delete"])


def test_has_any_permission_empty_list_is_not_satisfied() -> None:
    assert not _identity("doc:read").has_any_permission([])


def test_identity_is_immutable() -> None:
    identity = _identity("doc:read")
    try:
        identity.username = "mallory"  # type: ignore[misc]
    except AttributeError:
        pass
    else:
        raise AssertionError("Identity should be frozen")
