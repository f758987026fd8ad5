"""Resolved caller identity (request-scoped, never persisted)."""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Identity:
    """Who is calling: local user, external subject, aggregated roles and permissions.

    Built once per request by AuthorizationResolver. Role and permission names
    are sets, so a permission granted by two roles appears once.
    """

    user_id: str
    subject_id: str
    username: str
    email: str | None = None
    roles: frozenset[str] = field(default_factory=frozenset)
    permissions: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def has_all_permissions(self, permissions: Iterable[str]) -> bool:
        """True when every name is held. An empty list is trivially satisfied."""
        return self.permissions.issuperset(permissions)

    def has_any_permission(self, permissions: Iterable[str]) -> bool:
        """True when at least one name is held. An empty list is never satisfied."""
        return not self.permissions.isdisjoint(permissions)
