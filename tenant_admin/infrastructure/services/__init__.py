"""Infrastructure services: request-scoped identity resolution."""

from tenant_admin.infrastructure.services.authorization_resolver import (
    AuthorizationResolver,
)

__all__ = ["AuthorizationResolver"]
