"""Application DTOs (no dependency on ORM)."""

from tenant_admin.application.dtos.identity import ProviderUser, VerifiedToken
from tenant_admin.application.dtos.tenant import TenantCreationResult

__all__ = ["ProviderUser", "TenantCreationResult", "VerifiedToken"]
