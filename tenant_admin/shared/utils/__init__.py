"""Shared utilities: UTC datetime helpers and ID generators."""

from tenant_admin.shared.utils.datetime import ensure_utc, utc_now
from tenant_admin.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
