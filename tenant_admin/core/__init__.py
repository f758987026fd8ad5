"""Core: configuration, exception handlers, lifespan."""

from tenant_admin.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
