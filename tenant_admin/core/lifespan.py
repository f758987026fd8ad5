"""Application lifespan: startup and shutdown.

Wires the identity provider adapters onto app.state and disposes the
database engine on exit. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tenant_admin.core.config import get_settings
from tenant_admin.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, Cognito token verifier and admin client (when auth is
    enabled). Shutdown: verifier HTTP client close, SQL engine dispose.
    Values already present on app.state (set by tests) are left alone.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.auth_enabled:
        from tenant_admin.infrastructure.identity import (
            CognitoIdentityAdmin,
            CognitoTokenVerifier,
        )

        if getattr(app.state, "identity_verifier", None) is None:
            app.state.identity_verifier = CognitoTokenVerifier.from_settings(settings)
        if getattr(app.state, "identity_admin", None) is None:
            app.state.identity_admin = CognitoIdentityAdmin.from_settings(settings)
        logger.info("Cognito identity adapters initialized")
    else:
        logger.warning("AUTH_ENABLED is false; all protected routes will reject requests")

    yield

    # ---- Shutdown ----
    verifier = getattr(app.state, "identity_verifier", None)
    if verifier is not None and hasattr(verifier, "aclose"):
        await verifier.aclose()
        logger.info("Identity verifier HTTP client closed")

    from tenant_admin.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
