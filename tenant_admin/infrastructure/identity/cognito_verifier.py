"""Cognito JWT verification (implements IIdentityVerifier).

Tokens are RS256-signed by the user pool. Signing keys come from the pool's
JWKS endpoint, fetched with httpx and cached for jwks_cache_ttl_seconds; an
unknown kid forces one refresh so key rotation is picked up.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from jose import JWTError, jwt

from tenant_admin.application.dtos.identity import VerifiedToken
from tenant_admin.core.config import Settings
from tenant_admin.domain.exceptions import TokenVerificationError
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_ALGORITHMS = ["RS256"]


class CognitoTokenVerifier:
    """Verify Cognito access or ID tokens for one user pool and app client."""

    def __init__(
        self,
        issuer: str,
        jwks_url: str,
        client_id: str,
        token_use: str = "access",
        cache_ttl_seconds: int = 3600,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._issuer = issuer
        self._jwks_url = jwks_url
        self._client_id = client_id
        self._token_use = token_use
        self._cache_ttl = cache_ttl_seconds
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._keys: dict[str, dict[str, Any]] = {}
        self._fetched_at: float | None = None

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> CognitoTokenVerifier:
        return cls(
            issuer=settings.cognito_issuer,
            jwks_url=settings.resolved_jwks_url,
            client_id=settings.cognito_client_id or "",
            token_use=settings.cognito_token_use,
            cache_ttl_seconds=settings.jwks_cache_ttl_seconds,
            http_client=http_client,
            timeout_seconds=settings.http_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    def _cache_fresh(self) -> bool:
        return (
            self._fetched_at is not None
            and time.monotonic() - self._fetched_at < self._cache_ttl
        )

    async def _refresh_keys(self) -> None:
        try:
            response = await self._http.get(self._jwks_url)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("JWKS fetch failed: %s", e.__class__.__name__)
            raise TokenVerificationError("Unable to fetch signing keys") from e
        self._keys = {
            key["kid"]: key for key in body.get("keys", []) if isinstance(key, dict) and "kid" in key
        }
        self._fetched_at = time.monotonic()
        logger.debug("JWKS refreshed: %d keys", len(self._keys))

    async def _signing_key(self, kid: str) -> dict[str, Any]:
        if not self._cache_fresh():
            await self._refresh_keys()
        key = self._keys.get(kid)
        if key is None:
            # Unknown kid: the pool may have rotated keys since the last fetch.
            await self._refresh_keys()
            key = self._keys.get(kid)
        if key is None:
            raise TokenVerificationError("Unknown signing key")
        return key

    async def verify(self, token: str) -> VerifiedToken:
        """Verify signature, expiry, issuer, token_use and client.

        Raises:
            TokenVerificationError: Any check failed.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise TokenVerificationError("Malformed token") from e
        kid = header.get("kid")
        if not kid:
            raise TokenVerificationError("Token header has no kid")
        key = await self._signing_key(kid)

        verify_aud = self._token_use == "id"
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=_ALGORITHMS,
                audience=self._client_id if verify_aud else None,
                issuer=self._issuer,
                options={
                    "verify_aud": verify_aud,
                    "verify_at_hash": False,
                    "require_exp": True,
                    "require_sub": True,
                },
            )
        except JWTError as e:
            raise TokenVerificationError(str(e) or "Invalid token") from e

        if claims.get("token_use") != self._token_use:
            raise TokenVerificationError(
                f"Expected token_use '{self._token_use}'"
            )
        if not verify_aud and claims.get("client_id") != self._client_id:
            raise TokenVerificationError("Token was issued for another client")
        return VerifiedToken(subject_id=claims["sub"], claims=claims)
