"""Cognito user administration via boto3 (implements IIdentityAdmin).

boto3 is synchronous; calls run in a worker thread with asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tenant_admin.application.dtos.identity import ProviderUser
from tenant_admin.core.config import Settings
from tenant_admin.domain.exceptions import ConflictException, IdentityProviderException
from tenant_admin.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _attribute(attributes: list[dict[str, str]], name: str) -> str | None:
    for attr in attributes:
        if attr.get("Name") == name:
            return attr.get("Value")
    return None


class CognitoIdentityAdmin:
    """Admin operations on one Cognito user pool."""

    def __init__(self, user_pool_id: str, client: Any) -> None:
        self._user_pool_id = user_pool_id
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> CognitoIdentityAdmin:
        client = boto3.client("cognito-idp", region_name=settings.cognito_region)
        return cls(settings.cognito_user_pool_id or "", client)

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        method = getattr(self._client, operation)
        try:
            return await asyncio.to_thread(method, UserPoolId=self._user_pool_id, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "ClientError")
            logger.warning("Cognito %s failed: %s", operation, code)
            if code == "UsernameExistsException":
                raise ConflictException(
                    "User already exists in the identity provider",
                    resource_type="User",
                    field="username",
                    value=kwargs.get("Username"),
                ) from e
            raise IdentityProviderException(operation, code) from e
        except BotoCoreError as e:
            logger.error("Cognito %s failed", operation, exc_info=True)
            raise IdentityProviderException(operation, e.__class__.__name__) from e

    async def create_user(self, username: str, email: str) -> ProviderUser:
        """Create the user; Cognito emails a temporary password invitation."""
        response = await self._call(
            "admin_create_user",
            Username=username,
            UserAttributes=[
                {"Name": "email", "Value": email},
                {"Name": "email_verified", "Value": "true"},
            ],
            DesiredDeliveryMediums=["EMAIL"],
        )
        attributes = response.get("User", {}).get("Attributes", [])
        subject_id = _attribute(attributes, "sub")
        if not subject_id:
            raise IdentityProviderException("admin_create_user", "Response had no sub")
        logger.info("Cognito user created", extra={"username": username})
        return ProviderUser(subject_id=subject_id, username=username, email=email)

    async def delete_user(self, username: str) -> None:
        await self._call("admin_delete_user", Username=username)
        logger.info("Cognito user deleted", extra={"username": username})

    async def disable_user(self, username: str) -> None:
        await self._call("admin_disable_user", Username=username)

    async def enable_user(self, username: str) -> None:
        await self._call("admin_enable_user", Username=username)
