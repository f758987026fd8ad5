"""Unit tests for CognitoIdentityAdmin with a mocked boto3 client."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from tenant_admin.domain.exceptions import ConflictException, IdentityProviderException
from tenant_admin.infrastructure.identity.cognito_admin import CognitoIdentityAdmin

POOL_ID = "us-east-1_TestPool"


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def boto_client() -> MagicMock:
    client = MagicMock()
    client.admin_create_user.return_value = {
        "User": {
            "Username": "alice",
            "Attributes": [
                {"Name": "email", "Value": "alice@example.com"},
                {"Name": "sub", "Value": "sub-alice"},
            ],
        }
    }
    return client


async def test_create_user_returns_subject(boto_client: MagicMock) -> None:
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    user = await admin.create_user("alice", "alice@example.com")
    assert user.subject_id == "sub-alice"
    assert user.username == "alice"
    kwargs = boto_client.admin_create_user.call_args.kwargs
    assert kwargs["UserPoolId"] == POOL_ID
    assert kwargs["Username"] == "alice"
    assert {"Name": "email", "Value": "alice@example.com"} in kwargs["UserAttributes"]


async def test_create_user_without_sub_is_provider_error(boto_client: MagicMock) -> None:
    boto_client.admin_create_user.return_value = {"User": {"Attributes": []}}
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    with pytest.raises(IdentityProviderException):
        await admin.create_user("alice", "alice@example.com")


async def test_existing_username_is_conflict(boto_client: MagicMock) -> None:
    boto_client.admin_create_user.side_effect = _client_error(
        "UsernameExistsException", "AdminCreateUser"
    )
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    with pytest.raises(ConflictException):
        await admin.create_user("alice", "alice@example.com")


async def test_client_error_is_provider_error(boto_client: MagicMock) -> None:
    boto_client.admin_disable_user.side_effect = _client_error(
        "UserNotFoundException", "AdminDisableUser"
    )
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    with pytest.raises(IdentityProviderException) as exc_info:
        await admin.disable_user("ghost")
    assert exc_info.value.details == {
        "operation": "admin_disable_user",
        "reason": "UserNotFoundException",
    }


async def test_connection_error_is_provider_error(boto_client: MagicMock) -> None:
    boto_client.admin_delete_user.side_effect = EndpointConnectionError(
        endpoint_url="https://cognito-idp.us-east-1.amazonaws.com"
    )
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    with pytest.raises(IdentityProviderException):
        await admin.delete_user("alice")


async def test_enable_and_delete_pass_pool_and_username(boto_client: MagicMock) -> None:
    admin = CognitoIdentityAdmin(POOL_ID, boto_client)
    await admin.enable_user("alice")
    await admin.delete_user("alice")
    boto_client.admin_enable_user.assert_called_once_with(UserPoolId=POOL_ID, Username="alice")
    boto_client.admin_delete_user.assert_called_once_with(UserPoolId=POOL_ID, Username="alice")
