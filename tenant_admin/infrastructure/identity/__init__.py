"""Identity provider adapters (AWS Cognito)."""

from tenant_admin.infrastructure.identity.cognito_admin import CognitoIdentityAdmin
from tenant_admin.infrastructure.identity.cognito_verifier import CognitoTokenVerifier

__all__ = ["CognitoIdentityAdmin", "CognitoTokenVerifier"]
