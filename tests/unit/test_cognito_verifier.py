"""Unit tests for CognitoTokenVerifier: RS256 tokens signed locally, JWKS served by httpx.MockTransport."""

import time
from typing import Any

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from tenant_admin.domain.exceptions import TokenVerificationError
from tenant_admin.infrastructure.identity.cognito_verifier import CognitoTokenVerifier

ISSUER = "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_TestPool"
JWKS_URL = f"{ISSUER}/.well-known/jwks.json"
CLIENT_ID = "test-client"


def _keypair(kid: str) -> tuple[str, dict[str, Any]]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_jwk = jwk.construct(private_pem, algorithm="RS256").public_key().to_dict()
    public_jwk.update({"kid": kid, "use": "sig", "alg": "RS256"})
    return private_pem, public_jwk


@pytest.fixture(scope="module")
def signing_key() -> tuple[str, dict[str, Any]]:
    return _keypair("key-1")


@pytest.fixture(scope="module")
def other_key() -> tuple[str, dict[str, Any]]:
    return _keypair("key-2")


def _claims(**overrides: Any) -> dict[str, Any]:
    now = int(time.time())
    claims = {
        "sub": "sub-alice",
        "iss": ISSUER,
        "token_use": "access",
        "client_id": CLIENT_ID,
        "username": "alice",
        "iat": now,
        "exp": now + 300,
    }
    claims.update(overrides)
    return claims


def _token(private_pem: str, kid: str, **overrides: Any) -> str:
    return jwt.encode(_claims(**overrides), private_pem, algorithm="RS256", headers={"kid": kid})


class JwksServer:
    """MockTransport handler serving a mutable key set and counting fetches."""

    def __init__(self, keys: list[dict[str, Any]]) -> None:
        self.keys = keys
        self.calls = 0
        self.fail = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        assert str(request.url) == JWKS_URL
        if self.fail:
            return httpx.Response(503)
        return httpx.Response(200, json={"keys": self.keys})


def _verifier(server: JwksServer, token_use: str = "access", ttl: int = 3600) -> CognitoTokenVerifier:
    return CognitoTokenVerifier(
        issuer=ISSUER,
        jwks_url=JWKS_URL,
        client_id=CLIENT_ID,
        token_use=token_use,
        cache_ttl_seconds=ttl,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(server)),
    )


async def test_valid_access_token(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    verified = await verifier.verify(_token(private_pem, "key-1"))
    assert verified.subject_id == "sub-alice"
    assert verified.username == "alice"
    assert verified.claims["client_id"] == CLIENT_ID


async def test_keys_are_cached_between_verifications(signing_key) -> None:
    private_pem, public_jwk = signing_key
    server = JwksServer([public_jwk])
    verifier = _verifier(server)
    await verifier.verify(_token(private_pem, "key-1"))
    await verifier.verify(_token(private_pem, "key-1"))
    assert server.calls == 1


async def test_unknown_kid_triggers_one_refresh(signing_key, other_key) -> None:
    private_pem, public_jwk = signing_key
    other_pem, other_jwk = other_key
    server = JwksServer([public_jwk])
    verifier = _verifier(server)
    await verifier.verify(_token(private_pem, "key-1"))
    server.keys = [public_jwk, other_jwk]
    verified = await verifier.verify(_token(other_pem, "key-2"))
    assert verified.subject_id == "sub-alice"
    assert server.calls == 2


async def test_kid_never_published_is_rejected(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(private_pem, "missing-kid"))


async def test_signature_from_other_key_is_rejected(signing_key, other_key) -> None:
    _, public_jwk = signing_key
    other_pem, _ = other_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(other_pem, "key-1"))


async def test_expired_token_is_rejected(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    past = int(time.time()) - 600
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(private_pem, "key-1", iat=past - 300, exp=past))


async def test_wrong_issuer_is_rejected(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify(
            _token(private_pem, "key-1", iss="https://cognito-idp.us-east-1.amazonaws.com/other")
        )


async def test_wrong_client_is_rejected(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(private_pem, "key-1", client_id="another-client"))


async def test_id_token_rejected_when_access_expected(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(private_pem, "key-1", token_use="id", aud=CLIENT_ID))


async def test_id_token_accepted_when_configured(signing_key) -> None:
    private_pem, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]), token_use="id")
    token = _token(private_pem, "key-1", token_use="id", aud=CLIENT_ID, client_id=None)
    verified = await verifier.verify(token)
    assert verified.subject_id == "sub-alice"


async def test_malformed_token_is_rejected(signing_key) -> None:
    _, public_jwk = signing_key
    verifier = _verifier(JwksServer([public_jwk]))
    with pytest.raises(TokenVerificationError):
        await verifier.verify("not-a-jwt")


async def test_jwks_outage_is_verification_error(signing_key) -> None:
    private_pem, _ = signing_key
    server = JwksServer([])
    server.fail = True
    verifier = _verifier(server)
    with pytest.raises(TokenVerificationError):
        await verifier.verify(_token(private_pem, "key-1"))
