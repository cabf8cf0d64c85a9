"""
Pytest configuration and fixtures for discovery service tests.

Provides fixtures for:
- Signing keys (RSA, EC, HMAC) and their KeyMaterial
- Provider configuration snapshots
- Test client with the configuration registry initialized
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from httpx import ASGITransport, AsyncClient

from oidc_discovery.config.registry import (
    initialize_provider_configuration,
    reset_provider_configuration,
)
from oidc_discovery.domain.models.provider import (
    ClaimDefinition,
    ProviderConfiguration,
    RequestContext,
)
from oidc_discovery.infrastructure.keys.key_loader import (
    key_material_from_key,
    symmetric_key_material,
)
from oidc_discovery.main import app

# Claims configured in the reference provider, in publication order
TEST_CLAIM_NAMES = [
    "name",
    "variable_name",
    "created_at",
    "updated_at",
    "token_id",
    "both_responses",
    "id_token_response",
    "user_info_response",
]


@pytest.fixture(scope="session")
def rsa_private_key():
    """2048-bit RSA private key shared by the session"""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key():
    """P-256 private key shared by the session"""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def rsa_key(rsa_private_key):
    return key_material_from_key(rsa_private_key, kid="rsa-key")


@pytest.fixture
def ec_key(ec_private_key):
    return key_material_from_key(ec_private_key, kid="ec-key")


@pytest.fixture
def hmac_key():
    return symmetric_key_material("super-secret-hmac-key", kid="hmac-key")


@pytest.fixture
def test_claims():
    """Claims of the reference provider"""
    responses = {
        "id_token_response": {"id_token"},
        "user_info_response": {"user_info"},
    }
    return tuple(
        ClaimDefinition(name=name, response=responses.get(name, {"id_token", "user_info"}))
        for name in TEST_CLAIM_NAMES
    )


@pytest.fixture
def provider_config(rsa_key, test_claims) -> ProviderConfiguration:
    """Default provider configuration: RSA key, no optional features"""
    return ProviderConfiguration(
        issuer="dummy",
        signing_keys=(rsa_key,),
        claims=test_claims,
    )


@pytest.fixture
def request_context() -> RequestContext:
    return RequestContext(scheme="http", netloc="test.host")


@pytest.fixture
def registry(provider_config):
    """Registry initialized with the default configuration"""
    initialize_provider_configuration(provider_config)
    yield provider_config
    reset_provider_configuration()


@pytest_asyncio.fixture
async def client(registry) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client against the application"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test.host") as ac:
        yield ac
