import pytest

from iam_proxy.application.service import AuthService
from iam_proxy.domain.entities.credential import Credential
from iam_proxy.infrastructure.adapters.crypto.hmac_signer import HMACSigningMethod
from iam_proxy.infrastructure.adapters.crypto.jwt_token_codec import JWTTokenCodec
from iam_proxy.infrastructure.adapters.memory.credential_registry import InMemoryCredentialRegistry
from iam_proxy.infrastructure.config.credentials import encode_credentials

ISSUER = "iam-proxy"
SECRET = "k"


@pytest.fixture
def credentials():
    """Single registered client c1 with secret s1 for application A"""
    return {"c1": Credential(client_id="c1", client_secret="s1", app_name="A")}


@pytest.fixture
def credentials_blob(credentials):
    return encode_credentials(credentials)


@pytest.fixture
def registry(credentials):
    return InMemoryCredentialRegistry(credentials)


@pytest.fixture
def signing_method():
    return HMACSigningMethod(SECRET)


@pytest.fixture
def codec(signing_method):
    return JWTTokenCodec(signing_method, issuer=ISSUER)


@pytest.fixture
def auth_service(registry, codec):
    return AuthService(credential_store=registry, token_codec=codec)
