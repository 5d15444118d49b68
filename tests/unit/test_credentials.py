# Assumptions:
# - Using pytest for testing framework
# - Credential blob is base64 (padding optional) of JSON client_id -> {client_secret, app_name}
# - Warnings are asserted on a patched module logger

import base64
from unittest.mock import patch

import pytest

from iam_proxy.domain.entities.credential import Credential
from iam_proxy.domain.errors import ConfigurationError
from iam_proxy.infrastructure.adapters.memory.credential_registry import InMemoryCredentialRegistry
from iam_proxy.infrastructure.config.credentials import (
    base64_decode,
    base64_encode,
    crypto_hash,
    decode_credentials,
    encode_credentials,
)


def _blob(document: str) -> str:
    return base64_encode(document.encode("utf-8"))


class TestCryptoHash:
    """Test cases for deriving opaque client ids and secrets"""

    def test_known_values(self):
        """Test unpadded base64 of the SHA-1 digest"""
        assert crypto_hash("demo-client") == "dggA6Hiw32JkOfXRmnNo3vynK3M"
        assert crypto_hash("demo-secret") == "RRxJIyRVQ6YF4SraV4gSdmA9s1s"

    def test_no_padding(self):
        """Test hashes never carry padding"""
        assert not crypto_hash("anything").endswith("=")


class TestBase64:
    """Test cases for the base64 helpers"""

    def test_encode_strips_padding(self):
        """Test encoding uses the standard alphabet without padding"""
        assert base64_encode(b"{}") == "e30"

    @pytest.mark.parametrize("value", ["e30", "e30="])
    def test_decode_with_or_without_padding(self, value):
        """Test decoding accepts padded and unpadded input"""
        assert base64_decode(value) == b"{}"

    def test_decode_invalid(self):
        """Test characters outside the alphabet are rejected"""
        with pytest.raises(ValueError):
            base64_decode("not base64!")


class TestDecodeCredentials:
    """Test cases for decode_credentials"""

    def test_decode_blob(self):
        """Test blob with hashed client id and secret"""
        blob = _blob(
            '{"dggA6Hiw32JkOfXRmnNo3vynK3M":'
            '{"client_secret":"RRxJIyRVQ6YF4SraV4gSdmA9s1s","app_name":"demo-app"}}'
        )

        credentials = decode_credentials(blob)

        assert credentials == {
            "dggA6Hiw32JkOfXRmnNo3vynK3M": Credential(
                client_id="dggA6Hiw32JkOfXRmnNo3vynK3M",
                client_secret="RRxJIyRVQ6YF4SraV4gSdmA9s1s",
                app_name="demo-app",
            )
        }

    def test_decode_padded_blob(self):
        """Test standard padded base64 is accepted"""
        blob = base64.b64encode(b'{"c1": {"client_secret": "s1", "app_name": "A"}}').decode("ascii")

        assert decode_credentials(blob)["c1"].app_name == "A"

    def test_decode_empty_object(self):
        """Test an empty object decodes to no credentials"""
        assert decode_credentials(_blob("{}")) == {}

    @pytest.mark.parametrize("blob", ["", "   "])
    def test_decode_empty_blob(self, blob):
        """Test empty blob is a configuration error"""
        with pytest.raises(ConfigurationError):
            decode_credentials(blob)

    def test_decode_not_base64(self):
        """Test blob that is not base64"""
        with pytest.raises(ConfigurationError):
            decode_credentials("***")

    def test_decode_not_json(self):
        """Test base64 payload that is not JSON"""
        with pytest.raises(ConfigurationError):
            decode_credentials(_blob("not json"))

    @pytest.mark.parametrize(
        "document",
        [
            "[]",
            '"c1"',
            '{"c1": "s1"}',
            '{"c1": {"client_secret": "s1"}}',
            '{"c1": {"app_name": "A"}}',
        ],
    )
    def test_decode_unexpected_shape(self, document):
        """Test JSON that does not describe credentials"""
        with pytest.raises(ConfigurationError) as exc_info:
            decode_credentials(_blob(document))

        assert "errors" in exc_info.value.details

    def test_duplicate_client_id_last_wins(self):
        """Test duplicate client ids keep the last entry and warn"""
        blob = _blob(
            '{"c1": {"client_secret": "old", "app_name": "A"}, '
            '"c1": {"client_secret": "new", "app_name": "B"}}'
        )

        with patch("iam_proxy.infrastructure.config.credentials.logger") as mock_logger:
            credentials = decode_credentials(blob)

        assert credentials["c1"].client_secret == "new"
        assert credentials["c1"].app_name == "B"
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["key"] == "c1"

    def test_encode_then_decode(self):
        """Test encoded credentials decode to the same mapping"""
        credentials = {
            "c1": Credential(client_id="c1", client_secret="s1", app_name="A"),
            "c2": Credential(client_id="c2", client_secret="s2", app_name="B"),
        }

        blob = encode_credentials(credentials)

        assert not blob.endswith("=")
        assert decode_credentials(blob) == credentials
        assert InMemoryCredentialRegistry(decode_credentials(blob)) == InMemoryCredentialRegistry(credentials)


class TestInMemoryCredentialRegistry:
    """Test cases for InMemoryCredentialRegistry"""

    def test_lookup(self, registry):
        """Test lookup of registered and unknown clients"""
        assert registry.lookup("c1").app_name == "A"
        assert registry.lookup("c2") is None

    def test_container_protocol(self, registry):
        """Test length, membership and iteration"""
        assert len(registry) == 1
        assert "c1" in registry
        assert "c2" not in registry
        assert list(registry.client_ids()) == ["c1"]

    def test_source_mapping_changes_are_not_visible(self, credentials):
        """Test the registry is read-only after construction"""
        registry = InMemoryCredentialRegistry(credentials)

        credentials["c2"] = Credential(client_id="c2", client_secret="s2", app_name="B")

        assert "c2" not in registry
        with pytest.raises(TypeError):
            registry._credentials["c3"] = credentials["c2"]

    def test_from_entries(self, registry):
        """Test construction from decoded JSON entries"""
        built = InMemoryCredentialRegistry.from_entries({"c1": {"client_secret": "s1", "app_name": "A"}})

        assert built == registry

    def test_secret_hidden_from_repr(self, credentials):
        """Test client secrets do not leak through repr"""
        assert "s1" not in repr(credentials["c1"])
        assert repr(InMemoryCredentialRegistry(credentials)) == "InMemoryCredentialRegistry(clients=1)"
