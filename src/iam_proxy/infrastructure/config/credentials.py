"""
Credential blob codec.

The IAM_USERS setting carries every registered client as base64 encoded JSON:

    {"<client_id>": {"client_secret": "<client_secret>", "app_name": "<app>"}}

Encoding uses the standard alphabet without padding; decoding accepts the
blob with or without padding.
"""

import base64
import binascii
import hashlib
import json
from collections.abc import Mapping

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from iam_proxy.domain.entities.credential import Credential
from iam_proxy.domain.errors import ConfigurationError

logger = structlog.get_logger(__name__)


class CredentialEntry(BaseModel):
    """One client entry of the credential blob"""

    client_secret: str
    app_name: str


_ENTRIES_ADAPTER = TypeAdapter(dict[str, CredentialEntry])


def base64_encode(data: bytes) -> str:
    """Encode bytes to an unpadded standard base64 string"""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def base64_decode(value: str) -> bytes:
    """Decode a standard base64 string, restoring padding when absent"""
    stripped = value.strip().rstrip("=")
    padding = "=" * (-len(stripped) % 4)
    try:
        return base64.b64decode(stripped + padding, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64 data: {e}") from e


def crypto_hash(value: str) -> str:
    """Derive an opaque identifier: unpadded base64 of the SHA-1 digest"""
    return base64_encode(hashlib.sha1(value.encode("utf-8")).digest())


def _collect_duplicates(duplicates: list[str]):
    def hook(pairs):
        seen = set()
        for key, _ in pairs:
            if key in seen:
                duplicates.append(key)
            seen.add(key)
        return dict(pairs)

    return hook


def decode_credentials(blob: str) -> dict[str, Credential]:
    """
    Decode the credential blob into credentials keyed by client id

    Duplicate client ids keep the last entry and are reported as warnings.

    Raises:
        ConfigurationError: when the blob is empty, not base64, not JSON or
            does not match the expected entry shape
    """
    if not blob or not blob.strip():
        raise ConfigurationError("Could not decode iam users credentials: blob is empty")

    try:
        raw = base64_decode(blob)
    except ValueError as e:
        raise ConfigurationError(f"Could not decode iam users credentials: {e}") from e

    duplicates: list[str] = []
    try:
        document = json.loads(raw.decode("utf-8"), object_pairs_hook=_collect_duplicates(duplicates))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not decode IAM information: {e}") from e

    try:
        entries = _ENTRIES_ADAPTER.validate_python(document)
    except ValidationError as e:
        raise ConfigurationError(
            "Could not decode IAM information: unexpected credential format",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e

    for key in duplicates:
        logger.warning("Duplicate key in iam users credentials, keeping the last entry", key=key)

    return {
        client_id: Credential(client_id=client_id, client_secret=entry.client_secret, app_name=entry.app_name)
        for client_id, entry in entries.items()
    }


def encode_credentials(credentials: Mapping[str, Credential]) -> str:
    """Encode credentials into the blob format read by ``decode_credentials``"""
    document = {client_id: credentials[client_id].to_dict() for client_id in sorted(credentials)}
    return base64_encode(json.dumps(document, separators=(",", ":")).encode("utf-8"))
