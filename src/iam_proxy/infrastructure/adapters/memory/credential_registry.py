from collections.abc import Iterator, Mapping
from types import MappingProxyType

from iam_proxy.application.ports.credential_store import CredentialStore
from iam_proxy.domain.entities.credential import Credential


class InMemoryCredentialRegistry(CredentialStore):
    """Credential registry held in process memory, read-only after construction"""

    def __init__(self, credentials: Mapping[str, Credential]):
        self._credentials = MappingProxyType(dict(credentials))

    def lookup(self, client_id: str) -> Credential | None:
        return self._credentials.get(client_id)

    def client_ids(self) -> Iterator[str]:
        return iter(self._credentials)

    def __len__(self) -> int:
        return len(self._credentials)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InMemoryCredentialRegistry):
            return NotImplemented
        return dict(self._credentials) == dict(other._credentials)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"InMemoryCredentialRegistry(clients={len(self)})"

    @classmethod
    def from_entries(cls, entries: Mapping[str, Mapping[str, str]]) -> "InMemoryCredentialRegistry":
        """Build from ``client_id -> {client_secret, app_name}`` entries"""
        return cls(
            {
                client_id: Credential(
                    client_id=client_id,
                    client_secret=entry["client_secret"],
                    app_name=entry["app_name"],
                )
                for client_id, entry in entries.items()
            }
        )
