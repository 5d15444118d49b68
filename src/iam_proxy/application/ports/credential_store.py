from abc import ABC, abstractmethod
from collections.abc import Iterator

from iam_proxy.domain.entities.credential import Credential


class CredentialStore(ABC):
    """Port for read-only access to registered client credentials"""

    @abstractmethod
    def lookup(self, client_id: str) -> Credential | None:
        """Get the credential registered for a client id, None when unknown"""
        pass

    @abstractmethod
    def client_ids(self) -> Iterator[str]:
        """Iterate over the registered client ids"""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, client_id: object) -> bool:
        return isinstance(client_id, str) and self.lookup(client_id) is not None
