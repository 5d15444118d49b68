from iam_proxy.application.ports.credential_store import CredentialStore
from iam_proxy.application.ports.token_codec import TokenCodec
from iam_proxy.domain.services.auth_service import AuthDomainService
from iam_proxy.domain.value_objects.health import Health


class CheckHealthUseCase:
    """Use case for the health and readiness views of the service"""

    def __init__(self, credential_store: CredentialStore, token_codec: TokenCodec):
        self.credential_store = credential_store
        self.token_codec = token_codec

    async def health(self) -> Health:
        return AuthDomainService.determine_health(len(self.credential_store), self.token_codec.is_secure)

    async def ready(self) -> None:
        """Ready as soon as the service exists; configuration state is reported by health only"""
        return None
