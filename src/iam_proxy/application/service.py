from abc import ABC, abstractmethod

from iam_proxy.application.ports.credential_store import CredentialStore
from iam_proxy.application.ports.token_codec import TokenCodec
from iam_proxy.application.use_cases.check_health import CheckHealthUseCase
from iam_proxy.application.use_cases.issue_tokens import DEFAULT_EXPIRATION_SECONDS, IssueTokensUseCase
from iam_proxy.application.use_cases.resolve_subject import ResolveSubjectUseCase
from iam_proxy.domain.value_objects.health import Health
from iam_proxy.domain.value_objects.tokens import IssuedTokenPair


class AuthServicer(ABC):
    """Operations the transport layer calls on the IAM proxy"""

    @abstractmethod
    async def verify_credentials(self, client_id: str, client_secret: str) -> IssuedTokenPair:
        pass

    @abstractmethod
    async def resolve_subject(self, token: str) -> str:
        pass

    @abstractmethod
    async def health(self) -> Health:
        pass

    @abstractmethod
    async def ready(self) -> None:
        pass


class AuthService(AuthServicer):
    """Credential exchange and token resolution over an immutable registry and codec"""

    def __init__(
        self,
        credential_store: CredentialStore,
        token_codec: TokenCodec,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
    ):
        self.credential_store = credential_store
        self.token_codec = token_codec
        self.issue_tokens_uc = IssueTokensUseCase(credential_store, token_codec, expiration_seconds)
        self.resolve_subject_uc = ResolveSubjectUseCase(token_codec)
        self.check_health_uc = CheckHealthUseCase(credential_store, token_codec)

    @property
    def expiration_seconds(self) -> int:
        return self.issue_tokens_uc.expiration_seconds

    async def verify_credentials(self, client_id: str, client_secret: str) -> IssuedTokenPair:
        return await self.issue_tokens_uc.execute(client_id, client_secret)

    async def resolve_subject(self, token: str) -> str:
        return await self.resolve_subject_uc.execute(token)

    async def health(self) -> Health:
        return await self.check_health_uc.health()

    async def ready(self) -> None:
        await self.check_health_uc.ready()
