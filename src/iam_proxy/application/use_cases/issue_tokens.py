import uuid

from iam_proxy.application.ports.credential_store import CredentialStore
from iam_proxy.application.ports.token_codec import TokenCodec
from iam_proxy.domain.services.auth_service import AuthDomainService
from iam_proxy.domain.value_objects.tokens import IssuedTokenPair

DEFAULT_EXPIRATION_SECONDS = 3600


class IssueTokensUseCase:
    """Use case for exchanging client credentials for an access and identity token"""

    def __init__(
        self,
        credential_store: CredentialStore,
        token_codec: TokenCodec,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
    ):
        self.credential_store = credential_store
        self.token_codec = token_codec
        self.expiration_seconds = expiration_seconds

    async def execute(self, client_id: str, client_secret: str) -> IssuedTokenPair:
        """
        Issue a token pair

        Args:
            client_id: Registered client id
            client_secret: Secret registered for the client id

        Returns:
            IssuedTokenPair with the access token, the identity token whose
            subject is the client's application name, and the access token
            lifetime in seconds

        Raises:
            InvalidInputError: client id or secret is empty
            UnauthorizedError: unknown client id or secret mismatch
        """
        AuthDomainService.validate_client_input(client_id, client_secret)

        app_name = AuthDomainService.authorize_client(
            self.credential_store.lookup(client_id), client_id, client_secret
        )

        access_claims = AuthDomainService.create_access_claims(
            issuer=self.token_codec.issuer,
            ttl_seconds=self.expiration_seconds,
            jti=str(uuid.uuid4()),
        )
        identity_claims = AuthDomainService.create_identity_claims(
            issuer=self.token_codec.issuer,
            subject=app_name,
            now=access_claims.iat,
        )

        return IssuedTokenPair(
            access_token=self.token_codec.issue(access_claims),
            identity_token=self.token_codec.issue(identity_claims),
            expires_in=self.expiration_seconds,
        )
