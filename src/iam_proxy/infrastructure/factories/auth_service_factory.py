"""Factory for building the auth service from settings"""

import structlog

from iam_proxy.application.service import AuthService, AuthServicer
from iam_proxy.domain.errors import ConfigurationError
from iam_proxy.infrastructure.adapters.crypto.hmac_signer import create_hmac_signing_method
from iam_proxy.infrastructure.adapters.crypto.jwt_token_codec import JWTTokenCodec
from iam_proxy.infrastructure.adapters.memory.credential_registry import InMemoryCredentialRegistry
from iam_proxy.infrastructure.config.credentials import decode_credentials
from iam_proxy.infrastructure.config.settings import Settings
from iam_proxy.infrastructure.telemetry.instrumented_service import InstrumentedAuthService

logger = structlog.get_logger(__name__)


class AuthServiceFactory:
    """Factory for creating auth service instances"""

    @staticmethod
    def create_service(settings: Settings) -> AuthServicer:
        """
        Create the auth service described by the settings

        Args:
            settings: Application settings holding the credential blob and signing secret

        Returns:
            AuthServicer: plain service, wrapped with instrumentation when metrics are enabled

        Raises:
            ConfigurationError: credential blob or signing method is invalid
        """
        try:
            credentials = decode_credentials(settings.iam_users.get_secret_value())
        except ConfigurationError as e:
            logger.error("Could not load iam users credentials", error=str(e))
            raise

        registry = InMemoryCredentialRegistry(credentials)
        logger.info(
            "Loaded iam users credentials",
            clients=len(registry),
            apps=sorted({credential.app_name for credential in credentials.values()}),
        )

        signing_method = create_hmac_signing_method(settings.iam_secret.get_secret_value(), settings.jwt_algorithm)
        if not signing_method.has_key:
            logger.warning("IAM secret is empty, tokens are signed with an insecure key")
        elif signing_method.has_short_key:
            logger.warning(
                "IAM secret is shorter than recommended",
                algorithm=signing_method.algorithm,
                min_key_length=signing_method.min_key_length,
            )

        service: AuthServicer = AuthService(
            credential_store=registry,
            token_codec=JWTTokenCodec(signing_method, issuer=settings.jwt_issuer),
            expiration_seconds=settings.token_expiration_seconds,
        )

        if settings.metrics_enabled:
            service = InstrumentedAuthService(service, instance_name=settings.service_name)

        return service


def build_auth_service(settings: Settings) -> AuthServicer:
    """Build the auth service used by the HTTP application"""
    return AuthServiceFactory.create_service(settings)
