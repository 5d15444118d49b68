import hmac
import time

from iam_proxy.domain.entities.credential import Credential
from iam_proxy.domain.errors import (
    ClientSecretMismatchError,
    MissingRequiredFieldError,
    UnknownClientError,
)
from iam_proxy.domain.value_objects.health import (
    INSECURE_SECRET_DETAIL,
    NO_CREDENTIALS_DETAIL,
    Health,
    HealthStatus,
)
from iam_proxy.domain.value_objects.tokens import Claims


class AuthDomainService:
    """Domain service for credential exchange business logic"""

    @staticmethod
    def create_access_claims(issuer: str, ttl_seconds: int, jti: str, now: int | None = None) -> Claims:
        """Create claims for an access token: unique id and expiry, no subject"""
        now = int(time.time()) if now is None else now

        return Claims(
            iss=issuer,
            jti=jti,
            exp=now + ttl_seconds,
            iat=now,
        )

    @staticmethod
    def create_identity_claims(issuer: str, subject: str, now: int | None = None) -> Claims:
        """Create claims for an identity token: subject, no expiry"""
        now = int(time.time()) if now is None else now

        return Claims(
            iss=issuer,
            sub=subject,
            iat=now,
        )

    @staticmethod
    def validate_client_input(client_id: str, client_secret: str) -> None:
        """Reject a credential exchange that lacks the client id or secret"""
        if not client_id:
            raise MissingRequiredFieldError("client_id")
        if not client_secret:
            raise MissingRequiredFieldError("client_secret")

    @staticmethod
    def authorize_client(credential: Credential | None, client_id: str, client_secret: str) -> str:
        """
        Check the presented secret against the registered credential

        Returns:
            The application name bound to the client id
        """
        if credential is None:
            raise UnknownClientError(details={"client_id": client_id})

        if not hmac.compare_digest(credential.client_secret.encode("utf-8"), client_secret.encode("utf-8")):
            raise ClientSecretMismatchError(details={"client_id": client_id})

        return credential.app_name

    @staticmethod
    def determine_health(credential_count: int, has_signing_secret: bool) -> Health:
        """Derive health from configuration; missing credentials dominate a weak secret"""
        if credential_count == 0:
            return Health(status=HealthStatus.UNAVAILABLE, iam=NO_CREDENTIALS_DETAIL)

        if not has_signing_secret:
            return Health(status=HealthStatus.DEGRADED, iam=INSECURE_SECRET_DETAIL)

        return Health(status=HealthStatus.ALIVE)
