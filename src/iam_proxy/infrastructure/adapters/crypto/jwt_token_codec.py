"""JWT token codec adapter implementation"""

import jwt

from iam_proxy.application.ports.token_codec import TokenCodec
from iam_proxy.domain.errors import (
    IssuerMismatchError,
    MalformedTokenError,
    SignatureInvalidError,
    SigningMethodMismatchError,
    TokenExpiredError,
)
from iam_proxy.domain.value_objects.tokens import Claims
from iam_proxy.infrastructure.adapters.crypto.hmac_signer import HMACSigningMethod


class JWTTokenCodec(TokenCodec):
    """Issues and verifies JWTs bound to one issuer and one signing method"""

    def __init__(self, signing_method: HMACSigningMethod, issuer: str):
        self.signing_method = signing_method
        self._issuer = issuer

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def is_secure(self) -> bool:
        return self.signing_method.has_key

    def issue(self, claims: Claims) -> str:
        return self.signing_method.sign(claims.to_dict())

    def verify(self, token: str) -> Claims:
        segments = token.count(".") + 1
        if segments < 2:
            raise MalformedTokenError(details={"segments": segments})
        if segments == 2:
            # No signature segment: let the MAC comparison fail on an empty signature
            token = f"{token}."

        try:
            payload = self.signing_method.decode(token)
        except jwt.InvalidAlgorithmError as e:
            raise SigningMethodMismatchError(self._announced_algorithm(token)) from e
        except jwt.InvalidSignatureError as e:
            raise SignatureInvalidError() from e
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.DecodeError as e:
            raise MalformedTokenError(f"Token is malformed: {e}") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Token claims are invalid: {e}") from e

        if payload.get("iss") != self._issuer:
            raise IssuerMismatchError(details={"issuer": payload.get("iss")})

        return Claims.from_dict(payload)

    @staticmethod
    def _announced_algorithm(token: str) -> str | None:
        try:
            return jwt.get_unverified_header(token).get("alg")
        except jwt.DecodeError:
            return None
