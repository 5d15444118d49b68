from abc import ABC, abstractmethod

from iam_proxy.domain.value_objects.tokens import Claims


class TokenCodec(ABC):
    """Port for signing and verifying tokens"""

    @abstractmethod
    def issue(self, claims: Claims) -> str:
        """Serialize and sign the claims"""
        pass

    @abstractmethod
    def verify(self, token: str) -> Claims:
        """
        Verify a token and return its claims

        Raises:
            MalformedTokenError, SignatureInvalidError, TokenExpiredError,
            IssuerMismatchError
        """
        pass

    @property
    @abstractmethod
    def issuer(self) -> str:
        """Issuer bound into every token this codec issues and accepts"""
        pass

    @property
    @abstractmethod
    def is_secure(self) -> bool:
        """False when tokens are signed with an empty secret"""
        pass
