import json
import time
from typing import Any

import jwt
from jwt.algorithms import HMACAlgorithm
from jwt.utils import force_bytes

from iam_proxy.domain.errors import ConfigurationError

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")
DEFAULT_ALGORITHM = "HS512"

HASH_ALGORITHMS = {
    "HS256": HMACAlgorithm.SHA256,
    "HS384": HMACAlgorithm.SHA384,
    "HS512": HMACAlgorithm.SHA512,
}


class OpaqueHMACAlgorithm(HMACAlgorithm):
    """
    HMAC algorithm treating the shared secret as opaque bytes

    PyJWT refuses empty secrets and secrets shaped like PEM, SSH or JWK keys.
    Deployment secrets are arbitrary bytes, so they are used as given. Weak
    secrets are reported once at startup instead of on every token.
    """

    def prepare_key(self, key: str | bytes) -> bytes:
        return force_bytes(key)

    def check_key_length(self, key: Any) -> str | None:
        return None


class HMACSigningMethod:
    """Symmetric JWT signing method: one HMAC algorithm plus its shared key"""

    def __init__(self, key: bytes | str, algorithm: str = DEFAULT_ALGORITHM):
        """
        Initialize HMAC signing method

        Args:
            key: Shared secret; empty is accepted but makes the deployment insecure
            algorithm: HMAC JWT algorithm name (HS256, HS384, HS512)
        """
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported signing method: {algorithm}",
                details={"supported": list(SUPPORTED_ALGORITHMS)},
            )

        self.algorithm = algorithm
        self._key = key.encode("utf-8") if isinstance(key, str) else bytes(key)

        # Only this method's algorithm is known to the private JWS instance
        self._jws = jwt.PyJWS(algorithms=[])
        self._jws.register_algorithm(algorithm, OpaqueHMACAlgorithm(HASH_ALGORITHMS[algorithm]))

    @property
    def has_key(self) -> bool:
        return len(self._key) > 0

    @property
    def min_key_length(self) -> int:
        """Recommended key length in bytes: the digest size of the hash"""
        return HASH_ALGORITHMS[self.algorithm]().digest_size

    @property
    def has_short_key(self) -> bool:
        return 0 < len(self._key) < self.min_key_length

    def sign(self, payload: dict[str, Any]) -> str:
        """Encode and sign a JWT payload"""
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return self._jws.encode(body, self._key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry of a JWT and return its payload

        Only this method's algorithm is accepted, so a token announcing any
        other ``alg`` (including ``none``) fails before the MAC is computed.
        Issuer binding is left to the caller.

        Raises:
            jwt.InvalidTokenError subclasses from PyJWT
        """
        body = self._jws.decode_complete(token, self._key, algorithms=[self.algorithm])["payload"]

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise jwt.DecodeError(f"Invalid payload string: {e}") from e
        if not isinstance(payload, dict):
            raise jwt.DecodeError("Invalid payload string: must be a json object")

        self._check_expiry(payload)
        return payload

    @staticmethod
    def _check_expiry(payload: dict[str, Any]) -> None:
        if "exp" not in payload:
            return

        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise jwt.DecodeError("Expiration Time claim (exp) must be an integer.")
        if exp <= time.time():
            raise jwt.ExpiredSignatureError("Signature has expired")

    def __repr__(self) -> str:
        return f"HMACSigningMethod(algorithm={self.algorithm!r}, has_key={self.has_key})"


def create_hmac_signing_method(secret: bytes | str, algorithm: str = DEFAULT_ALGORITHM) -> HMACSigningMethod:
    """Factory function to create the deployment's signing method"""
    return HMACSigningMethod(key=secret, algorithm=algorithm)
