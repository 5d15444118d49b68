from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Claims:
    """Value object for the registered JWT claims the proxy issues"""

    iss: str  # Issuer
    sub: str | None = None  # Subject (identity tokens)
    jti: str | None = None  # JWT ID (access tokens)
    exp: int | None = None  # Expiration time (access tokens)
    iat: int | None = None  # Issued at

    @property
    def subject(self) -> str:
        return self.sub or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JWT encoding"""
        result: dict[str, Any] = {"iss": self.iss}

        for claim in ("sub", "jti", "exp", "iat"):
            value = getattr(self, claim)
            if value is not None:
                result[claim] = value

        return result

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Claims":
        """Build claims from a decoded JWT payload, ignoring unknown claims"""
        return cls(
            iss=payload.get("iss") or "",
            sub=payload.get("sub"),
            jti=payload.get("jti"),
            exp=payload.get("exp"),
            iat=payload.get("iat"),
        )


@dataclass(frozen=True)
class IssuedTokenPair:
    """Tokens returned once to a client after a successful credential exchange"""

    access_token: str
    identity_token: str
    expires_in: int
    token_type: str = "Bearer"
