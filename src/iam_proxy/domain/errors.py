from enum import Enum


class ErrorCode(Enum):
    """Standard error codes for the IAM proxy domain"""

    # Input errors
    INVALID_INPUT = "VAL_001"
    MISSING_REQUIRED_FIELD = "VAL_002"

    # Credential errors
    UNAUTHORIZED = "AUTH_001"
    UNKNOWN_CLIENT = "AUTH_002"
    CLIENT_SECRET_MISMATCH = "AUTH_003"

    # Token errors
    MALFORMED_TOKEN = "TOKEN_001"
    SIGNATURE_INVALID = "TOKEN_002"
    TOKEN_EXPIRED = "TOKEN_003"
    ISSUER_MISMATCH = "TOKEN_004"
    SIGNING_METHOD_MISMATCH = "TOKEN_005"

    # Startup errors
    CONFIGURATION_ERROR = "CFG_001"


class IAMProxyError(Exception):
    """Base exception for IAM proxy domain errors"""

    def __init__(self, message: str, error_code: ErrorCode | None = None, details: dict | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}
        self.message = message

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code.value}] {self.message}"
        return self.message


# Input Errors
class InvalidInputError(IAMProxyError):
    """Raised when a request lacks the client id or client secret"""

    def __init__(self, message: str = "Input validation failed", details: dict | None = None):
        super().__init__(message, ErrorCode.INVALID_INPUT, details)


class MissingRequiredFieldError(InvalidInputError):
    """Raised when required field is missing"""

    def __init__(self, field_name: str, details: dict | None = None):
        self.field_name = field_name
        super().__init__(f"Required field '{field_name}' is missing", details)
        self.error_code = ErrorCode.MISSING_REQUIRED_FIELD


# Credential Errors
class UnauthorizedError(IAMProxyError):
    """Raised when a client is not authorized to use the IAM service"""

    def __init__(
        self,
        message: str = "User not authorized to use iam service",
        details: dict | None = None,
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ):
        super().__init__(message, error_code, details)


class UnknownClientError(UnauthorizedError):
    """Raised when the client id is not registered"""

    def __init__(self, message: str = "Client id does not exist", details: dict | None = None):
        super().__init__(message, details, ErrorCode.UNKNOWN_CLIENT)


class ClientSecretMismatchError(UnauthorizedError):
    """Raised when the client secret does not match the registered one"""

    def __init__(self, message: str = "Client secret does not match", details: dict | None = None):
        super().__init__(message, details, ErrorCode.CLIENT_SECRET_MISMATCH)


# Token Errors
class TokenError(IAMProxyError):
    """Base class for token parsing and verification errors"""

    pass


class MalformedTokenError(TokenError):
    """Raised when a token cannot be split or decoded"""

    def __init__(self, message: str = "Token is malformed", details: dict | None = None):
        super().__init__(message, ErrorCode.MALFORMED_TOKEN, details)


class SignatureInvalidError(TokenError):
    """Raised when the token signature does not verify"""

    def __init__(
        self,
        message: str = "Token signature is invalid",
        details: dict | None = None,
        error_code: ErrorCode = ErrorCode.SIGNATURE_INVALID,
    ):
        super().__init__(message, error_code, details)


class SigningMethodMismatchError(SignatureInvalidError):
    """Raised when a token claims a signing method other than the configured one"""

    def __init__(self, algorithm: str | None, details: dict | None = None):
        self.algorithm = algorithm
        super().__init__(f"Unexpected signing method: {algorithm}", details, ErrorCode.SIGNING_METHOD_MISMATCH)


class TokenExpiredError(TokenError):
    """Raised when token has expired"""

    def __init__(self, message: str = "Token is expired", details: dict | None = None):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED, details)


class IssuerMismatchError(TokenError):
    """Raised when the token issuer is not this service"""

    def __init__(self, message: str = "Issuer is invalid", details: dict | None = None):
        super().__init__(message, ErrorCode.ISSUER_MISMATCH, details)


# Startup Errors
class ConfigurationError(IAMProxyError):
    """Raised when the service cannot be built from its configuration"""

    def __init__(self, message: str = "Invalid configuration", details: dict | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)
