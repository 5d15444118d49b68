"""Client library for services calling the IAM proxy."""

from .errors import (
    BadRequestError,
    BadResponseError,
    IAMClientError,
    InternalError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from .headers import (
    AUTHORIZATION_HEADER_KEY,
    IDENTITY_HEADER_KEY,
    HeaderError,
    extract_access_token,
    extract_identity_token,
    insert_access_token,
    insert_identity_token,
)
from .iam_client import IAMClient
from .tokens import decode_token

__all__ = [
    "IAMClient",
    "IAMClientError",
    "ServiceUnavailableError",
    "InternalError",
    "UnauthorizedError",
    "BadRequestError",
    "BadResponseError",
    "AUTHORIZATION_HEADER_KEY",
    "IDENTITY_HEADER_KEY",
    "HeaderError",
    "insert_access_token",
    "insert_identity_token",
    "extract_access_token",
    "extract_identity_token",
    "decode_token",
]
