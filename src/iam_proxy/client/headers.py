"""
Header convention shared by the proxy and its callers.

Tokens travel as ``<HeaderName> <token>`` in the header of the same name:

    Authorization: Authorization <access token>
    Identity: Identity <identity token>
"""

from collections.abc import Mapping, MutableMapping

AUTHORIZATION_HEADER_KEY = "Authorization"
IDENTITY_HEADER_KEY = "Identity"


class HeaderError(ValueError):
    """Raised when a token header is missing or does not follow the convention"""

    def __init__(self, header: str, message: str):
        self.header = header
        super().__init__(f"{header} header {message}")


def _insert(headers: MutableMapping[str, str], key: str, token: str) -> MutableMapping[str, str]:
    headers[key] = f"{key} {token}"
    return headers


def _extract(headers: Mapping[str, str], key: str) -> str:
    value = headers.get(key)
    if value is None:
        # Plain dicts are case sensitive, HTTP header names are not
        value = next((v for k, v in headers.items() if k.lower() == key.lower()), None)
    if not value:
        raise HeaderError(key, "is missing")

    parts = value.split(" ")
    if len(parts) != 2 or not parts[1]:
        raise HeaderError(key, "is malformed")

    return parts[1]


def insert_access_token(headers: MutableMapping[str, str], token: str) -> MutableMapping[str, str]:
    """Set the Authorization header to carry the access token"""
    return _insert(headers, AUTHORIZATION_HEADER_KEY, token)


def insert_identity_token(headers: MutableMapping[str, str], token: str) -> MutableMapping[str, str]:
    """Set the Identity header to carry the identity token"""
    return _insert(headers, IDENTITY_HEADER_KEY, token)


def extract_access_token(headers: Mapping[str, str]) -> str:
    """
    Read the access token from the Authorization header

    Raises:
        HeaderError: header missing or not exactly two space separated parts
    """
    return _extract(headers, AUTHORIZATION_HEADER_KEY)


def extract_identity_token(headers: Mapping[str, str]) -> str:
    """Read the identity token from the Identity header"""
    return _extract(headers, IDENTITY_HEADER_KEY)
