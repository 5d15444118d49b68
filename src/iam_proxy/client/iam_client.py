from urllib.parse import urlencode

import httpx

from iam_proxy.client.errors import BadResponseError, IAMClientError, error_for_status
from iam_proxy.client.headers import insert_access_token, insert_identity_token
from iam_proxy.client.paths import (
    HEALTH_PATH,
    IDENTITY_PATH,
    OAUTH_TOKEN_PATH,
    READY_PATH,
    VALIDATE_TOKEN_PATH,
    full_path,
)
from iam_proxy.domain.value_objects.health import Health, HealthStatus

SERVICE_NAME = "iam-proxy"
DEFAULT_URL = f"http://{SERVICE_NAME}"


class IAMClient:
    """Client for exchanging credentials and validating tokens against the IAM proxy"""

    def __init__(self, url: str = DEFAULT_URL, http_client: httpx.Client | None = None, timeout: float = 5.0):
        self.url = url.rstrip("/")
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "IAMClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def health(self) -> Health:
        """Get the health of the proxy; anything but Alive is reported as an error"""
        response = self._send("GET", HEALTH_PATH)
        data = self._json(response)
        try:
            return Health(status=HealthStatus(data["status"]), iam=data.get("iam") or "")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise BadResponseError() from e

    def ready(self) -> None:
        self._send("GET", READY_PATH)

    def token(self, client_id: str, client_secret: str) -> str:
        """
        Exchange client credentials for an access token

        Raises:
            BadRequestError: client id or secret missing
            UnauthorizedError: credentials rejected
            BadResponseError: response body is not a token response
        """
        body = urlencode(
            {"client_id": client_id, "client_secret": client_secret, "grant_type": "client_credentials"}
        )
        response = self._send(
            "POST",
            OAUTH_TOKEN_PATH,
            content=body,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        data = self._json(response)
        try:
            return data["access_token"]
        except (KeyError, TypeError) as e:
            raise BadResponseError() from e

    def validate(self, token: str) -> None:
        """Check an access or identity token; raises UnauthorizedError when rejected"""
        self._send("POST", VALIDATE_TOKEN_PATH, headers=insert_access_token({}, token))

    def identity(self, token: str) -> str:
        """Resolve the application name carried by an identity token"""
        response = self._send("POST", IDENTITY_PATH, headers=insert_identity_token({}, token))
        data = self._json(response)
        try:
            return data["identity"]
        except (KeyError, TypeError) as e:
            raise BadResponseError() from e

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.http_client.request(method, self.url + full_path(path), **kwargs)
        except httpx.RequestError as e:
            raise IAMClientError(f"could not complete request for {path}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise error_for_status(response.status_code)

        return response

    @staticmethod
    def _json(response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise BadResponseError() from e
