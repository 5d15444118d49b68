"""HTTP paths served by the IAM proxy"""

PATH_PREFIX = "/iam/v1"

HEALTH_PATH = "/health"
READY_PATH = "/ready"
OAUTH_TOKEN_PATH = "/oauth/token"
VALIDATE_TOKEN_PATH = "/validate"
IDENTITY_PATH = "/identity"


def full_path(path: str) -> str:
    return PATH_PREFIX + path
