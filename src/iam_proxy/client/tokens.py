import base64
import json

from iam_proxy.domain.value_objects.tokens import Claims


def decode_token(token: str) -> Claims:
    """
    Read the claims of a token without verifying it

    Use the proxy's validate or identity endpoints to check a token; this
    only looks inside.

    Raises:
        ValueError: fewer than two segments, or a payload that is not base64url JSON
    """
    segments = token.split(".")
    if len(segments) < 2:
        raise ValueError("token format is wrong")

    payload = segments[1]
    try:
        raw = base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4))
        claims = json.loads(raw)
    except ValueError as e:
        raise ValueError("could not decode token part") from e

    if not isinstance(claims, dict):
        raise ValueError("could not unmarshal claims")

    return Claims.from_dict(claims)
