# Assumptions:
# - Using pytest for testing framework
# - Tokens are HS512 JWTs bound to the "iam-proxy" issuer
# - Forged tokens are built directly with PyJWT

import json
import time
import warnings

import jwt
import pytest

from iam_proxy.domain.errors import (
    IssuerMismatchError,
    MalformedTokenError,
    SignatureInvalidError,
    SigningMethodMismatchError,
    TokenError,
    TokenExpiredError,
)
from iam_proxy.domain.value_objects.tokens import Claims
from iam_proxy.infrastructure.adapters.crypto.hmac_signer import HMACSigningMethod
from iam_proxy.infrastructure.adapters.crypto.jwt_token_codec import JWTTokenCodec

ISSUER = "iam-proxy"
SECRET = "k"


@pytest.fixture
def now():
    return int(time.time())


class TestJWTTokenCodec:
    """Test cases for JWTTokenCodec"""

    def test_issue_signs_with_hs512(self, codec, now):
        """Test issued tokens announce HS512 and carry the claims"""
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))

        assert jwt.get_unverified_header(token)["alg"] == "HS512"
        decoded = jwt.decode(token, options={"verify_signature": False})
        assert decoded == {"iss": ISSUER, "sub": "A", "iat": now}

    def test_verify_identity_token(self, codec, now):
        """Test identity token verifies and keeps its subject"""
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))

        claims = codec.verify(token)

        assert claims.subject == "A"
        assert claims.iss == ISSUER
        assert claims.exp is None

    def test_verify_access_token_has_empty_subject(self, codec, now):
        """Test access token carries id and expiry but no subject"""
        token = codec.issue(Claims(iss=ISSUER, jti="token-id", exp=now + 3600, iat=now))

        claims = codec.verify(token)

        assert claims.subject == ""
        assert claims.jti == "token-id"
        assert claims.exp == now + 3600

    def test_verify_token_signed_with_other_secret(self, codec, now):
        """Test a token from another secret fails signature verification"""
        other = JWTTokenCodec(HMACSigningMethod("other-secret"), issuer=ISSUER)
        token = other.issue(Claims(iss=ISSUER, sub="A", iat=now))

        with pytest.raises(SignatureInvalidError) as exc_info:
            codec.verify(token)

        assert not isinstance(exc_info.value, SigningMethodMismatchError)

    def test_verify_tampered_payload(self, codec, now):
        """Test a payload swapped under an existing signature is rejected"""
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))
        forged = codec.issue(Claims(iss=ISSUER, sub="admin", iat=now))
        header, _, signature = token.split(".")
        _, payload, _ = forged.split(".")

        with pytest.raises(SignatureInvalidError):
            codec.verify(f"{header}.{payload}.{signature}")

    def test_verify_expired_token(self, codec, now):
        """Test expired access token"""
        token = codec.issue(Claims(iss=ISSUER, jti="token-id", exp=now - 10, iat=now - 3610))

        with pytest.raises(TokenExpiredError):
            codec.verify(token)

    def test_verify_foreign_issuer(self, codec, now):
        """Test token signed with the right key but another issuer"""
        token = jwt.encode({"iss": "someone-else", "sub": "A", "iat": now}, SECRET, algorithm="HS512")

        with pytest.raises(IssuerMismatchError):
            codec.verify(token)

    def test_verify_issuer_prefix_is_not_accepted(self, codec, now):
        """Test issuer must match exactly, not as a substring"""
        token = jwt.encode({"iss": "iam", "sub": "A", "iat": now}, SECRET, algorithm="HS512")

        with pytest.raises(IssuerMismatchError):
            codec.verify(token)

    def test_verify_missing_issuer(self, codec, now):
        """Test token without issuer claim"""
        token = jwt.encode({"sub": "A", "iat": now}, SECRET, algorithm="HS512")

        with pytest.raises(IssuerMismatchError):
            codec.verify(token)

    @pytest.mark.parametrize("algorithm", ["HS256", "HS384"])
    def test_verify_other_hmac_algorithm(self, codec, now, algorithm):
        """Test algorithm substitution with the same key is rejected"""
        token = jwt.encode({"iss": ISSUER, "sub": "A", "iat": now}, SECRET, algorithm=algorithm)

        with pytest.raises(SigningMethodMismatchError) as exc_info:
            codec.verify(token)

        assert exc_info.value.algorithm == algorithm
        assert isinstance(exc_info.value, SignatureInvalidError)

    def test_verify_unsigned_token(self, codec, now):
        """Test alg none token is rejected"""
        token = jwt.encode({"iss": ISSUER, "sub": "A", "iat": now}, None, algorithm="none")

        with pytest.raises(SigningMethodMismatchError) as exc_info:
            codec.verify(token)

        assert exc_info.value.algorithm == "none"

    @pytest.mark.parametrize("token", ["", "not-a-token"])
    def test_verify_single_segment(self, codec, token):
        """Test tokens with fewer than two segments are malformed"""
        with pytest.raises(MalformedTokenError):
            codec.verify(token)

    def test_verify_missing_signature_segment(self, codec, now):
        """Test header and payload without signature fail signature verification"""
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))
        header, payload, _ = token.split(".")

        with pytest.raises(SignatureInvalidError):
            codec.verify(f"{header}.{payload}")

    def test_verify_undecodable_segments(self, codec):
        """Test garbage segments are malformed"""
        with pytest.raises(MalformedTokenError):
            codec.verify("a.b.c")

    def test_all_failures_share_token_error(self, codec):
        """Test codec failures can be handled as TokenError"""
        with pytest.raises(TokenError):
            codec.verify("garbage")

    def test_is_secure(self, codec):
        """Test an empty secret is reported as insecure"""
        assert codec.is_secure is True
        assert JWTTokenCodec(HMACSigningMethod(""), issuer=ISSUER).is_secure is False

    def test_empty_secret_still_round_trips(self, now):
        """Test the service stays operational with an empty secret"""
        codec = JWTTokenCodec(HMACSigningMethod(b""), issuer=ISSUER)
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))

        assert codec.verify(token).subject == "A"

    @pytest.mark.parametrize(
        "secret",
        [
            "ssh-rsa AAAAsecret",
            "-----BEGIN PUBLIC KEY-----\nMFkw\n-----END PUBLIC KEY-----",
            '{"kty": "oct", "k": "c2VjcmV0"}',
        ],
    )
    def test_key_shaped_secret_round_trips(self, now, secret):
        """Test secrets resembling asymmetric keys are used as opaque bytes"""
        codec = JWTTokenCodec(HMACSigningMethod(secret), issuer=ISSUER)
        token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))

        assert codec.verify(token).subject == "A"
        with pytest.raises(SignatureInvalidError):
            JWTTokenCodec(HMACSigningMethod("other"), issuer=ISSUER).verify(token)

    def test_short_secret_does_not_warn_per_token(self, codec, now):
        """Test issuing and verifying with a short secret emits no warnings"""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            token = codec.issue(Claims(iss=ISSUER, sub="A", iat=now))
            codec.verify(token)

    def test_verify_non_object_payload(self, codec):
        """Test a signed payload that is not a JSON object is malformed"""
        token = jwt.PyJWS().encode(b"[]", SECRET, algorithm="HS512")

        with pytest.raises(MalformedTokenError):
            codec.verify(token)

    def test_verify_non_numeric_expiry(self, codec, now):
        """Test a non numeric exp claim is malformed"""
        token = jwt.PyJWS().encode(
            json.dumps({"iss": ISSUER, "exp": "tomorrow", "iat": now}).encode(), SECRET, algorithm="HS512"
        )

        with pytest.raises(MalformedTokenError):
            codec.verify(token)
