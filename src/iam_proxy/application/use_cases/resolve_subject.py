from iam_proxy.application.ports.token_codec import TokenCodec


class ResolveSubjectUseCase:
    """Use case for recovering the subject of a token issued by this service"""

    def __init__(self, token_codec: TokenCodec):
        self.token_codec = token_codec

    async def execute(self, token: str) -> str:
        """
        Verify the token and return its subject

        An access token carries no subject and resolves to an empty string.

        Raises:
            TokenError: the codec rejected the token
        """
        claims = self.token_codec.verify(token)
        return claims.subject
