from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Credential exchange response"""

    access_token: str
    identity_token: str
    token_type: str = "Bearer"
    expires_in: int


class SubjectResponse(BaseModel):
    """Subject resolved from an access or identity token"""

    subject: str


class IdentityResponse(BaseModel):
    """Identity resolved from an identity token"""

    identity: str


class HealthResponse(BaseModel):
    status: str
    iam: str | None = None


class ReadyResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
    code: str
