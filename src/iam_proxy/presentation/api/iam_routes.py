from urllib.parse import parse_qs

import structlog
from fastapi import APIRouter, Depends, Request

from iam_proxy.application.service import AuthServicer
from iam_proxy.client.headers import extract_access_token, extract_identity_token
from iam_proxy.client.paths import IDENTITY_PATH, OAUTH_TOKEN_PATH, VALIDATE_TOKEN_PATH
from iam_proxy.presentation.api.health_routes import get_auth_service
from iam_proxy.presentation.schema.iam_schemas import ErrorResponse, IdentityResponse, SubjectResponse, TokenResponse

router = APIRouter()
logger = structlog.get_logger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


async def read_form(request: Request) -> dict[str, str]:
    """Parse an url encoded body whatever content type the caller announced"""
    body = await request.body()
    fields = parse_qs(body.decode("utf-8", errors="replace"))
    return {key: values[-1] for key, values in fields.items()}


@router.post(OAUTH_TOKEN_PATH, response_model=TokenResponse, responses=ERROR_RESPONSES)
async def create_token(request: Request, auth_service: AuthServicer = Depends(get_auth_service)):
    """Exchange client credentials for an access token and an identity token"""
    form = await read_form(request)
    client_id = form.get("client_id", "")

    tokens = await auth_service.verify_credentials(client_id, form.get("client_secret", ""))

    logger.info("Tokens issued", client_id=client_id, expires_in=tokens.expires_in)
    return TokenResponse(
        access_token=tokens.access_token,
        identity_token=tokens.identity_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
    )


@router.post(VALIDATE_TOKEN_PATH, response_model=SubjectResponse, responses=ERROR_RESPONSES)
async def validate_token(request: Request, auth_service: AuthServicer = Depends(get_auth_service)):
    """Validate the token carried by the Authorization header"""
    token = extract_access_token(request.headers)
    subject = await auth_service.resolve_subject(token)
    return SubjectResponse(subject=subject)


@router.post(IDENTITY_PATH, response_model=IdentityResponse, responses=ERROR_RESPONSES)
async def resolve_identity(request: Request, auth_service: AuthServicer = Depends(get_auth_service)):
    """Validate the token carried by the Identity header and return its subject"""
    token = extract_identity_token(request.headers)
    identity = await auth_service.resolve_subject(token)
    return IdentityResponse(identity=identity)
