# Assumptions:
# - Domain errors are raised by the auth service and mapped to status codes here
# - Token errors never reveal which verification step failed to the caller
# - Consistent error response format: {"error", "code"}

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from framework.logging.setup import create_request_logger

from iam_proxy.client.headers import HeaderError
from iam_proxy.domain.errors import (
    IAMProxyError,
    InvalidInputError,
    TokenError,
    UnauthorizedError,
)


def status_code_for(exc: IAMProxyError) -> int:
    if isinstance(exc, InvalidInputError):
        return 400
    if isinstance(exc, (UnauthorizedError, TokenError)):
        return 401
    return 500


async def iam_proxy_exception_handler(request: Request, exc: IAMProxyError) -> JSONResponse:
    """Handle IAM proxy domain exceptions"""
    status_code = status_code_for(exc)
    code = exc.error_code.value if exc.error_code else "DOMAIN_ERROR"

    logger = create_request_logger(request)
    logger.warning("Domain error", error=str(exc), type=type(exc).__name__, status_code=status_code)

    if isinstance(exc, (UnauthorizedError, TokenError)):
        # Callers learn only that they are not authorized
        return JSONResponse(status_code=status_code, content={"error": "Unauthorized", "code": code})

    return JSONResponse(status_code=status_code, content={"error": exc.message, "code": code})


async def header_exception_handler(request: Request, exc: HeaderError) -> JSONResponse:
    """Handle missing or malformed token headers"""
    create_request_logger(request).warning("Bad token header", error=str(exc), header=exc.header)

    return JSONResponse(status_code=400, content={"error": str(exc), "code": "BAD_HEADER"})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions"""
    create_request_logger(request).error(
        "Unhandled exception",
        error=str(exc),
        type=type(exc).__name__,
        traceback=traceback.format_exc(),
    )

    return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "INTERNAL_ERROR"})


def install_error_handlers(app: FastAPI) -> None:
    """Install error handlers on FastAPI app"""
    app.add_exception_handler(IAMProxyError, iam_proxy_exception_handler)
    app.add_exception_handler(HeaderError, header_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
