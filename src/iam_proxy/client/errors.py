"""Errors raised by the IAM proxy client"""


class IAMClientError(Exception):
    """Base exception for IAM proxy client errors"""

    pass


class ServiceUnavailableError(IAMClientError):
    """The IAM proxy is not available"""

    def __init__(self, message: str = "service is unavailable"):
        super().__init__(message)


class InternalError(IAMClientError):
    """The IAM proxy failed or answered with an unexpected status"""

    def __init__(self, message: str = "internal server error"):
        super().__init__(message)


class UnauthorizedError(IAMClientError):
    """Client credentials or token were rejected"""

    def __init__(self, message: str = "user credentials invalid"):
        super().__init__(message)


class BadRequestError(IAMClientError):
    """The request sent to the IAM proxy was not valid"""

    def __init__(self, message: str = "bad request"):
        super().__init__(message)


class BadResponseError(IAMClientError):
    """The IAM proxy response could not be parsed"""

    def __init__(self, message: str = "bad response"):
        super().__init__(message)


STATUS_ERRORS: dict[int, type[IAMClientError]] = {
    503: ServiceUnavailableError,
    500: InternalError,
    400: BadRequestError,
    401: UnauthorizedError,
}


def error_for_status(status_code: int) -> IAMClientError:
    """Map a non-200 status code of the IAM proxy to a client error"""
    error_class = STATUS_ERRORS.get(status_code)
    if error_class is None:
        return InternalError(f"unhandled error returned http {status_code}")
    return error_class()
