import contextvars
import logging
import sys
import uuid

import structlog
from pythonjsonlogger import jsonlogger
from structlog.stdlib import LoggerFactory

# Context variables for correlation and trace IDs
_correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)
_trace_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)


def setup_logging(
    service_name: str,
    level: str = "INFO",
    format_type: str = "json",  # "json" or "console"
    version: str | None = None,
) -> None:
    """
    Set up structured logging for the service

    structlog events are handed to stdlib logging. In "json" mode the event
    dict travels as ``extra`` and python-json-logger renders one JSON object
    per line, so foreign loggers (uvicorn, httpx) share the same format.

    Args:
        service_name: Name of the service for log context
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: "json" for production, "console" for development
        version: Optional service version stamped on every entry
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_service_context(service_name, version),
        add_correlation_context(),
    ]

    handler = logging.StreamHandler(sys.stdout)
    if format_type == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        processors.append(structlog.stdlib.render_to_log_kwargs)
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S%z",
            )
        )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def add_service_context(service_name: str, version: str | None = None):
    """Add service context to all log entries"""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        if version:
            event_dict["version"] = version
        return event_dict

    return processor


def add_correlation_context():
    """Add correlation and trace IDs from context"""

    def processor(logger, method_name, event_dict):
        correlation_id = _correlation_id_var.get()
        if correlation_id:
            event_dict.setdefault("correlation_id", correlation_id)

        trace_id = _trace_id_var.get()
        if trace_id:
            event_dict.setdefault("trace_id", trace_id)

        return event_dict

    return processor


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID in context"""
    _correlation_id_var.set(correlation_id)


def set_trace_id(trace_id: str) -> None:
    """Set trace ID in context"""
    _trace_id_var.set(trace_id)


def get_correlation_id() -> str | None:
    return _correlation_id_var.get()


def get_trace_id() -> str | None:
    return _trace_id_var.get()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class CorrelationMiddleware:
    """ASGI middleware that binds correlation/trace IDs from HTTP headers

    The correlation ID is echoed back on the response so callers can quote
    it when reporting a failed token exchange.
    """

    def __init__(
        self,
        app,
        correlation_header: str = "X-Correlation-ID",
        trace_header: str = "X-Trace-ID",
        generate_correlation: bool = True,
    ):
        self.app = app
        self.correlation_header = correlation_header.lower()
        self.trace_header = trace_header.lower()
        self.generate_correlation = generate_correlation

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {name.decode("latin-1").lower(): value.decode("latin-1") for name, value in scope.get("headers", [])}
        correlation_id = headers.get(self.correlation_header)
        trace_id = headers.get(self.trace_header)

        if not correlation_id and self.generate_correlation:
            correlation_id = str(uuid.uuid4())

        correlation_token = _correlation_id_var.set(correlation_id)
        trace_token = _trace_id_var.set(trace_id)

        async def send_with_correlation(message):
            if message["type"] == "http.response.start" and correlation_id:
                response_headers = list(message.get("headers", []))
                response_headers.append((self.correlation_header.encode("latin-1"), correlation_id.encode("latin-1")))
                message = {**message, "headers": response_headers}
            await send(message)

        try:
            await self.app(scope, receive, send_with_correlation)
        finally:
            _correlation_id_var.reset(correlation_token)
            _trace_id_var.reset(trace_token)


def create_request_logger(request) -> structlog.stdlib.BoundLogger:
    """Create a logger bound with request context"""
    logger = get_logger().bind(
        method=request.method,
        path=request.url.path,
        remote_addr=request.client.host if request.client else None,
    )

    correlation_id = get_correlation_id()
    if correlation_id:
        logger = logger.bind(correlation_id=correlation_id)

    trace_id = get_trace_id()
    if trace_id:
        logger = logger.bind(trace_id=trace_id)

    return logger
