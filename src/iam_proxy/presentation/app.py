# Assumptions:
# - Credentials blob and signing secret are provided via environment (IAM_USERS, IAM_SECRET)
# - Telemetry exporters are configured only when metrics are enabled
# - Served with an ASGI server using the factory: uvicorn iam_proxy.presentation.app:create_app --factory

import structlog
from fastapi import FastAPI

from framework.logging.setup import CorrelationMiddleware, setup_logging
from framework.telemetry.otel import setup_telemetry

from iam_proxy import __version__
from iam_proxy.application.service import AuthServicer
from iam_proxy.client.paths import PATH_PREFIX
from iam_proxy.infrastructure.config.settings import Settings, get_settings
from iam_proxy.infrastructure.factories.auth_service_factory import build_auth_service
from iam_proxy.presentation.api.health_routes import router as health_router
from iam_proxy.presentation.api.iam_routes import router as iam_router
from iam_proxy.presentation.middleware.errors import install_error_handlers


def create_app(settings: Settings | None = None, auth_service: AuthServicer | None = None) -> FastAPI:
    """Create and configure FastAPI application"""

    settings = settings or get_settings()

    # Setup logging
    setup_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        format_type="json" if not settings.debug else "console",
        version=settings.service_version,
    )

    logger = structlog.get_logger(__name__)
    logger.info("Starting iam proxy", env=settings.env, port=settings.port)

    # Refuses to start when the credentials cannot be decoded
    if auth_service is None:
        auth_service = build_auth_service(settings)

    # Create FastAPI app
    app = FastAPI(
        title="IAM Proxy",
        description="Exchanges client credentials for access and identity tokens",
        version=__version__,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.auth_service = auth_service

    # Setup telemetry
    if settings.metrics_enabled:
        setup_telemetry(
            service_name=settings.service_name,
            service_version=settings.service_version,
            app=app,
            endpoint=settings.otel_exporter_otlp_endpoint,
        )

    # Add correlation middleware
    app.add_middleware(CorrelationMiddleware)

    install_error_handlers(app)

    # Include routers
    app.include_router(health_router, prefix=PATH_PREFIX, tags=["health"])
    app.include_router(iam_router, prefix=PATH_PREFIX, tags=["iam"])

    return app
