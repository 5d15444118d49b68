# Assumptions:
# - Configuration management using environment variables
# - Pydantic Settings for validation
# - Default values for development environment

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Service
    service_name: str = "iam-proxy"
    service_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8080

    # IAM credentials: base64 encoded JSON of client_id -> {client_secret, app_name}
    iam_users: SecretStr = SecretStr("")
    iam_secret: SecretStr = SecretStr("")

    # Tokens
    jwt_issuer: str = "iam-proxy"
    jwt_algorithm: str = "HS512"
    token_expiration_seconds: int = 3600

    # OpenTelemetry
    metrics_enabled: bool = False
    otel_exporter_otlp_endpoint: str | None = None

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get application settings singleton"""
    return Settings()
