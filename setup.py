from setuptools import find_packages, setup

setup(
    name="iam-proxy",
    version="1.0.0",
    description="Credential-exchange gateway issuing and validating HS512 bearer tokens",
    author="IAM Proxy Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=[
        # HTTP server dependencies
        "fastapi>=0.110.0",
        # HTTP client dependencies
        "httpx>=0.25.0",
        # Logging dependencies
        "structlog>=23.2.0",
        "python-json-logger>=2.0.7",
        # Telemetry dependencies
        "opentelemetry-api>=1.28.0",
        "opentelemetry-sdk>=1.28.0",
        "opentelemetry-exporter-otlp-proto-grpc>=1.28.0",
        "opentelemetry-instrumentation-fastapi>=0.49b0",
        "opentelemetry-instrumentation-httpx>=0.49b0",
        # Auth dependencies
        "pyjwt>=2.8.0",
        # Config dependencies
        "pydantic>=2.10.0",
        "pydantic-settings>=2.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
