"""
Shared service framework for the IAM proxy.

This library provides common functionality for:
- Logging with correlation ids
- Telemetry (OpenTelemetry tracing and metrics)
"""

__version__ = "1.0.0"
