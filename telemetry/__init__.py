"""
Telemetry module for structured logging.

This module provides:
- JSONFormatter for structured JSON log output
- SessionIdRedactionFilter, which shortens session identifiers in log records
- TelemetryService for root logger setup and metric recording
"""

from telemetry.service import (
    JSONFormatter,
    SessionIdRedactionFilter,
    TelemetryService,
    get_telemetry_service,
    initialize_telemetry,
)

__all__ = [
    "JSONFormatter",
    "SessionIdRedactionFilter",
    "TelemetryService",
    "get_telemetry_service",
    "initialize_telemetry",
]
