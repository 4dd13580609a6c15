"""
Telemetry service for structured logging.

Log records leave the process as one JSON object per line. Before they
are formatted, a filter shortens anything that looks like a full session
identifier, so a credential passed to a logger by mistake (in a message,
its arguments or extra_data) is never written out whole.
"""

import logging
import json
import re
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from errors.exceptions import redact_session_id

# Hex runs at least as long as the shortest identifier the store can mint (64 bytes)
_SESSION_ID_RE = re.compile(r"[0-9a-f]{128,}")


def _redact(text: str) -> str:
    return _SESSION_ID_RE.sub(lambda m: redact_session_id(m.group(0)), text)


class SessionIdRedactionFilter(logging.Filter):
    """Rewrites records in place so full session identifiers never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            record.extra_data = {
                key: _redact(value) if isinstance(value, str) else value
                for key, value in extra_data.items()
            }
        return True


class JSONFormatter(logging.Formatter):
    """
    Log formatter that outputs one JSON object per record.

    Each entry carries timestamp (UTC, ISO 8601), level, message, logger,
    source location, the service name when configured, the record's
    extra_data fields and any exception text.
    """

    def __init__(self, service_name: Optional[str] = None):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if self.service_name:
            log_data["service"] = self.service_name

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            log_data.update(extra_data)

        if record.exc_info:
            log_data["exception"] = _redact(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


class TelemetryService:
    """
    Installs JSON logging on the root logger and records metrics.

    Attributes:
        settings: Settings providing log_level and service_name
        handler: The stdout handler this service installed
    """

    def __init__(self, settings: Optional[Any] = None):
        self.settings = settings
        self._logger = logging.getLogger("telemetry")
        self.handler = self._install_handler()

    def _install_handler(self) -> logging.Handler:
        level_name = getattr(self.settings, "log_level", "INFO")
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.INFO

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.addFilter(SessionIdRedactionFilter())
        handler.setFormatter(JSONFormatter(getattr(self.settings, "service_name", None)))

        # Replace whatever was configured before so lines are not duplicated
        root_logger = logging.getLogger()
        for existing in root_logger.handlers[:]:
            root_logger.removeHandler(existing)
        root_logger.addHandler(handler)
        root_logger.setLevel(level)

        self._logger.info("Telemetry service initialized", extra={
            "extra_data": {"log_level": logging.getLevelName(level)}
        })
        return handler

    def record_metric(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Record a metric as a DEBUG log line.

        Args:
            name: Name of the metric
            value: Metric value
            tags: Optional tags for metric dimensions
        """
        metric_data: Dict[str, Any] = {"metric_name": name, "metric_value": value}
        if tags:
            metric_data["tags"] = tags

        self._logger.debug(f"Metric: {name}={value}", extra={"extra_data": metric_data})


_telemetry_service: Optional[TelemetryService] = None


def get_telemetry_service() -> Optional[TelemetryService]:
    """The service installed by initialize_telemetry(), or None."""
    return _telemetry_service


def initialize_telemetry(settings: Optional[Any] = None) -> TelemetryService:
    """
    Install JSON logging process-wide and remember the service.

    Args:
        settings: Settings for log level and service name

    Returns:
        The initialized telemetry service
    """
    global _telemetry_service
    _telemetry_service = TelemetryService(settings)
    return _telemetry_service
