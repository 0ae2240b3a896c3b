"""
Shared Logger

Logging setup for the scheduling service. Every record is stamped with the
tenant of the current request (``-`` outside a request) so clinic traffic
can be told apart in a shared log stream.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from clinic_scheduler.core.tenancy.context import get_tenant_context

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | tenant=%(tenant_id)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class TenantContextFilter(logging.Filter):
    """Adds ``tenant_id`` from the request context to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_tenant_context()
        record.tenant_id = str(context.tenant_id) if context else "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "tenant_id": getattr(record, "tenant_id", "-"),
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human readable lines; context fields are appended as key=value."""

    def __init__(self, colored: bool = False):
        super().__init__(TEXT_FORMAT, datefmt=DATE_FORMAT)
        self.colored = colored

    def formatMessage(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if self.colored:
            record.levelname = f"{LEVEL_COLORS.get(levelname, RESET)}{levelname}{RESET}"
        try:
            line = super().formatMessage(record)
        finally:
            record.levelname = levelname
        fields = getattr(record, "fields", None)
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


class ContextLogger:
    """
    Logger carrying fixed key/value fields.

    Example:
        ```python
        log = get_use_case_logger("create_appointment").with_context(doctor_id=str(doctor_id))
        log.warning("Appointment rejected", code="TIME_CONFLICT")
        ```
    """

    def __init__(self, name: str, fields: dict[str, Any] | None = None):
        self._logger = logging.getLogger(name)
        self._fields = fields or {}

    def with_context(self, **fields) -> "ContextLogger":
        return ContextLogger(self._logger.name, {**self._fields, **fields})

    def _log(self, level: int, message: str, **fields) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra={"fields": {**self._fields, **fields}})

    def debug(self, message: str, **fields) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields) -> None:
        self._log(logging.ERROR, message, **fields)


def configure_logging(level: str = "INFO", format_type: str = "colored") -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name
        format_type: 'colored', 'json' or 'plain'
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TenantContextFilter())
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(colored=format_type == "colored"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    # SQL echo is controlled by DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_use_case_logger(use_case_name: str) -> ContextLogger:
    return ContextLogger(f"use_case.{use_case_name}", {"use_case": use_case_name})


def get_repository_logger(repo_name: str) -> ContextLogger:
    return ContextLogger(f"repository.{repo_name}", {"repository": repo_name})
