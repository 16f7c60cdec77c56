"""
Structured logging for Ledgerbook.

Every module logs through ``logging.getLogger(__name__)``; those loggers sit
under the ``ledgerbook`` package logger configured here. Set ``LOG_LEVEL`` to
change verbosity and ``USE_JSON_LOGS=true`` for one JSON object per line.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import os

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("ledgerbook")


class JSONFormatter(logging.Formatter):
    """Render a record, plus any ``extra_fields`` attached to it, as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(getattr(record, "extra_fields", {}))
        return json.dumps(payload, default=str)


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> logging.Logger:
    """(Re)build the package logger's stdout handler from arguments or environment."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if json_logs is None:
        json_logs = os.getenv("USE_JSON_LOGS", "false").lower() == "true"

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    # Keep ledgerbook output out of the root logger's handlers
    logger.propagate = False
    return logger


configure_logging()


def _emit(level: int, message: str, extra_fields: Dict[str, Any]) -> None:
    logger.log(level, message, extra={"extra_fields": extra_fields})


def log_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client_id: Optional[str] = None,
    **kwargs
):
    """Log HTTP request."""
    extra_fields = {
        "type": "http_request",
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
    }
    if client_id:
        extra_fields["client_id"] = client_id
    extra_fields.update(kwargs)
    _emit(logging.INFO, f"{method} {path} {status_code}", extra_fields)


def log_reconciliation_run(
    session_id: str,
    operation: str,
    matched: int,
    discrepancies: int,
    is_balanced: Optional[bool] = None,
    **kwargs
):
    """Log one reconciliation operation over a session."""
    extra_fields = {
        "type": "reconciliation_run",
        "session_id": session_id,
        "operation": operation,
        "matched": matched,
        "discrepancies": discrepancies,
    }
    if is_balanced is not None:
        extra_fields["is_balanced"] = is_balanced
    extra_fields.update(kwargs)
    _emit(
        logging.INFO,
        f"Reconciliation {operation} on {session_id}: {matched} matched, {discrepancies} discrepancies",
        extra_fields,
    )


def log_error(
    error_type: str,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    exception: Optional[Exception] = None
):
    """Log error with context."""
    extra_fields = {
        "type": "error",
        "error_type": error_type,
    }
    if context:
        extra_fields.update(context)
    logger.error(message, exc_info=exception, extra={"extra_fields": extra_fields})
