"""Structured logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "uvicorn.access", "asyncio")


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    silence_noisy_loggers: bool = True,
) -> None:
    """Configure the root logger once for the process."""
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    if silence_noisy_loggers:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """Structured logger for orchestrator events."""

    def __init__(self, name: str = __name__):
        """Initialize structured logger."""
        self.logger = logging.getLogger(name)

    def log_step(
        self,
        step: str,
        state: dict[str, Any],
        duration_ms: float | None = None,
    ) -> None:
        """Log an orchestrator step."""
        log_data: dict[str, Any] = {
            "step": step,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "state": state,
        }
        if duration_ms is not None:
            log_data["duration_ms"] = round(duration_ms, 2)

        self.logger.info(json.dumps(log_data, ensure_ascii=False, default=str))

    def log_error(
        self,
        step: str,
        error: Exception,
        context: dict[str, Any] | None = None,
        soft: bool = False,
    ) -> None:
        """Log an error with context. Soft errors go out as warnings without a traceback."""
        log_data: dict[str, Any] = {
            "step": step,
            "error": str(error),
            "error_type": type(error).__name__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if context:
            log_data["context"] = context

        if soft:
            self.logger.warning(json.dumps(log_data, ensure_ascii=False, default=str))
        else:
            self.logger.error(json.dumps(log_data, ensure_ascii=False, default=str), exc_info=True)
