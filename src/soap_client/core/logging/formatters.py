# src/soap_client/core/logging/formatters.py

"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line for log collectors. Carries service/env/version,
    the request id, and every `extra={...}` field (ApiError.to_payload() lands here).

  - ColorFormatter: compact ANSI-colored lines for developer terminals. Shows the API error
    code inline when the record carries one.

The builder (dictConfig) picks one based on LOG_FORMAT.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from soap_client.utils.logging import get_project_name, get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord has; anything else on the record came from `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "request_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name ("development" | "production" | ...)
      - service: logical service name (defaults to the project name)
      - datefmt: passed through to logging.Formatter.formatTime

    Non-serializable extras are converted with str(); format() never raises on them.
    """

    def __init__(self, *, env: str | None = None, service: str | None = None, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service or get_project_name()

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "funcName": record.funcName,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Line shape:
        TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | [CODE] MESSAGE
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",   # bold cyan on white
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        code = getattr(record, "error_code", None)
        code_part = f"[{code}] " if code else ""

        base = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{code_part}{record.getMessage()}"
        )

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
