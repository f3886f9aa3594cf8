# src/soap_client/core/logging/builder.py
"""
Logging builder: build and apply a dictConfig logging configuration from Settings.

Handler wiring:

| LOG_TO_STDOUT | LOG_DIR set | Active handlers                 |
| ------------- | ----------- | ------------------------------- |
| true          | any         | console + error_console         |
| false         | no          | console + error_console         |
| false         | yes         | console + file + error_file     |

Library modules only ever call `logging.getLogger(__name__)`; applications (or the test
suite) call `setup_logging(settings)` once at startup.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from soap_client.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type only (avoid calling get_settings() here to prevent import-time side effects)
from soap_client.config.settings import Settings


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping.

      - formatters: "standard" (ColorFormatter for LOG_FORMAT=text) and "json"
      - filters: "request_id", "redact"
      - handlers: see module docstring
      - loggers: root and "soap_client"
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # Propagates to root; the level lets LOG_LEVEL=DEBUG expose classifier decisions
            # without turning on DEBUG for every third-party library.
            "soap_client": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

      1. Create LOG_DIR when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Add a RequestIdFilter to the root logger as a safety net for handlers added later.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(RequestIdFilter())
