"""
Core pytest configuration for the test suite.

Provides:
  - sys.path patching so `import soap_client` works from a plain checkout
  - session-wide logging installed through the real dictConfig builder
  - a `test_settings` fixture with deterministic values (no .env lookups)
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path before importing the package.
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from soap_client.config.settings import Settings, get_settings  # noqa: E402
from soap_client.core.logging.builder import setup_logging  # noqa: E402


def make_test_settings(**overrides) -> Settings:
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "text",
        "LOG_TO_STDOUT": True,
        "API_LOG_PAYLOADS": False,
        "API_PAYLOAD_MAX_CHARS": 2000,
    }
    values.update(overrides)
    # _env_file=None: never pick up a developer's local .env during tests
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging once for the whole session.

    pytest adds its caplog handler to the root logger around every test phase, after this
    fixture has run, so caplog.records keeps working with the dictConfig handlers in place.
    """
    setup_logging(make_test_settings())
    yield


@pytest.fixture()
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture()
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings_factory():
    return make_test_settings
