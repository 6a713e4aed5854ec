"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from api_response.api.response_config import get_response_config  # noqa: E402
from api_response.common.settings import get_settings  # noqa: E402

RESPONSE_ENV_VARS = (
    "RESPONSE_CONFIG_PATH",
    "RESPONSE_ERROR_CODE",
    "RESPONSE_LOCALE",
    "RESPONSE_LOCALE_PATH",
    "RESPONSE_DEBUG",
    "RESPONSE_DEFAULT_PAGE_SIZE",
    "RESPONSE_MAX_PAGE_SIZE",
    "RESPONSE_FORMATTER",
)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin process settings and clear response overrides during tests."""

    defaults = {
        "PROJECT_NAME": "test-project",
        "ENV": "test",
        "LOG_LEVEL": "INFO",
    }

    for key, value in defaults.items():
        monkeypatch.setenv(key, value)
    for key in RESPONSE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)

    get_settings.cache_clear()
    get_response_config.cache_clear()
