# This file defines runtime settings for response formatting in one place.
# It exists so the failure status override, locale, and envelope field rules can change without code edits.
# The config loader reads environment variables and an optional YAML file with safe defaults.
# The dispatcher receives this object by injection instead of reading global state.

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENVELOPE_FIELDS = frozenset({"status", "code", "message", "data", "errors"})


class FieldRule(BaseModel):
    """Rename or hide one top-level envelope key."""

    model_config = ConfigDict(extra="forbid")

    alias: str | None = None
    show: bool = True


class ExceptionRule(BaseModel):
    """Business code and message used when an exception type reaches the error handler."""

    model_config = ConfigDict(extra="forbid")

    code: int = 500
    message: str = ""


class ResponseConfig(BaseModel):
    """Typed response formatting configuration."""

    model_config = ConfigDict(extra="ignore")

    error_code: int | None = None
    locale: str = "en"
    locale_path: str | None = None
    debug: bool = False
    default_page_size: int = 15
    max_page_size: int = 100
    validation_error_code: int = 422
    formatter: str | None = None
    fields: dict[str, FieldRule] = Field(default_factory=dict)
    exceptions: dict[str, ExceptionRule] = Field(default_factory=dict)

    @field_validator("error_code", "validation_error_code")
    @classmethod
    def validate_status_range(cls, value: int | None) -> int | None:
        if value is not None and not 100 <= value <= 599:
            raise ValueError(f"Status override must be between 100 and 599, got {value}")
        return value

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("formatter")
    @classmethod
    def validate_formatter_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        module_name, _, attribute = value.replace(":", ".").rpartition(".")
        if not module_name or not attribute:
            raise ValueError(f"formatter must look like 'package.module:ClassName', got {value!r}")
        return value

    @field_validator("fields")
    @classmethod
    def validate_field_names(cls, value: dict[str, FieldRule]) -> dict[str, FieldRule]:
        unknown = set(value) - ENVELOPE_FIELDS
        if unknown:
            raise ValueError(f"Unknown envelope fields: {sorted(unknown)}")
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Read-only lookup by dotted key, e.g. `response.error_code`."""

        name = key.removeprefix("response.")
        if name not in type(self).model_fields:
            return default
        value = getattr(self, name)
        return default if value is None else value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _load_yaml(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Response config file {path} must be a YAML mapping")
    return dict(loaded)


def load_response_config(*, load_env: bool = True) -> ResponseConfig:
    """Load response configuration from `.env`, process environment, and optional YAML file."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {}
    config_path = os.getenv("RESPONSE_CONFIG_PATH")
    if config_path:
        config_values.update(_load_yaml(config_path))

    env_values: dict[str, object | None] = {
        "error_code": _env_int("RESPONSE_ERROR_CODE", None),
        "locale": os.getenv("RESPONSE_LOCALE") or None,
        "locale_path": os.getenv("RESPONSE_LOCALE_PATH") or None,
        "formatter": os.getenv("RESPONSE_FORMATTER") or None,
        "debug": _env_bool("RESPONSE_DEBUG", bool(config_values.get("debug", False))),
        "default_page_size": _env_int("RESPONSE_DEFAULT_PAGE_SIZE", None),
        "max_page_size": _env_int("RESPONSE_MAX_PAGE_SIZE", None),
    }
    config_values.update({key: value for key, value in env_values.items() if value is not None})

    return ResponseConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_response_config() -> ResponseConfig:
    """Cached accessor for response config."""

    return load_response_config()
