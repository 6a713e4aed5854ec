# This file provides dependency factories for FastAPI routes and error handlers.
# It exists so the config, message catalog, and formatter class are resolved once and shared through dependency injection.
# Dispatchers are request-scoped so resource hooks receive the current request.
# Apps built by `create_app` carry their config on `app.state`, which takes precedence over the environment.

from __future__ import annotations

import importlib
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from api_response.api.dispatcher import ResponseDispatcher
from api_response.api.formatter import Formatter
from api_response.api.localization import MessageCatalog, load_message_catalog
from api_response.api.response_config import ResponseConfig, get_response_config


@lru_cache(maxsize=8)
def _cached_catalog(path: str | None, default_locale: str) -> MessageCatalog:
    return load_message_catalog(path, default_locale=default_locale)


@lru_cache(maxsize=8)
def resolve_formatter_class(path: str | None) -> type[Formatter]:
    """Import a formatter class from `package.module:ClassName`; `None` means the default."""

    if path is None:
        return Formatter
    module_name, _, attribute = path.replace(":", ".").rpartition(".")
    try:
        formatter_class = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise ValueError(f"Cannot import formatter {path!r}: {exc}") from exc
    if not isinstance(formatter_class, type) or not issubclass(formatter_class, Formatter):
        raise ValueError(f"Formatter {path!r} must be a subclass of Formatter")
    return formatter_class


def get_message_catalog(config: ResponseConfig) -> MessageCatalog:
    return _cached_catalog(config.locale_path, config.locale)


def get_config(request: Request) -> ResponseConfig:
    config = getattr(request.app.state, "response_config", None)
    return config if isinstance(config, ResponseConfig) else get_response_config()


def build_dispatcher(request: Request, config: ResponseConfig | None = None) -> ResponseDispatcher:
    """Build a dispatcher outside dependency injection, e.g. inside exception handlers."""

    resolved_config = config or get_config(request)
    formatter_class = resolve_formatter_class(resolved_config.formatter)
    formatter = formatter_class(
        config=resolved_config,
        catalog=get_message_catalog(resolved_config),
        request=request,
    )
    return ResponseDispatcher(formatter=formatter, config=resolved_config, request=request)


def get_dispatcher(
    request: Request,
    config: Annotated[ResponseConfig, Depends(get_config)],
) -> ResponseDispatcher:
    return build_dispatcher(request, config)


DispatcherDep = Annotated[ResponseDispatcher, Depends(get_dispatcher)]
ConfigDep = Annotated[ResponseConfig, Depends(get_config)]
