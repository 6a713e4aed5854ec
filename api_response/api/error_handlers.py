# This file renders exceptions as fail envelopes.
# It exists so every error leaving a handler has the same shape as responses built by the dispatcher.
# The handlers translate terminal responses, validation, HTTP, and unexpected failures into safe client messages.
# Debug mode adds the exception type and message to `errors`; it never adds a traceback.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from api_response.api.dependencies import build_dispatcher, get_config
from api_response.api.responses import HttpResponseException

LOGGER = logging.getLogger("api_response")


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(HttpResponseException)
    async def terminal_response_handler(request: Request, exc: HttpResponseException) -> Response:
        return exc.response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        config = get_config(request)
        return build_dispatcher(request, config).fail(
            "Validation failed.",
            config.validation_error_code,
            errors=list(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return build_dispatcher(request).fail(
            str(exc.detail) if exc.detail else "",
            exc.status_code,
            errors={},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        config = get_config(request)
        rule = config.exceptions.get(type(exc).__name__)
        if rule is None:
            LOGGER.exception("Unhandled exception on %s %s", request.method, request.url.path)
            code, message = 500, ""
        else:
            code, message = rule.code, rule.message

        errors: dict[str, Any] = {}
        if config.debug:
            errors = {"exception": type(exc).__name__, "detail": str(exc)}
        return build_dispatcher(request, config).fail(message, code, errors=errors)
