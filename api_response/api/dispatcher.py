# This file turns handler output into a response with a canonical envelope and status code.
# It exists so handlers return data and a message while one place picks the formatting strategy.
# Dispatch checks collections, then single resources, then paginators, then arrayables, then plain data.
# Failures without structured errors abort the handler by raising the built response.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NoReturn

from starlette.requests import Request

from api_response.api.formatter import FAILURE_STATUS, SUCCESS_STATUS, Envelope, Formatter
from api_response.api.pagination import Paginator
from api_response.api.resources import JsonResource, ResourceCollection, is_arrayable, to_array, wrap
from api_response.api.response_config import ResponseConfig
from api_response.api.responses import HttpResponseException, ResponseResult

LOGGER = logging.getLogger("api_response")


class ResponseDispatcher:
    """Request-scoped entry point for success and failure responses."""

    def __init__(
        self,
        *,
        formatter: Formatter,
        config: ResponseConfig,
        request: Request | None = None,
    ) -> None:
        self.formatter = formatter
        self.config = config
        self.request = request

    def success(
        self,
        data: Any = None,
        message: str = "",
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> ResponseResult:
        if isinstance(data, ResourceCollection):
            response = self._respond(
                self.formatter.resource_collection(data, message, code, headers, options),
                code,
                headers,
                options,
            )
            response.original = data.originals()
            data.with_response(self.request, response)
            return response

        if isinstance(data, JsonResource):
            response = self._respond(
                self.formatter.json_resource(data, message, code, headers, options),
                code,
                headers,
                options,
            )
            response.original = data.resource
            data.with_response(self.request, response)
            return response

        if isinstance(data, Paginator):
            return self._respond(
                self.formatter.paginator(data, message, code, headers, options),
                code,
                headers,
                options,
            )

        if is_arrayable(data):
            data = to_array(data)

        return self._respond(self.formatter.data(wrap(data), message, code), code, headers, options)

    def fail(
        self,
        message: str = "",
        code: int = 500,
        errors: Any = None,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> ResponseResult:
        """Build a failure response; raise it when the caller supplied no structured errors."""

        if errors is None:
            self._abort(message, code, headers, options)
        return self._failure(message, code, errors, headers, options)

    def created(self, data: Any = None, message: str = "", location: str = "") -> ResponseResult:
        response = self.success(data, message, 201)
        if location:
            response.header("Location", location)
        return response

    def accepted(self, data: Any = None, message: str = "", location: str = "") -> ResponseResult:
        response = self.success(data, message, 202)
        if location:
            response.header("Location", location)
        return response

    def no_content(self, message: str = "") -> ResponseResult:
        return self.success([], message, 204)

    def ok(
        self,
        message: str = "",
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> ResponseResult:
        return self.success([], message, code, headers, options)

    def localize(
        self,
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> ResponseResult:
        return self.ok("", code, headers, options)

    def error_bad_request(self, message: str = "") -> NoReturn:
        self._abort(message, 400)

    def error_unauthorized(self, message: str = "") -> NoReturn:
        self._abort(message, 401)

    def error_forbidden(self, message: str = "") -> NoReturn:
        self._abort(message, 403)

    def error_not_found(self, message: str = "") -> NoReturn:
        self._abort(message, 404)

    def error_method_not_allowed(self, message: str = "") -> NoReturn:
        self._abort(message, 405)

    def error_internal(self, message: str = "") -> NoReturn:
        self._abort(message, 500)

    def _failure(
        self,
        message: str,
        code: int,
        errors: Any,
        headers: Mapping[str, str] | None,
        options: int,
    ) -> ResponseResult:
        return self._respond(
            self.formatter.data(None, message, code, errors, failed=True),
            self.config.error_code or code,
            headers,
            options,
            fallback=FAILURE_STATUS,
        )

    def _abort(
        self,
        message: str,
        code: int,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> NoReturn:
        response = self._failure(message, code, None, headers, options)
        LOGGER.info("aborting request code=%s status=%s message=%s", code, response.status_code, message)
        raise HttpResponseException(response)

    def _respond(
        self,
        envelope: Envelope,
        status: int,
        headers: Mapping[str, str] | None,
        options: int,
        *,
        fallback: int = SUCCESS_STATUS,
    ) -> ResponseResult:
        return ResponseResult(
            envelope,
            status_code=self.formatter.status_code(status, fallback=fallback),
            headers=headers,
            options=options,
        )
