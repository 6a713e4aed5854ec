# This file defines the JSON response object returned by the dispatcher.
# It exists so the envelope, the pre-transform domain objects, and encoding flags travel together.
# The terminable-response exception carries a built response past the remaining handler code.
# The registered error handler returns that carried response verbatim.

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import IntFlag
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

NO_BODY_STATUS_CODES = frozenset({204, 304})


class JsonOptions(IntFlag):
    NONE = 0
    PRETTY_PRINT = 1
    ASCII_ONLY = 2
    SORT_KEYS = 4


class ResponseResult(JSONResponse):
    """JSON response that keeps the envelope dict and the original domain data."""

    def __init__(
        self,
        envelope: Mapping[str, Any],
        *,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
        original: Any = None,
    ) -> None:
        self.envelope = dict(envelope)
        self.options = JsonOptions(options)
        self.original = original
        super().__init__(content=self.envelope, status_code=status_code, headers=dict(headers or {}))

    def render(self, content: Any) -> bytes:
        if self.status_code in NO_BODY_STATUS_CODES:
            return b""
        pretty = JsonOptions.PRETTY_PRINT in self.options
        return json.dumps(
            jsonable_encoder(content),
            ensure_ascii=JsonOptions.ASCII_ONLY in self.options,
            allow_nan=False,
            indent=4 if pretty else None,
            separators=None if pretty else (",", ":"),
            sort_keys=JsonOptions.SORT_KEYS in self.options,
        ).encode("utf-8")

    def header(self, name: str, value: str) -> ResponseResult:
        self.headers[name] = value
        return self


class HttpResponseException(Exception):
    """Abort the current handler and render the carried response."""

    def __init__(self, response: ResponseResult) -> None:
        self.response = response
        super().__init__(f"HTTP {response.status_code} response: {response.envelope.get('message', '')}")
