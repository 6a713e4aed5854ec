# This file shapes output data into the canonical success/fail envelope.
# It exists so every data kind (plain, resource, collection, paginator) renders the same top-level keys.
# Business codes map onto transport statuses here, and empty messages are localized by code.
# Field rules from config may rename or hide envelope keys after the envelope is built.

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from starlette.requests import Request

from api_response.api.localization import MessageCatalog
from api_response.api.pagination import Paginator
from api_response.api.resources import JsonResource, ResourceCollection, to_array
from api_response.api.response_config import ResponseConfig

Envelope = dict[str, Any]

SUCCESS_STATUS = 200
FAILURE_STATUS = 500
MIN_STATUS = 100
MAX_STATUS = 599


class Formatter:
    """Default envelope formatter."""

    def __init__(
        self,
        *,
        config: ResponseConfig,
        catalog: MessageCatalog | None = None,
        request: Request | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog or MessageCatalog(default_locale=config.locale)
        self.request = request

    def data(
        self,
        payload: Any,
        message: str,
        code: int,
        errors: Any = None,
        *,
        failed: bool = False,
    ) -> Envelope:
        """Build a success envelope, or a failure envelope when `failed` is set or `errors` are given."""

        failed = failed or errors is not None
        envelope: Envelope = {
            "status": self.format_status(code, failed=failed),
            "code": code,
            "message": self.format_message(code, message, failed=failed),
            "data": None if failed else payload,
        }
        if failed:
            envelope["errors"] = errors if errors is not None else {}
        return self.format_fields(envelope)

    def json_resource(
        self,
        resource: JsonResource,
        message: str = "",
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> Envelope:
        resolved = resource.resolve(self.request)
        return self.data({} if resolved is None else resolved, message, code)

    def resource_collection(
        self,
        collection: ResourceCollection,
        message: str = "",
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> Envelope:
        items = collection.to_dict(self.request)
        if collection.paginator is not None:
            payload: Any = {
                "data": items,
                "meta": {"pagination": collection.paginator.pagination_meta()},
            }
            if collection.additional:
                payload.update(collection.additional)
            return self.data(payload, message, code)
        if collection.additional:
            return self.data({"data": items, **collection.additional}, message, code)
        return self.data(items, message, code)

    def paginator(
        self,
        paginator: Paginator,
        message: str = "",
        code: int = 200,
        headers: Mapping[str, str] | None = None,
        options: int = 0,
    ) -> Envelope:
        payload = {
            "data": [to_array(item) for item in paginator.items],
            "meta": {"pagination": paginator.pagination_meta()},
        }
        return self.data(payload, message, code)

    def status_code(self, code: int, *, fallback: int = 200) -> int:
        """Map a business code onto a transport status; `200101` becomes 200.

        Codes that do not lead with a valid HTTP status (zero, negative, `9999`)
        resolve to `fallback`: 200 for success paths, 500 for failures.
        """

        if code <= 0:
            return fallback
        status = code if code < 1000 else int(str(code)[:3])
        if not MIN_STATUS <= status <= MAX_STATUS:
            return fallback
        return status

    def format_status(self, code: int, *, failed: bool = False) -> str:
        status = self.status_code(code, fallback=FAILURE_STATUS if failed else SUCCESS_STATUS)
        if status >= 500:
            return "error"
        if status >= 400:
            return "fail"
        return "success"

    def format_message(self, code: int, message: str, *, failed: bool = False) -> str:
        if message:
            return message
        localized = self.catalog.lookup(code, locale=self.config.locale)
        if localized:
            return localized
        try:
            fallback = FAILURE_STATUS if failed else SUCCESS_STATUS
            return HTTPStatus(self.status_code(code, fallback=fallback)).phrase
        except ValueError:
            return ""

    def format_fields(self, envelope: Envelope) -> Envelope:
        if not self.config.fields:
            return envelope
        formatted: Envelope = {}
        for key, value in envelope.items():
            rule = self.config.fields.get(key)
            if rule is None:
                formatted[key] = value
            elif rule.show:
                formatted[rule.alias or key] = value
        return formatted
