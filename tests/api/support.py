# This file provides shared helpers for API and dispatcher tests.
# It exists so tests build configs, dispatchers, and a demo app the same way.
# The demo app routes cover every dispatch path plus the error handlers.
# Centralized test wiring keeps the test modules small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from api_response.api.app import create_app
from api_response.api.dependencies import DispatcherDep, resolve_formatter_class
from api_response.api.dispatcher import ResponseDispatcher
from api_response.api.formatter import Envelope, Formatter
from api_response.api.localization import MessageCatalog
from api_response.api.pagination import Paginator
from api_response.api.resources import JsonResource, ResourceCollection
from api_response.api.response_config import ResponseConfig
from api_response.api.responses import ResponseResult


@dataclass
class Widget:
    id: int
    name: str
    secret: str = "hidden"


WIDGETS = [Widget(id=index, name=f"widget-{index}") for index in range(1, 6)]


class WidgetResource(JsonResource):
    def to_dict(self, request: Request | None = None) -> dict[str, Any]:
        return {"id": self.resource.id, "name": self.resource.name}

    def with_response(self, request: Request | None, response: ResponseResult) -> None:
        response.header("x-widget-id", str(self.resource.id))


class WidgetCollection(ResourceCollection):
    collects = WidgetResource

    def with_response(self, request: Request | None, response: ResponseResult) -> None:
        response.header("x-widget-count", str(len(self.collection)))


class TaggedFormatter(Formatter):
    """Formatter that stamps every envelope, used to check formatter selection."""

    def data(self, payload: Any, message: str, code: int, errors: Any = None, *, failed: bool = False) -> Envelope:
        envelope = super().data(payload, message, code, errors, failed=failed)
        envelope["format"] = "tagged"
        return envelope


class NotAFormatter:
    pass


def build_test_config(**overrides: Any) -> ResponseConfig:
    """Create deterministic response config for tests."""

    values: dict[str, Any] = {
        "error_code": None,
        "locale": "en",
        "debug": False,
        "default_page_size": 2,
        "max_page_size": 5,
    }
    values.update(overrides)
    return ResponseConfig.model_validate(values)


def make_dispatcher(
    *,
    config: ResponseConfig | None = None,
    catalog: MessageCatalog | None = None,
    request: Request | None = None,
) -> ResponseDispatcher:
    resolved_config = config or build_test_config()
    formatter_class = resolve_formatter_class(resolved_config.formatter)
    formatter = formatter_class(config=resolved_config, catalog=catalog, request=request)
    return ResponseDispatcher(formatter=formatter, config=resolved_config, request=request)


def build_demo_app(config: ResponseConfig | None = None) -> FastAPI:
    """Application factory output plus routes that exercise each response path."""

    app = create_app(config or build_test_config())

    @app.get("/widgets")
    def list_widgets(dispatcher: DispatcherDep) -> ResponseResult:
        return dispatcher.success(WidgetCollection(WIDGETS), "Widgets listed.")

    @app.get("/widgets/paged")
    def paged_widgets(
        request: Request, dispatcher: DispatcherDep, page: int = 1, page_size: int | None = None
    ) -> ResponseResult:
        try:
            paginator = Paginator.from_sequence(
                WIDGETS,
                page=page,
                page_size=page_size,
                default_page_size=dispatcher.config.default_page_size,
                max_page_size=dispatcher.config.max_page_size,
                path=request.url.path,
            )
        except ValueError as exc:
            dispatcher.error_bad_request(str(exc))
        return dispatcher.success(WidgetCollection(paginator))

    @app.get("/widgets/{widget_id}")
    def show_widget(widget_id: int, dispatcher: DispatcherDep) -> ResponseResult:
        for widget in WIDGETS:
            if widget.id == widget_id:
                return dispatcher.success(WidgetResource(widget))
        dispatcher.error_not_found("Widget not found.")

    @app.post("/widgets")
    def create_widget(dispatcher: DispatcherDep) -> ResponseResult:
        widget = Widget(id=99, name="new")
        return dispatcher.created(WidgetResource(widget), "Widget created.", "/widgets/99")

    @app.get("/forbidden")
    def forbidden(dispatcher: DispatcherDep) -> ResponseResult:
        dispatcher.error_forbidden("Not yours.")
        return dispatcher.ok("unreachable")

    @app.get("/structured")
    def structured(dispatcher: DispatcherDep) -> ResponseResult:
        return dispatcher.fail("Bad input.", 400, errors={"name": ["required"]})

    @app.get("/validated")
    def validated(limit: int, dispatcher: DispatcherDep) -> ResponseResult:
        return dispatcher.success({"limit": limit})

    @app.get("/teapot")
    def teapot() -> None:
        raise HTTPException(status_code=418, detail="Short and stout.", headers={"x-kettle": "on"})

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("kaboom")

    @app.get("/lookup")
    def lookup() -> None:
        raise LookupError("missing key")

    return app


@contextmanager
def api_test_client(
    *,
    config: ResponseConfig | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for the demo app."""

    app = build_demo_app(config)
    with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
        yield client
