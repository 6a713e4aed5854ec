# This file defines transformable resources that sit between domain objects and envelopes.
# It exists so handlers can hand a domain object to the dispatcher and let the resource decide its JSON shape.
# Collections wrap each item in a resource and may carry a paginator for list endpoints.
# The `with_response` hook lets a resource adjust the built response, e.g. add headers.

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel
from starlette.requests import Request

from api_response.api.pagination import Paginator

if TYPE_CHECKING:
    from api_response.api.responses import ResponseResult


@runtime_checkable
class Arrayable(Protocol):
    def to_dict(self) -> Any: ...


def is_arrayable(value: Any) -> bool:
    return isinstance(value, (BaseModel, Arrayable))


def to_array(value: Any) -> Any:
    """Convert an arrayable object into plain dicts/lists."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Arrayable):
        return value.to_dict()
    return value


def wrap(value: Any) -> Any:
    """Normalize plain output so the envelope always carries a mapping or a list."""

    if value is None:
        return []
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


class JsonResource:
    """Wrap one domain object and describe how it is rendered."""

    def __init__(self, resource: Any, *, additional: Mapping[str, Any] | None = None) -> None:
        self.resource = resource
        self.additional: dict[str, Any] = dict(additional or {})

    def to_dict(self, request: Request | None = None) -> Any:
        resource = self.resource
        if resource is None:
            return {}
        if isinstance(resource, Mapping):
            return dict(resource)
        if is_arrayable(resource):
            return to_array(resource)
        if dataclasses.is_dataclass(resource) and not isinstance(resource, type):
            return dataclasses.asdict(resource)
        if hasattr(resource, "__dict__"):
            return {key: value for key, value in vars(resource).items() if not key.startswith("_")}
        return resource

    def with_additional(self, data: Mapping[str, Any]) -> JsonResource:
        self.additional.update(data)
        return self

    def resolve(self, request: Request | None = None) -> Any:
        data = self.to_dict(request)
        if self.additional and isinstance(data, Mapping):
            return {**data, **self.additional}
        return data

    def with_response(self, request: Request | None, response: ResponseResult) -> None:
        """Customize the outgoing response; no-op by default."""


class ResourceCollection(JsonResource):
    """Wrap a sequence or a paginator, rendering each item through `collects`.

    Subclasses that set `collects = None` keep items as given; mapping items
    may then carry their domain object under a `"resource"` key.
    """

    collects: type[JsonResource] | None = JsonResource

    def __init__(
        self,
        resource: Iterable[Any] | Paginator,
        *,
        collects: type[JsonResource] | None = None,
        additional: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(resource, additional=additional)
        if collects is not None:
            self.collects = collects
        self.paginator = resource if isinstance(resource, Paginator) else None
        items = resource.items if isinstance(resource, Paginator) else resource
        self.collection: list[Any] = [
            item if isinstance(item, JsonResource) or self.collects is None else self.collects(item)
            for item in items
        ]

    def to_dict(self, request: Request | None = None) -> list[Any]:
        return [
            item.resolve(request) if isinstance(item, JsonResource) else to_array(item)
            for item in self.collection
        ]

    def originals(self) -> list[Any]:
        """Underlying domain objects, unwrapping any resource wrappers."""

        unwrapped: list[Any] = []
        for item in self.collection:
            if isinstance(item, JsonResource):
                unwrapped.append(item.resource)
            elif isinstance(item, Mapping) and "resource" in item:
                unwrapped.append(item["resource"])
            else:
                unwrapped.append(item)
        return unwrapped
