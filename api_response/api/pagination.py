# This file handles pagination for list responses.
# It exists so every handler uses the same deterministic rules for page size and page links.
# The helpers validate user input and produce stable offset/limit behavior.
# Paginator objects carry the page metadata the formatter renders under `meta.pagination`.

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import URL


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def normalize_pagination(
    *,
    page: int,
    page_size: int | None,
    limit: int | None,
    default_page_size: int,
    max_page_size: int,
) -> PaginationSpec:
    """Validate and normalize page/page_size values."""

    resolved_page_size = limit if limit is not None else page_size
    if resolved_page_size is None:
        resolved_page_size = default_page_size
    if page < 1:
        raise ValueError("page must be >= 1")
    if resolved_page_size < 1:
        raise ValueError("page_size must be >= 1")
    if resolved_page_size > max_page_size:
        raise ValueError(f"page_size must be <= {max_page_size}")
    return PaginationSpec(page=page, page_size=resolved_page_size)


def compute_total_pages(*, total_count: int, page_size: int) -> int:
    """Compute deterministic total page count."""

    if total_count <= 0:
        return 0
    return ((total_count - 1) // page_size) + 1


@dataclass(frozen=True)
class Paginator:
    """One page of items plus the metadata needed to describe its neighbours."""

    items: Sequence[Any]
    total: int
    page: int = 1
    per_page: int = 15
    path: str = "/"
    page_name: str = "page"
    query: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")
        if self.total < 0:
            raise ValueError("total must be >= 0")

    @classmethod
    def from_sequence(
        cls,
        items: Sequence[Any],
        *,
        page: int = 1,
        page_size: int | None = None,
        default_page_size: int = 15,
        max_page_size: int = 100,
        path: str = "/",
        page_name: str = "page",
    ) -> Paginator:
        """Slice a full in-memory sequence into one page."""

        spec = normalize_pagination(
            page=page,
            page_size=page_size,
            limit=None,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )
        window = list(items[spec.offset : spec.offset + spec.page_size])
        return cls(
            items=window,
            total=len(items),
            page=spec.page,
            per_page=spec.page_size,
            path=path,
            page_name=page_name,
        )

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def total_pages(self) -> int:
        return compute_total_pages(total_count=self.total, page_size=self.per_page)

    def url(self, page: int) -> str:
        params = {**self.query, self.page_name: max(page, 1)}
        return str(URL(self.path).include_query_params(**params))

    @property
    def previous_page_url(self) -> str | None:
        if self.page <= 1:
            return None
        return self.url(self.page - 1)

    @property
    def next_page_url(self) -> str | None:
        if self.page >= self.total_pages:
            return None
        return self.url(self.page + 1)

    def pagination_meta(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "per_page": self.per_page,
            "current_page": self.page,
            "total": self.total,
            "total_pages": self.total_pages,
            "links": {
                "previous": self.previous_page_url,
                "next": self.next_page_url,
            },
        }

    def to_dict(self) -> dict[str, Any]:
        return {"data": list(self.items), "meta": {"pagination": self.pagination_meta()}}
