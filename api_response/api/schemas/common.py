# This file defines schema models for the envelopes the formatter emits.
# It exists so OpenAPI output and contract tests share one description of the response shape.
# Shared models reduce duplication and keep contract changes easier to review.
# The formatter itself returns plain dicts; these classes only validate them.

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class PaginationLinks(BaseModel):
    previous: str | None = None
    next: str | None = None


class PaginationMetadata(BaseModel):
    count: int = Field(ge=0)
    per_page: int = Field(ge=1)
    current_page: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    links: PaginationLinks


class PaginationMeta(BaseModel):
    pagination: PaginationMetadata


class PaginatedData(BaseModel):
    data: list[Any]
    meta: PaginationMeta


class SuccessEnvelope(BaseModel):
    status: Literal["success"]
    code: int
    message: str
    data: Any


class FailEnvelope(BaseModel):
    status: Literal["fail", "error"]
    code: int
    message: str
    data: None = None
    errors: Any


class HealthData(BaseModel):
    status: str
    service_name: str
    environment: str
    request_id: str
