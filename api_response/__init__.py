"""
Standard JSON success/fail envelopes for FastAPI handlers.
The dispatcher picks a formatting strategy from the shape of the output data and builds the response.
Most functionality lives in the `api` subpackage; this module only re-exports the public surface.
"""

from api_response.api.dispatcher import ResponseDispatcher
from api_response.api.formatter import Formatter
from api_response.api.pagination import Paginator
from api_response.api.resources import JsonResource, ResourceCollection
from api_response.api.response_config import ResponseConfig
from api_response.api.responses import HttpResponseException, JsonOptions, ResponseResult

__all__ = [
    "Formatter",
    "HttpResponseException",
    "JsonOptions",
    "JsonResource",
    "Paginator",
    "ResourceCollection",
    "ResponseConfig",
    "ResponseDispatcher",
    "ResponseResult",
]
