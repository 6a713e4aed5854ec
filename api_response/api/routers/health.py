# This file defines the liveness endpoint.
# It exists so deployments have a cheap liveness check that also exercises the dispatcher end to end.
# The payload reports the service name, environment, and the request id set by middleware.

from __future__ import annotations

from fastapi import APIRouter, Request

from api_response.api.dependencies import DispatcherDep
from api_response.api.responses import ResponseResult
from api_response.api.schemas.common import SuccessEnvelope
from api_response.common.settings import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", responses={200: {"model": SuccessEnvelope}})
def health(request: Request, dispatcher: DispatcherDep) -> ResponseResult:
    settings = get_settings()
    return dispatcher.success(
        {
            "status": "ok",
            "service_name": settings.PROJECT_NAME,
            "environment": settings.ENV,
            "request_id": str(getattr(request.state, "request_id", "unknown")),
        }
    )
