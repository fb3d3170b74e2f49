from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chore_wallet.domain.errors import LedgerError

logger = logging.getLogger("chore_wallet.errors")

# Message shown to the client when a route fails unexpectedly
FALLBACK_MESSAGES: dict[tuple[str, str], str] = {
    ("GET", "/api/user"): "Failed to get user data",
    ("GET", "/api/chores"): "Failed to get chores",
    ("POST", "/api/chores"): "Failed to create chore",
    ("PATCH", "/api/chores/{chore_id}"): "Failed to update chore",
    ("DELETE", "/api/chores/{chore_id}"): "Failed to delete chore",
    ("POST", "/api/chores/{chore_id}/claim"): "Failed to claim chore",
    ("GET", "/api/goals"): "Failed to get goals",
    ("POST", "/api/goals"): "Failed to create goal",
    ("PATCH", "/api/goals/{goal_id}"): "Failed to update goal",
    ("DELETE", "/api/goals/{goal_id}"): "Failed to delete goal",
    ("POST", "/api/goals/allocate"): "Failed to allocate money",
    ("GET", "/api/transactions"): "Failed to get transactions",
    ("DELETE", "/api/transactions/{transaction_id}"): "Failed to undo transaction",
    ("POST", "/api/reset"): "Failed to reset data",
}


def _resolve_route(request: Request) -> str:
    route = request.scope.get("route")
    route_path = getattr(route, "path", None)
    if isinstance(route_path, str):
        return route_path
    return request.url.path


def _validation_message(request: Request) -> str:
    path = request.url.path
    if path.startswith("/api/goals/allocate"):
        return "Invalid allocation data"
    if path.startswith("/api/chores"):
        return "Invalid chore data"
    if path.startswith("/api/goals"):
        return "Invalid goal data"
    return "Invalid request data"


def _build_error(*, message: str, code: str | None = None, errors: Any | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"message": message}
    if code is not None:
        payload["code"] = code
    if errors is not None:
        payload["errors"] = errors
    return payload


async def ledger_exception_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_error(message=exc.message, code=exc.code),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_error(message=message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_build_error(
            message=_validation_message(request),
            code="VALIDATION_ERROR",
            errors=jsonable_encoder(exc.errors()),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    route = _resolve_route(request)
    logger.exception("unhandled exception on %s %s", request.method, route)
    message = FALLBACK_MESSAGES.get((request.method, route), "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_build_error(message=message, code="INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, ledger_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
