from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..contracts import ErrorPayload, uwf_err
from ..errors import ClipshareError, InternalError

logger = logging.getLogger("apigateway")

def _render(request: Request, status_code: int, error: ErrorPayload) -> JSONResponse:
    body = uwf_err(request, error).model_dump(mode="json")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)

async def clipshare_error_handler(request: Request, exc: ClipshareError) -> JSONResponse:
    return _render(request, exc.status_code, exc.payload)

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ErrorPayload(
        type="VALIDATION",
        code="INVALID_REQUEST",
        message="Invalid request",
        details={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]},
    )
    return _render(request, 400, err)

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # details stay in the server log, the client gets a generic message
    logger.exception("request.unhandled path=%s", request.url.path)
    return _render(request, 500, InternalError().payload)

def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClipshareError, clipshare_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
