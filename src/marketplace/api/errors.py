"""Render domain errors as ``{"error": {"kind", "message"}}`` responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError

from marketplace.errors import describe

_STATUS_CODES = {
    ObjectNotFoundError: 404,
    ValidationError: 400,
    InvalidStateError: 409,
}


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        kind, message = describe(exc)
        return JSONResponse(status_code=status_code, content={"error": {"kind": kind, "message": message}})

    return handle


def register_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in _STATUS_CODES.items():
        app.add_exception_handler(exc_type, _handler(status_code))
