from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FieldValidationError(Exception):
    """Domain-level validation failure bound to one or more input fields."""

    def __init__(self, errors: list[dict[str, str]], message: str = "Invalid request data"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @classmethod
    def single(cls, path: str, message: str) -> "FieldValidationError":
        return cls([{"path": path, "message": message}])


def _loc_to_path(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "form"):
        parts = parts[1:]
    return ".".join(parts)


def validation_errors_out(exc: RequestValidationError) -> list[dict[str, str]]:
    return [{"path": _loc_to_path(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")} for err in exc.errors()]


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": validation_errors_out(exc)},
        )

    @app.exception_handler(FieldValidationError)
    async def field_validation_handler(request: Request, exc: FieldValidationError):
        return JSONResponse(status_code=400, content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(
            status_code=400,
            content={"message": "Conflicts with existing data", "errors": []},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail if isinstance(exc.detail, str) else "Error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
