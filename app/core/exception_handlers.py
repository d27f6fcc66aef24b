import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import InventoryError, ValidationFailedError

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, details=None) -> dict:
    body = {"success": False, "code": code, "message": message}
    if details is not None:
        body["details"] = details
    return body


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        return JSONResponse(
            content=error_body(exc.code, exc.message, exc.details),
            status_code=exc.status_code,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content=error_body("HTTP_ERROR", str(exc.detail)),
            status_code=exc.status_code or 400,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        message = "; ".join(
            "{}: {}".format(".".join(entry["loc"]), entry["msg"]) for entry in details
        ) or "Invalid request"
        return JSONResponse(
            content=error_body(ValidationFailedError.code, message, details),
            status_code=ValidationFailedError.status_code,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            content=error_body(InventoryError.code, "Internal server error"),
            status_code=500,
        )


__all__ = ["error_body", "setup_exception_handlers"]
