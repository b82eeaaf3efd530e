import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.exceptions import HTTPException

logger = logging.getLogger("delivery.errors")


class DeliveryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(DeliveryError):
    status_code = 400


class NotFound(DeliveryError):
    status_code = 404


class Conflict(DeliveryError):
    status_code = 400


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def validation_message(exc) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg", "Invalid request"))
    # pydantic prefixes messages raised from validators
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if first.get("type") == "missing":
        return "All fields are required" if not loc else f"{'.'.join(loc)} is required"
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DeliveryError)
    async def delivery_error_handler(request: Request, exc: DeliveryError):
        if exc.status_code == 400:
            logger.warning(f"[{request.method} {request.url.path}] {exc.message}")
        return _message(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _message(400, validation_message(exc))

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.warning(f"[{request.method} {request.url.path}] duplicate key: {exc.details}")
        return _message(400, "Record with this key already exists")

    @app.exception_handler(PyMongoError)
    async def mongo_error_handler(request: Request, exc: PyMongoError):
        logger.exception(f"[{request.method} {request.url.path}] database error")
        return _message(500, "Internal server error")
