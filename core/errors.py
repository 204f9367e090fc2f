from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class WordInventoryError(Exception):
    """Base for every failure that is reported to the user as a message."""

    status_code: int = 500
    code: str = "ERROR"

    def __init__(self, message: str, *, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(WordInventoryError):
    status_code = 422
    code = "VALIDATION_ERROR"


class ConflictError(WordInventoryError):
    status_code = 409
    code = "CONFLICT"


class NotFoundError(WordInventoryError):
    status_code = 404
    code = "NOT_FOUND"


class StorageError(WordInventoryError):
    status_code = 500
    code = "STORAGE_ERROR"


class GenerationError(WordInventoryError):
    status_code = 502
    code = "GENERATION_FAILED"


class GenerationUnavailableError(GenerationError):
    status_code = 503
    code = "GENERATION_UNAVAILABLE"


class UnrecognizedInputError(WordInventoryError):
    status_code = 422
    code = "WORD_NOT_RECOGNIZED"


class PersistenceError(WordInventoryError):
    """The entry was saved but its enrichment payload could not be stored."""

    status_code = 500
    code = "PERSISTENCE_FAILED"


async def _word_inventory_error_handler(request: Request, exc: WordInventoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError("Invalid request", details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WordInventoryError, _word_inventory_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)
