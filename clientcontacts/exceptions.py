"""HTTP errors raised by the service layer.

Each carries a `{"message", "error"}` detail so the UI can show the message
and, where one exists, the underlying store error.
"""
from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ServiceError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, error: Optional[Any] = None):
        self.message = message
        self.error = error
        super().__init__(
            status_code=type(self).status_code,
            detail={"message": message, "error": error},
        )


class ValidationFailed(ServiceError):
    """Malformed input or a violated unique field."""
    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(ServiceError):
    """The client/contact pair is already linked."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreUnavailable(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed bodies and path ids are a 400, not FastAPI's default 422
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"message": "Validation error", "error": jsonable_encoder(exc.errors())}},
    )
