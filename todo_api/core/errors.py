from fastapi import status
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Base for errors that map onto a client-facing status code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the `{"error": message}` envelope used by every failure."""
    return JSONResponse(status_code=status_code, content={"error": message})
