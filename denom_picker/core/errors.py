import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("denom_picker.errors")


class PickerError(Exception):
    """Base class for domain failures surfaced by the picker core."""


class SelectionLimitReached(PickerError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"You can only select up to {limit} denominations.")


class UnknownDenomination(PickerError, ValueError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"{value} msat is not an available denomination")


class PriceFeedError(PickerError):
    pass


class ClipboardError(PickerError):
    pass


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
        error = "not_found"
    else:
        detail = exc.detail
        error = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error, "detail": detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def unknown_denomination_handler(request: Request, exc: UnknownDenomination):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "unknown_denomination", "detail": str(exc)},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
