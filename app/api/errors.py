from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.application.exceptions import (
    BookingAlreadyCanceledError,
    BookingNotFoundError,
    NotAProviderError,
    NotOwnerError,
    PastDateError,
    SchedulingError,
    SelfBookingNotAllowedError,
    SlotUnavailableError,
    StorageError,
    TooLateToCancelError,
)


logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[Exception], int] = {
    NotAProviderError: 401,
    SelfBookingNotAllowedError: 400,
    PastDateError: 400,
    SlotUnavailableError: 409,
    BookingNotFoundError: 404,
    NotOwnerError: 403,
    TooLateToCancelError: 403,
    BookingAlreadyCanceledError: 409,
    StorageError: 503,
}


def _error_response(exc: SchedulingError | StorageError) -> JSONResponse:
    status = STATUS_BY_ERROR.get(type(exc), 400)
    return JSONResponse(status_code=status, content={"error": exc.code, "detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SchedulingError)
    async def _scheduling_error(request: Request, exc: SchedulingError) -> JSONResponse:
        logger.info("Request rejected", extra={"reason": exc.code})
        return _error_response(exc)

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure", extra={"error": str(exc)})
        return _error_response(exc)
