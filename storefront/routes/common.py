"""
Shared route helpers: translating failed service results into HTTP responses.

Routes call ``result.unwrap()``; a failed result raises ``ServiceFailure``,
which the handler registered by the application factory turns into:

    HTTP <status>
    {"detail": "<message>", "kind": "<error kind>", "context": {...}}
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from ..errors import ErrorKind, ServiceFailure


logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}


def service_failure_handler(request: Request, exc: ServiceFailure) -> JSONResponse:
    error = exc.error
    status_code = STATUS_BY_KIND[error.kind]
    logger.info(
        "%s %s -> %d (%s): %s",
        request.method, request.url.path, status_code, error.kind.value, error.message,
    )

    headers = {"WWW-Authenticate": "Bearer"} if error.kind == ErrorKind.UNAUTHENTICATED else None
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": error.message,
            "kind": error.kind.value,
            "context": jsonable_encoder(error.context),
        },
        headers=headers,
    )
