"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from arbor.domain.error import DomainError

STATUS_BY_KIND: dict[str, int] = {
    "invalid_argument": status.HTTP_400_BAD_REQUEST,
    "cross_root": status.HTTP_400_BAD_REQUEST,
    "depth_exceeded": status.HTTP_400_BAD_REQUEST,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "unauthorized": status.HTTP_403_FORBIDDEN,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class InterfaceError(DomainError):
    """Base interface error."""


class MissingIdentityError(InterfaceError):
    """The request did not say who the caller is."""

    kind = "unauthenticated"

    def __init__(self) -> None:
        super().__init__("Caller identity required (X-User-ID header or user_id)")


def error_body(kind: str, detail: str) -> dict[str, str]:
    return {"error": kind, "detail": detail}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError with the status code for its kind."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logfire.error(
            "Request failed", kind=exc.kind, error=exc.message, path=request.url.path
        )
    else:
        logfire.info(
            "Request rejected", kind=exc.kind, error=exc.message, path=request.url.path
        )

    return JSONResponse(status_code=status_code, content=error_body(exc.kind, exc.message))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as invalid arguments."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("invalid_argument", details),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers that map errors to responses."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
