"""Translate errors raised while serving quote requests into ErrorResponse bodies.

| Raised                                     | Status | code                    |
|--------------------------------------------|--------|-------------------------|
| ValidationError (every violated rule)      | 400    | VALIDATION_ERROR        |
| BusinessRuleViolation                      | 400    | BUSINESS_RULE_VIOLATION |
| InternalError (rule paths disagree)        | 500    | INTERNAL_ERROR          |
| RequestValidationError (payload shape)     | 422    | VALIDATION_ERROR        |
| anything else                              | 500    | INTERNAL_ERROR          |
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lease_quotes.domain.errors import DomainError, InternalError

logger = logging.getLogger(__name__)

_REQUEST_LOCATIONS = ("body", "query", "path")


def _request_context(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


def _error_body(
    detail: str, code: str, errors: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": detail, "code": code}
    if errors:
        body["errors"] = errors
    return body


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Rule failures are the client's to fix (400); InternalError is ours (500)."""
    errors = getattr(exc, "errors", None)

    if isinstance(exc, InternalError):
        logger.error(
            "Quote request failed internally",
            extra={
                "error_code": exc.error_code,
                "context": exc.context,
                **_request_context(request),
            },
        )
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        logger.info(
            "Quote request rejected",
            extra={
                "error_code": exc.error_code,
                "violations": len(errors or ()),
                **_request_context(request),
            },
        )
        status_code = status.HTTP_400_BAD_REQUEST

    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.message, exc.error_code, errors),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed payloads (missing fields, non-numeric amounts) never reach the rules."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in _REQUEST_LOCATIONS),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info("Malformed quote request", extra={"errors": errors, **_request_context(request)})

    return JSONResponse(
        status_code=422,
        content=_error_body("Invalid request parameters", "VALIDATION_ERROR", errors),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, **_request_context(request)},
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, handle_request_validation_error  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, handle_unexpected_error)
