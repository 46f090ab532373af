"""
Custom exception hierarchy for Pontua API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing Portuguese or English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class PontuaException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class MissingRequiredScopeError(PontuaException):
    """A developer-scoped operation was called without a developer id."""
    http_status = status.HTTP_400_BAD_REQUEST
    code = "MISSING_REQUIRED_SCOPE"

    def __init__(self, field: str = "incorporadora_id"):
        super().__init__(
            message="ID da incorporadora é obrigatório.",
            details={"field": field},
        )


class InvalidFilterError(PontuaException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_FILTER"

    def __init__(self, field: str, message: str, value: Any = None):
        details: dict[str, Any] = {"field": field}
        if value is not None:
            details["value"] = str(value)
        super().__init__(message=message, details=details)


class StoreUnavailableError(PontuaException):
    """The data store failed or could not be reached. Safe to retry."""
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Data store unavailable while running '{operation}'.",
            details={"operation": operation},
        )


class ActionTypeNotFoundError(PontuaException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "ACTION_TYPE_NOT_FOUND"

    def __init__(self, acao_id: int):
        super().__init__(
            message=f"Ação {acao_id} não encontrada.",
            details={"acao_id": acao_id},
        )


class InactiveActionTypeError(PontuaException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "ACTION_TYPE_INACTIVE"

    def __init__(self, acao_id: int):
        super().__init__(
            message=f"A ação {acao_id} não está ativa e não aceita novos registros.",
            details={"acao_id": acao_id},
        )


class DuplicateActionTypeError(PontuaException):
    http_status = status.HTTP_409_CONFLICT
    code = "DUPLICATE_ACTION_TYPE"

    def __init__(self, nome: str):
        super().__init__(
            message=f"Já existe uma ação chamada '{nome}'.",
            details={"nome": nome},
        )


class ConstraintViolationError(PontuaException):
    """The store rejected a write because it breaks a table constraint. Not retryable."""
    http_status = status.HTTP_409_CONFLICT
    code = "CONSTRAINT_VIOLATION"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Os dados enviados violam uma restrição do banco em '{operation}'.",
            details={"operation": operation},
        )


class ReferenceNotFoundError(PontuaException):
    """A foreign-key style reference in a request body points nowhere."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "REFERENCE_NOT_FOUND"

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"Registro referenciado por '{field}' não existe.",
            details={"field": field, "value": value},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def pontua_exception_handler(request: Request, exc: PontuaException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(
                str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")
            ),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
