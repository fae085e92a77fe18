from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from poker_ledger.domain import DomainValidationError, LedgerNotFoundError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError, **details: Any) -> HTTPException:
    if isinstance(exc, LedgerNotFoundError):
        return api_error(
            code="not_found",
            message=str(exc),
            details=details or None,
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return api_error(code="validation_error", message=str(exc), details=details or None)
