"""Errors raised while talking to Drip.

Transport failures are not wrapped: ``httpx`` errors reach the caller as-is.
"""

from typing import Any


class DripError(Exception):
    """Base exception for Drip integration errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail or message


class DripConfigurationError(DripError):
    """Raised when credentials or the account id are missing."""


class DripResponseError(DripError):
    """Raised when Drip answers a request with an unsuccessful status."""

    def __init__(
        self,
        event_type: str,
        status_code: int,
        body: Any = None,
    ) -> None:
        self.event_type = event_type
        self.body = body
        self.errors = _error_list(body)

        detail = "; ".join(_describe(error) for error in self.errors)
        if not detail and isinstance(body, str):
            detail = body or None
        message = f"Drip rejected {event_type} activity (HTTP {status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, status_code=status_code, detail=detail)


def _error_list(body: Any) -> list[dict[str, Any]]:
    # Drip reports failures as {"errors": [{"code": ..., "message": ...}]}
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            return [error for error in errors if isinstance(error, dict)]
    return []


def _describe(error: dict[str, Any]) -> str:
    code = error.get("code") or "error"
    message = error.get("message")
    return f"{code}: {message}" if message else str(code)
