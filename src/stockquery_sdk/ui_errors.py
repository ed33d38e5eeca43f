from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, QueryError, QueryErrorKind, StorageFailure
from .stock_validation import ClientValidationError

_QUERY_MESSAGES = {
    QueryErrorKind.UNAUTHORIZED: "Your session has expired. Please log in again.",
    QueryErrorKind.NOT_FOUND: "No stock found for that product code.",
    QueryErrorKind.TRANSPORT: "Could not reach the stock service. Check your connection.",
    QueryErrorKind.SERVER: "Could not retrieve stock data.",
}


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    requires_login: bool = False

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, QueryError):
        return UserFacingError(
            message=_QUERY_MESSAGES[exc.kind],
            details=f"{exc.code} (HTTP {exc.status_code}): {exc.message}",
            requires_login=exc.kind is QueryErrorKind.UNAUTHORIZED,
        )
    if isinstance(exc, ApiError):
        primary = exc.message.strip() or "Request failed"
        return UserFacingError(message=primary, details=f"{exc.code} (HTTP {exc.status_code})")
    if isinstance(exc, ClientValidationError):
        return UserFacingError(message=str(exc), details="CLIENT_VALIDATION")
    if isinstance(exc, StorageFailure):
        return UserFacingError(
            message="Could not access the saved session.",
            details=str(exc),
            requires_login=True,
        )
    return UserFacingError(message=str(exc) or "Something went wrong")
