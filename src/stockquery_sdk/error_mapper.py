from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    QueryError,
    QueryErrorKind,
    RegistrationError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)

GENERIC_MESSAGE = "Request failed"
LOGIN_FALLBACK_MESSAGE = "Login failed"
REGISTER_FALLBACK_MESSAGE = "Registration failed"


def server_message(payload: Mapping[str, object] | None) -> str | None:
    """Pull the human-readable message out of an error body, if there is one."""
    if not payload:
        return None
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or "HTTP_ERROR")
    message = server_message(payload) or GENERIC_MESSAGE
    mapped: type[ApiError]
    if status_code == 401:
        mapped = UnauthorizedError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def _message_or(exc: ApiError, fallback: str) -> str:
    if isinstance(exc, TransportError):
        return fallback
    if isinstance(exc.raw_payload, Mapping):
        return server_message(exc.raw_payload) or fallback
    return fallback


def to_authentication_error(exc: ApiError) -> AuthenticationError:
    return AuthenticationError(
        code=exc.code,
        message=_message_or(exc, LOGIN_FALLBACK_MESSAGE),
        status_code=exc.status_code,
        raw_payload=exc.raw_payload,
    )


def to_registration_error(exc: ApiError) -> RegistrationError:
    return RegistrationError(
        code=exc.code,
        message=_message_or(exc, REGISTER_FALLBACK_MESSAGE),
        status_code=exc.status_code,
        raw_payload=exc.raw_payload,
    )


def query_error_kind(exc: ApiError) -> QueryErrorKind:
    if isinstance(exc, (UnauthorizedError, ForbiddenError)):
        return QueryErrorKind.UNAUTHORIZED
    if isinstance(exc, NotFoundError):
        return QueryErrorKind.NOT_FOUND
    if isinstance(exc, TransportError):
        return QueryErrorKind.TRANSPORT
    return QueryErrorKind.SERVER


def to_query_error(exc: ApiError) -> QueryError:
    return QueryError(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        raw_payload=exc.raw_payload,
        kind=query_error_kind(exc),
    )
