from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class DecodeError(ApiError):
    """A 2xx response whose body does not match the expected schema."""


class AuthenticationError(ApiError):
    """Login rejected; message is the server's when it sent one."""


class RegistrationError(ApiError):
    """Registration rejected; message is the server's when it sent one."""


class QueryErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    SERVER = "server"


@dataclass
class QueryError(ApiError):
    kind: QueryErrorKind = QueryErrorKind.SERVER

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.kind.value}: {self.message}"


@dataclass
class StorageFailure(Exception):
    message: str
    path: str | None = None

    def __str__(self) -> str:
        where = f" ({self.path})" if self.path else ""
        return f"{self.message}{where}"
