from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .exceptions import ApiError, StorageFailure
from .normalizer import NO_DATA_MESSAGE, StockResult
from .stock_validation import ClientValidationError
from .ui_errors import UserFacingError, to_user_facing_error


class ViewStateStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


class QueryInProgressError(RuntimeError):
    """A stock query was triggered while the previous one is unresolved."""


@dataclass
class StockViewState:
    """State for one stock screen: at most one query in flight.

    A failure drops whatever result was on screen and leaves the error notice
    up until the next successful query.
    """

    status: ViewStateStatus = ViewStateStatus.IDLE
    result: StockResult | None = None
    error: UserFacingError | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def is_loading(self) -> bool:
        return self.status is ViewStateStatus.LOADING

    @property
    def can_query(self) -> bool:
        return not self.is_loading

    @property
    def requires_login(self) -> bool:
        return bool(self.error and self.error.requires_login)

    @property
    def message(self) -> str | None:
        if self.error:
            return self.error.message
        if self.status is ViewStateStatus.EMPTY:
            return NO_DATA_MESSAGE
        return None

    def begin_query(self) -> None:
        with self._lock:
            if self.status is ViewStateStatus.LOADING:
                raise QueryInProgressError("A stock query is already in progress")
            self.status = ViewStateStatus.LOADING

    def complete(self, result: StockResult) -> None:
        with self._lock:
            self.result = result
            self.error = None
            self.status = ViewStateStatus.EMPTY if result.is_empty else ViewStateStatus.SUCCESS

    def fail(self, exc: Exception) -> None:
        with self._lock:
            self.result = None
            self.error = to_user_facing_error(exc)
            self.status = ViewStateStatus.ERROR

    def run(self, query: Callable[[], StockResult]) -> StockResult | None:
        """Run ``query`` guarded by this state; errors end up in ``error``."""
        self.begin_query()
        try:
            result = query()
        except (ApiError, ClientValidationError, StorageFailure) as exc:
            self.fail(exc)
            return None
        except BaseException:
            with self._lock:
                self.status = ViewStateStatus.IDLE
            raise
        self.complete(result)
        return result

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "requires_login": self.requires_login,
            "groups": len(self.result) if self.result else 0,
        }
