from __future__ import annotations

import logging
from dataclasses import dataclass

from .auth_store import SessionStore
from .clients.auth import AuthClient
from .clients.stock_client import StockClient
from .config import ClientConfig
from .exceptions import ApiError, QueryError, QueryErrorKind, StorageFailure
from .http_client import HttpClient
from .logging_utils import get_logger, log_event
from .normalizer import StockResult, normalize_stock
from .stock_validation import validate_stock_query


@dataclass
class ApiSession:
    """Wires the token store to the HTTP clients.

    The store is injected; this object keeps no token of its own, so every
    call reads the persisted value.
    """

    config: ClientConfig
    store: SessionStore
    http: HttpClient | None = None
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.http = self.http or HttpClient(config=self.config)
        self.logger = self.logger or get_logger("stockquery_sdk", self.config.log_level)

    @classmethod
    def from_config(cls, config: ClientConfig) -> ApiSession:
        return cls(config=config, store=SessionStore.from_config(config))

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def stock_client(self) -> StockClient:
        return StockClient(http=self.http)

    def current_token(self) -> str | None:
        return self.store.load()

    def has_active_session(self) -> bool:
        return bool(self.current_token())

    def register(self, username: str, password: str) -> None:
        log_event(self.logger, "auth", "register", "attempt", username=username)
        try:
            self.auth_client().register(username, password)
        except ApiError as exc:
            log_event(self.logger, "auth", "register", "failure", logging.WARNING, username=username, code=exc.code)
            raise
        log_event(self.logger, "auth", "register", "success", username=username)

    def login(self, username: str, password: str) -> str:
        log_event(self.logger, "auth", "login", "attempt", username=username)
        try:
            token = self.auth_client().login(username, password)
        except ApiError as exc:
            log_event(self.logger, "auth", "login", "failure", logging.WARNING, username=username, code=exc.code)
            raise
        self.store.save(token.token)
        log_event(self.logger, "auth", "login", "success", username=username)
        return token.token

    def logout(self) -> None:
        self.store.clear()
        log_event(self.logger, "auth", "logout", "success")

    def query_stock(self, sku: str, base: str | None = None) -> StockResult:
        query = validate_stock_query(sku, base if base is not None else self.config.default_base)
        token = self.store.load()
        log_event(self.logger, "stock", "query_stock", "attempt", sku=query.sku, base=query.base)
        try:
            raw = self.stock_client().query_stock(query, token)
        except QueryError as exc:
            log_event(
                self.logger,
                "stock",
                "query_stock",
                "failure",
                logging.WARNING,
                sku=query.sku,
                base=query.base,
                kind=exc.kind.value,
                status_code=exc.status_code,
            )
            if exc.kind is QueryErrorKind.UNAUTHORIZED:
                self._invalidate("query_rejected")
            raise
        result = normalize_stock(raw)
        log_event(
            self.logger,
            "stock",
            "query_stock",
            "success",
            sku=query.sku,
            base=query.base,
            groups=len(result),
        )
        return result

    def close(self) -> None:
        if self.http is not None:
            self.http.close()

    def _invalidate(self, reason: str) -> None:
        # Runs while a QueryError is propagating; that error must win.
        try:
            self.store.clear()
        except StorageFailure as exc:
            log_event(
                self.logger,
                "auth",
                "session_invalidated",
                "storage_failure",
                logging.ERROR,
                reason=reason,
                error=str(exc),
            )
            return
        log_event(self.logger, "auth", "session_invalidated", reason, logging.WARNING)
