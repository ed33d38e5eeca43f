from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, DecodeError, TransportError

AuthErrorHook = Callable[[ApiError], None]


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    status_code: int | None


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    on_auth_error: AuthErrorHook | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        retry_mutation: bool = False,
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        can_retry = normalized_method in {"GET", "HEAD"} or retry_mutation
        attempts = self.config.retries + 1 if can_retry else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    timeout=self.config.timeout,
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "transport_error", None)
                    raise TransportError(
                        code="TIMEOUT" if isinstance(exc, requests.Timeout) else "TRANSPORT_ERROR",
                        message=str(exc) or type(exc).__name__,
                        status_code=0,
                        raw_payload={"type": type(exc).__name__},
                    ) from exc
                time.sleep(self.config.retry_backoff_seconds * (2**attempt))
            else:
                break

        if response is None:
            raise RuntimeError("HTTP request finished without a response")

        if response.ok:
            self._record_operation(module, operation, started, "success", response.status_code)
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise DecodeError(
                    code="INVALID_JSON",
                    message="Response body is not valid JSON",
                    status_code=response.status_code,
                    raw_payload=response.text,
                ) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None
        self._record_operation(module, operation, started, "error", response.status_code)
        error = map_error(response.status_code, payload if isinstance(payload, dict) else {})
        if not isinstance(payload, dict):
            # Only a JSON error body carries a message meant for users.
            error.raw_payload = response.text
        if response.status_code in {401, 403} and self.on_auth_error:
            self.on_auth_error(error)
        raise error

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def _record_operation(
        self,
        module: str,
        operation: str,
        started: float,
        result: str,
        status_code: int | None,
    ) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            status_code=status_code,
        )
