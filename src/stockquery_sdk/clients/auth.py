from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from ..error_mapper import to_authentication_error, to_registration_error
from ..exceptions import ApiError, DecodeError
from ..models import Credentials, TokenResponse
from .base import BaseClient


class AuthClient(BaseClient):
    def register(self, username: str, password: str) -> None:
        payload = Credentials(username=username, password=password)
        try:
            self._request("POST", "/register", json_body=payload.model_dump(), module="auth", operation="register")
        except DecodeError:
            # A 2xx is all registration promises; the body is not read.
            return
        except ApiError as exc:
            raise to_registration_error(exc) from exc

    def login(self, username: str, password: str) -> TokenResponse:
        payload = Credentials(username=username, password=password)
        try:
            data = self._request("POST", "/login", json_body=payload.model_dump(), module="auth", operation="login")
        except DecodeError:
            raise
        except ApiError as exc:
            raise to_authentication_error(exc) from exc
        if not isinstance(data, dict):
            raise DecodeError(
                code="INVALID_LOGIN_RESPONSE",
                message="Expected login response to be a JSON object",
                status_code=200,
                raw_payload=data,
            )
        try:
            return TokenResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise DecodeError(
                code="INVALID_LOGIN_RESPONSE",
                message="Login response does not carry a token",
                status_code=200,
                raw_payload=None,
            ) from exc
