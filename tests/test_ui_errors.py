from __future__ import annotations

from stockquery_sdk.exceptions import RegistrationError, QueryError, QueryErrorKind, StorageFailure
from stockquery_sdk.ui_errors import to_user_facing_error


def test_query_errors_map_to_readable_messages() -> None:
    offline = to_user_facing_error(
        QueryError(code="TIMEOUT", message="read timed out", status_code=0, kind=QueryErrorKind.TRANSPORT)
    )
    assert offline.message == "Could not reach the stock service. Check your connection."
    assert offline.technical_details == "TIMEOUT (HTTP 0): read timed out"
    assert not offline.requires_login


def test_server_message_is_shown_for_credential_errors() -> None:
    presented = to_user_facing_error(RegistrationError(code="HTTP_ERROR", message="El usuario ya existe", status_code=409))
    assert presented.message == "El usuario ya existe"


def test_storage_failure_prompts_login() -> None:
    presented = to_user_facing_error(StorageFailure("Could not read session token", "/tmp/x"))
    assert presented.requires_login
    assert "/tmp/x" in (presented.technical_details or "")
