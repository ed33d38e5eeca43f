from __future__ import annotations

import json
import logging

import pytest
import responses

from stockquery_sdk.auth_store import SessionStore
from stockquery_sdk.config import ClientConfig
from stockquery_sdk.exceptions import AuthenticationError, QueryError, QueryErrorKind, StorageFailure
from stockquery_sdk.session import ApiSession
from stockquery_sdk.stock_validation import ClientValidationError

API_BASE_URL = "https://api.example.com"

STOCK_PAYLOAD = {
    "X#RED#M": [
        {"ResourceName": "Store1", "Quantity": 5, "LastUpdateDate": "2024-01-01", "Description": "Shirt"},
    ],
}


@pytest.fixture
def session(config: ClientConfig, store: SessionStore) -> ApiSession:
    return ApiSession(config=config, store=store)


@responses.activate
def test_login_persists_token(session: ApiSession, store: SessionStore) -> None:
    responses.add(responses.POST, f"{API_BASE_URL}/login", json={"token": "tok-123"}, status=200)

    token = session.login("ana", "secret")

    assert token == "tok-123"
    assert store.load() == "tok-123"
    assert session.current_token() == "tok-123"
    assert session.has_active_session()


@responses.activate
def test_failed_login_keeps_previous_session(session: ApiSession, store: SessionStore) -> None:
    store.save("old")
    responses.add(responses.POST, f"{API_BASE_URL}/login", json={"error": "bad"}, status=401)

    with pytest.raises(AuthenticationError):
        session.login("ana", "wrong")
    assert store.load() == "old"


@responses.activate
def test_register_does_not_touch_the_session(session: ApiSession, store: SessionStore) -> None:
    responses.add(responses.POST, f"{API_BASE_URL}/register", json={}, status=200)
    session.register("ana", "secret")
    assert store.load() is None


@responses.activate
def test_query_stock_uses_stored_token_and_normalizes(session: ApiSession, store: SessionStore) -> None:
    store.save("tok-123")
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json=STOCK_PAYLOAD, status=200)

    result = session.query_stock(" X ")

    request = responses.calls[0].request
    assert request.headers["Authorization"] == "Bearer tok-123"
    assert json.loads(request.body) == {"sku": "X", "base": "DEPOSEVN"}
    group = result.groups[0]
    assert group.parsed.color == "RED"
    assert group.parsed.size == "M"
    assert group.description == "Shirt"
    assert group.records[0].quantity == 5


@responses.activate
def test_query_without_token_is_unauthorized_and_clears_session(session: ApiSession, store: SessionStore) -> None:
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json={"error": "Token requerido"}, status=401)

    with pytest.raises(QueryError) as excinfo:
        session.query_stock("X", "DEPOFORT")

    assert excinfo.value.kind is QueryErrorKind.UNAUTHORIZED
    assert len(responses.calls) == 1
    assert store.load() is None
    assert not session.has_active_session()


@responses.activate
def test_rejected_token_is_cleared(session: ApiSession, store: SessionStore) -> None:
    store.save("expired")
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json={"error": "Token inválido"}, status=403)

    with pytest.raises(QueryError):
        session.query_stock("X")

    assert store.load() is None


@responses.activate
def test_other_query_failures_keep_the_session(session: ApiSession, store: SessionStore) -> None:
    store.save("tok")
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json={"error": "no such sku"}, status=404)

    with pytest.raises(QueryError) as excinfo:
        session.query_stock("X")

    assert excinfo.value.kind is QueryErrorKind.NOT_FOUND
    assert store.load() == "tok"


@responses.activate
def test_empty_response_is_no_data(session: ApiSession, store: SessionStore) -> None:
    store.save("tok")
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json={}, status=200)

    assert session.query_stock("X").is_empty


@responses.activate
def test_blank_sku_is_rejected_before_sending(session: ApiSession) -> None:
    with pytest.raises(ClientValidationError, match="sku"):
        session.query_stock("   ")
    assert len(responses.calls) == 0


def test_logout_clears_store(session: ApiSession, store: SessionStore) -> None:
    store.save("tok")
    session.logout()
    session.logout()
    assert store.load() is None


@responses.activate
def test_logs_never_carry_credentials(session: ApiSession, caplog: pytest.LogCaptureFixture) -> None:
    responses.add(responses.POST, f"{API_BASE_URL}/login", json={"token": "tok-secret"}, status=200)

    with caplog.at_level(logging.INFO, logger="stockquery_sdk"):
        session.login("ana", "pa55word")

    events = [json.loads(record.getMessage()) for record in caplog.records]
    assert [event["outcome"] for event in events] == ["attempt", "success"]
    assert all(event["action"] == "login" for event in events)
    assert "pa55word" not in caplog.text
    assert "tok-secret" not in caplog.text


def test_from_config_builds_store_from_app_name(config: ClientConfig) -> None:
    session = ApiSession.from_config(config)
    assert session.store.app_name == config.app_name


@responses.activate
def test_unauthorized_survives_a_failing_store_clear(
    session: ApiSession,
    store: SessionStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    store.save("expired")
    responses.add(responses.POST, f"{API_BASE_URL}/stock", json={"error": "Token inválido"}, status=401)

    def broken_clear() -> None:
        raise StorageFailure("Could not clear session token", "/readonly/session.json")

    monkeypatch.setattr(store, "clear", broken_clear)

    with pytest.raises(QueryError) as excinfo:
        session.query_stock("X")

    assert excinfo.value.kind is QueryErrorKind.UNAUTHORIZED
