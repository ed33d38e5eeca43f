from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from ..error_mapper import to_query_error
from ..exceptions import ApiError, DecodeError
from ..models_stock import StockQuery, StockResponse
from .base import BaseClient


@dataclass
class StockClient(BaseClient):
    def query_stock(self, query: StockQuery, token: str | None) -> StockResponse:
        """POST /stock. A missing token is still sent; the server decides."""
        try:
            payload = self._request(
                "POST",
                "/stock",
                token=token,
                json_body=query.model_dump(),
                module="stock",
                operation="query_stock",
                # Read-only despite the POST, so configured retries apply.
                retry_mutation=True,
            )
        except DecodeError:
            raise
        except ApiError as exc:
            raise to_query_error(exc) from exc
        return parse_stock_response(payload)


def parse_stock_response(payload: object) -> StockResponse:
    if payload is None:
        return StockResponse({})
    if not isinstance(payload, dict):
        raise DecodeError(
            code="INVALID_STOCK_RESPONSE",
            message="Expected stock response to be a JSON object",
            status_code=200,
            raw_payload=payload,
        )
    try:
        return StockResponse.model_validate(payload)
    except PydanticValidationError as exc:
        raise DecodeError(
            code="INVALID_STOCK_RESPONSE",
            message=f"Stock response has an unexpected shape: {exc.error_count()} problem(s)",
            status_code=200,
            raw_payload=payload,
        ) from exc
