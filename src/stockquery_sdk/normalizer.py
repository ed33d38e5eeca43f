from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError
from .models_stock import LocationRecordPayload, StockResponse
from .variant_key import ParsedVariant, parse_variant_key

UNKNOWN_DATE_LABEL = "unknown date"
NO_DATA_MESSAGE = "No data available"


@dataclass(frozen=True)
class LocationRecord:
    resource_name: str
    quantity: int | float
    last_update_date: date | None
    last_update_raw: Any
    description: str | None

    @property
    def last_update_label(self) -> str:
        if self.last_update_date is None:
            return UNKNOWN_DATE_LABEL
        return self.last_update_date.isoformat()


@dataclass(frozen=True)
class VariantGroup:
    key: str
    parsed: ParsedVariant
    description: str | None
    records: tuple[LocationRecord, ...]

    @property
    def total_quantity(self) -> int | float:
        return sum(record.quantity for record in self.records)

    def rows(self) -> list[tuple[str, int | float, str, str, str]]:
        """Table rows: location, quantity, last update, color, size."""
        return [
            (
                record.resource_name,
                record.quantity,
                record.last_update_label,
                self.parsed.color,
                self.parsed.size,
            )
            for record in self.records
        ]


@dataclass(frozen=True)
class StockResult:
    groups: tuple[VariantGroup, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def total_quantity(self) -> int | float:
        return sum(group.total_quantity for group in self.groups)

    @property
    def keys(self) -> list[str]:
        return [group.key for group in self.groups]

    def __iter__(self) -> Iterator[VariantGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)


def parse_update_date(value: Any) -> date | None:
    """Best-effort conversion of a server timestamp; ``None`` means unknown."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        # Numeric timestamps are epoch milliseconds.
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def _coerce_payload(item: LocationRecordPayload | Mapping[str, Any], key: str, index: int) -> LocationRecordPayload:
    if isinstance(item, LocationRecordPayload):
        return item
    try:
        return LocationRecordPayload.model_validate(item)
    except PydanticValidationError as exc:
        raise DecodeError(
            code="INVALID_LOCATION_RECORD",
            message=f"Record {index} of {key!r} is not a location record",
            status_code=200,
            raw_payload=item,
        ) from exc


def _to_record(payload: LocationRecordPayload) -> LocationRecord:
    return LocationRecord(
        resource_name=payload.resource_name,
        quantity=payload.quantity,
        last_update_date=parse_update_date(payload.last_update_date),
        last_update_raw=payload.last_update_date,
        description=payload.description,
    )


def normalize_stock(
    raw: StockResponse | Mapping[str, Sequence[LocationRecordPayload | Mapping[str, Any]]],
) -> StockResult:
    """Group location rows under their variant key, keeping server order."""
    entries = raw.root if isinstance(raw, StockResponse) else raw
    groups: list[VariantGroup] = []
    for key, items in entries.items():
        payloads = [_coerce_payload(item, key, index) for index, item in enumerate(items or ())]
        records = tuple(_to_record(payload) for payload in payloads)
        groups.append(
            VariantGroup(
                key=key,
                parsed=parse_variant_key(key),
                description=records[0].description if records else None,
                records=records,
            )
        )
    return StockResult(groups=tuple(groups))
