from __future__ import annotations

from dataclasses import dataclass

VARIANT_SEPARATOR = "#"
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ParsedVariant:
    base_code: str
    color: str = NOT_AVAILABLE
    size: str = NOT_AVAILABLE


def _field(parts: list[str], index: int) -> str:
    if index < len(parts) and parts[index]:
        return parts[index]
    return NOT_AVAILABLE


def parse_variant_key(key: str) -> ParsedVariant:
    """Split ``<base>#<color>#<size>``; missing or empty fields become ``N/A``."""
    parts = key.split(VARIANT_SEPARATOR)
    return ParsedVariant(base_code=parts[0], color=_field(parts, 1), size=_field(parts, 2))
