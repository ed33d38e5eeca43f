from __future__ import annotations

from dataclasses import dataclass

from .models_stock import StockQuery


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        return f"{issue.field}: {issue.reason}"


def normalize_code(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return trimmed


def validate_stock_query(sku: str | None, base: str | None) -> StockQuery:
    """Reject blank input before a request goes out; content is the server's call."""
    issues: list[ValidationIssue] = []
    normalized_sku = normalize_code(sku)
    normalized_base = normalize_code(base)
    if normalized_sku is None:
        issues.append(ValidationIssue(field="sku", reason="sku is required"))
    if normalized_base is None:
        issues.append(ValidationIssue(field="base", reason="base is required"))
    if issues:
        raise ClientValidationError(issues)
    return StockQuery(sku=normalized_sku, base=normalized_base)
