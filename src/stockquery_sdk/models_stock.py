from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel


class StockQuery(BaseModel):
    sku: str
    base: str


class LocationRecordPayload(BaseModel):
    """One row of the stock response: a variant's quantity at one location."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    resource_name: str = Field(alias="ResourceName")
    quantity: int | float = Field(alias="Quantity")
    # Left loose here; the normalizer decides what is a usable date.
    last_update_date: Any = Field(default=None, alias="LastUpdateDate")
    description: str | None = Field(default=None, alias="Description")


class StockResponse(RootModel[dict[str, list[LocationRecordPayload]]]):
    """Variant key -> location rows, in the order the server sent them."""

    def __len__(self) -> int:
        return len(self.root)
