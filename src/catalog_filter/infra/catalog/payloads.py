"""Upstream catalog wire format.

Infrastructure models only: the HTTP adapter converts them to domain objects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UpstreamProduct(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    short_description: str | None = Field(default="", alias="shortDescription")
    long_description: str | None = Field(default="", alias="longDescription")
    price: str | None = ""
    rating: float | None = None
    review_count: int | None = Field(default=None, alias="reviewCount")
    in_stock: bool = Field(default=False, alias="inStock")

    @field_validator("id", "price", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Any:
        # Upstream serves numeric ids and bare numeric prices as JSON numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class UpstreamCatalogPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: Any = None
    page: int
    page_size: int = Field(alias="pageSize", ge=0)
    total_products: int = Field(alias="totalProducts", ge=0)
    products: list[UpstreamProduct] = Field(default_factory=list)
