from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from catalog_filter.domain.errors import ValidationError


@dataclass(frozen=True, slots=True)
class Product:
    """Upstream catalog product. Read-only to everything but the catalog source."""

    id: str
    name: str
    short_description: str = ""
    long_description: str = ""
    price: str = ""  # As served upstream, possibly with a currency prefix ("$12.99")
    rating: float | None = None
    review_count: int | None = None
    in_stock: bool = False


@dataclass(frozen=True, slots=True)
class CatalogPage:
    """One upstream fetch result."""

    products: tuple[Product, ...]
    page_number: int
    page_size: int
    total_products: int

    @property
    def is_last(self) -> bool:
        # total_products is authoritative; a short page alone is not proof of exhaustion
        return self.page_number * self.page_size >= self.total_products


@dataclass(frozen=True, slots=True)
class FilterConstraints:
    """Caller-supplied constraints. Every field is optional (None = unconstrained)."""

    search: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_rating: float | None = None
    max_rating: float | None = None
    min_reviews: int | None = None
    max_reviews: int | None = None
    in_stock: bool = False

    @property
    def is_unconstrained(self) -> bool:
        bounds = (
            self.min_price,
            self.max_price,
            self.min_rating,
            self.max_rating,
            self.min_reviews,
            self.max_reviews,
        )
        return not self.search and not self.in_stock and all(b is None for b in bounds)

    @property
    def has_price_bound(self) -> bool:
        return self.min_price is not None or self.max_price is not None

    def validate(self) -> None:
        """
        Validate constraint consistency.

        Raises:
            ValidationError: With one field error per offending bound
        """
        errors: list[dict[str, str]] = []

        # Guardrails: prevent float leakage past boundary
        for name in ("min_price", "max_price"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Decimal):
                errors.append(
                    {
                        "field": name,
                        "message": "Must be Decimal or None (no floats past the boundary)",
                        "code": "INVALID_TYPE",
                    }
                )
        if errors:
            raise ValidationError(errors=errors)

        for low, high in (
            ("min_price", "max_price"),
            ("min_rating", "max_rating"),
            ("min_reviews", "max_reviews"),
        ):
            low_value = getattr(self, low)
            high_value = getattr(self, high)
            if low_value is not None and high_value is not None and low_value > high_value:
                errors.append(
                    {
                        "field": low,
                        "message": f"Must be less than or equal to {high}",
                        "code": "INVALID_RANGE",
                    }
                )

        if errors:
            raise ValidationError(errors=errors)
