from __future__ import annotations

from decimal import Decimal

import pytest

from catalog_filter.domain.errors import ValidationError
from catalog_filter.domain.product import CatalogPage, FilterConstraints


# ==============================================================================
# CatalogPage
# ==============================================================================


@pytest.mark.parametrize(
    ("page_number", "page_size", "total", "expected"),
    [
        (1, 3, 7, False),
        (2, 3, 7, False),
        (3, 3, 7, True),
        (2, 3, 6, True),  # exact multiple
        (1, 5, 0, True),  # empty catalog
        (4, 3, 7, True),  # past the end
    ],
)
def test_is_last_uses_total_count(
    page_number: int, page_size: int, total: int, expected: bool
) -> None:
    page = CatalogPage(
        products=(), page_number=page_number, page_size=page_size, total_products=total
    )

    assert page.is_last is expected


# ==============================================================================
# FilterConstraints
# ==============================================================================


def test_default_constraints_are_unconstrained() -> None:
    assert FilterConstraints().is_unconstrained is True
    assert FilterConstraints(search="").is_unconstrained is True


@pytest.mark.parametrize(
    "constraints",
    [
        FilterConstraints(search="lamp"),
        FilterConstraints(min_price=Decimal("0")),
        FilterConstraints(max_reviews=0),
        FilterConstraints(in_stock=True),
    ],
)
def test_any_constraint_makes_filter_constrained(constraints: FilterConstraints) -> None:
    assert constraints.is_unconstrained is False


def test_validate_accepts_consistent_bounds() -> None:
    FilterConstraints(
        min_price=Decimal("10"),
        max_price=Decimal("10"),
        min_rating=1,
        max_rating=5,
        min_reviews=0,
        max_reviews=10,
    ).validate()


def test_validate_reports_every_inverted_range() -> None:
    constraints = FilterConstraints(
        min_price=Decimal("20"),
        max_price=Decimal("10"),
        min_rating=5,
        max_rating=1,
    )

    with pytest.raises(ValidationError) as exc_info:
        constraints.validate()

    assert exc_info.value.errors is not None
    assert [e["field"] for e in exc_info.value.errors] == ["min_price", "min_rating"]
    assert {e["code"] for e in exc_info.value.errors} == {"INVALID_RANGE"}


def test_validate_rejects_float_price_bounds() -> None:
    with pytest.raises(ValidationError) as exc_info:
        FilterConstraints(min_price=9.99).validate()  # type: ignore[arg-type]

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["field"] == "min_price"
    assert exc_info.value.errors[0]["code"] == "INVALID_TYPE"
