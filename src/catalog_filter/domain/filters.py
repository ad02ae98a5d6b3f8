"""Per-product filter predicate.

Every constraint dimension is an independent check that passes when its
bound is absent; a product matches only when all checks pass.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from catalog_filter.domain.product import FilterConstraints, Product


def parse_price(raw: str | None) -> Decimal | None:
    """
    Parse an upstream price field into a Decimal.

    Tolerates a single leading currency symbol ("$12.99", "€5"). Returns None
    when the field is empty or not a number after stripping.
    """
    if raw is None:
        return None

    text = str(raw).strip()
    if text and not text[0].isdigit() and text[0] not in "+-.":
        text = text[1:].strip()
    if not text:
        return None

    try:
        price = Decimal(text)
    except InvalidOperation:
        return None

    return price if price.is_finite() else None


def matches(
    product: Product,
    constraints: FilterConstraints,
    skip_until_id: str | None = None,
) -> tuple[bool, bool]:
    """
    Evaluate one product against the constraints.

    Args:
        product: Product under test
        constraints: Caller constraints (AND semantics)
        skip_until_id: Resume identifier; products before it are rejected

    Returns:
        (is_match, still_skipping). While scanning toward the resume
        identifier the product is rejected and skipping continues. The product
        carrying the resume identifier ends the skip and is evaluated normally.
    """
    if skip_until_id is not None and product.id != skip_until_id:
        return False, True

    return _satisfies(product, constraints), False


def _satisfies(product: Product, constraints: FilterConstraints) -> bool:
    if constraints.is_unconstrained:
        return True

    return (
        _matches_search(product, constraints.search)
        and _matches_price(product, constraints)
        and _in_range(product.rating, constraints.min_rating, constraints.max_rating)
        and _in_range(product.review_count, constraints.min_reviews, constraints.max_reviews)
        and (not constraints.in_stock or product.in_stock)
    )


def _matches_search(product: Product, search: str | None) -> bool:
    if not search:
        return True

    needle = search.lower()
    return any(
        needle in (text or "").lower()
        for text in (product.name, product.short_description, product.long_description)
    )


def _matches_price(product: Product, constraints: FilterConstraints) -> bool:
    if not constraints.has_price_bound:
        return True

    # Unparseable prices never satisfy a requested bound
    price = parse_price(product.price)
    if price is None:
        return False

    return _in_range(price, constraints.min_price, constraints.max_price)


def _in_range(value, low, high) -> bool:
    """Inclusive range check; absent bounds pass, absent values fail any bound."""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True
