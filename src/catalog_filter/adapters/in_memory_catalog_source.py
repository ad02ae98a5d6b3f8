from __future__ import annotations

from catalog_filter.domain.product import CatalogPage, Product
from catalog_filter.ports.catalog_source import CatalogSource


class InMemoryCatalogSource(CatalogSource):
    """
    Canonical contract implementation for tests and local runs.

    - Stores products in insertion order
    - Slices fixed-size pages with 1-based numbering
    - Reports the full catalog size as total_products
    - Records every fetch so callers can assert on upstream traffic
    """

    def __init__(self, products: list[Product]) -> None:
        self._products = list(products)
        self.fetches: list[tuple[int, int]] = []

    def fetch_page(self, page_number: int, page_size: int) -> CatalogPage:
        self.fetches.append((page_number, page_size))

        start = (page_number - 1) * page_size
        end = start + page_size
        page_products = self._products[start:end] if start >= 0 else []

        return CatalogPage(
            products=tuple(page_products),
            page_number=page_number,
            page_size=page_size,
            total_products=len(self._products),
        )
