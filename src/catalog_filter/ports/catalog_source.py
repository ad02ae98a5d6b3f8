from __future__ import annotations

from abc import ABC, abstractmethod

from catalog_filter.domain.product import CatalogPage


class CatalogSource(ABC):
    """
    Port for the upstream paginated product catalog.

    The upstream offers no filtering and is read one fixed-size page at a time.
    Implementations do no filtering of their own.

    Contract:
        - page_number is 1-based; page_size is 0..30
        - The returned CatalogPage carries the catalog-wide total product count
        - Any transport or decoding failure raises FetchError
    """

    @abstractmethod
    def fetch_page(self, page_number: int, page_size: int) -> CatalogPage:
        """
        Fetch one upstream page.

        Args:
            page_number: 1-based upstream page number
            page_size: Products per upstream page

        Returns:
            CatalogPage with the products and the total catalog size

        Raises:
            FetchError: If the upstream cannot be reached or decoded
        """
        ...
