"""HTTP implementation of CatalogSource."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from catalog_filter.domain.errors import FetchError
from catalog_filter.domain.product import CatalogPage, Product
from catalog_filter.infra.catalog.payloads import UpstreamCatalogPage, UpstreamProduct
from catalog_filter.ports.catalog_source import CatalogSource

logger = logging.getLogger(__name__)


class HttpCatalogSource(CatalogSource):
    """
    Reads the upstream catalog over HTTP.

    - One GET per upstream page: `{products_path}?page=N&pageSize=S`
    - Non-2xx statuses, transport errors and undecodable bodies raise FetchError
    - Converts UpstreamCatalogPage (infrastructure) to CatalogPage (domain)
    """

    def __init__(self, client: httpx.Client, products_path: str = "/products") -> None:
        """
        Initialize the source with an HTTP client.

        Args:
            client: httpx client already bound to the catalog base URL
            products_path: Path of the paginated products listing
        """
        self._client = client
        self._products_path = products_path

    def fetch_page(self, page_number: int, page_size: int) -> CatalogPage:
        params = {"page": page_number, "pageSize": page_size}

        try:
            response = self._client.get(self._products_path, params=params)
            response.raise_for_status()
            payload = UpstreamCatalogPage.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            self._log_failure(page_number, page_size, exc)
            raise FetchError(
                f"Catalog responded with HTTP {exc.response.status_code}",
                page_number=page_number,
                upstream_status=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            self._log_failure(page_number, page_size, exc)
            raise FetchError("Catalog is unreachable", page_number=page_number) from exc
        except (ValueError, PydanticValidationError) as exc:
            # response.json() raises ValueError (JSONDecodeError) on non-JSON bodies
            self._log_failure(page_number, page_size, exc)
            raise FetchError("Catalog returned a malformed page", page_number=page_number) from exc

        return self._to_domain(payload, page_number, page_size)

    def _log_failure(self, page_number: int, page_size: int, exc: Exception) -> None:
        logger.error(
            "Catalog fetch failed",
            extra={
                "page_number": page_number,
                "page_size": page_size,
                "error_type": type(exc).__name__,
                "message": str(exc),
            },
        )

    def _to_domain(
        self, payload: UpstreamCatalogPage, page_number: int, page_size: int
    ) -> CatalogPage:
        """
        Convert the wire payload into a domain page.

        The echoed page number and size drive the exhaustion arithmetic; a
        zero echo falls back to what was requested.
        """
        return CatalogPage(
            products=tuple(self._to_product(item) for item in payload.products),
            page_number=payload.page or page_number,
            page_size=payload.page_size or page_size,
            total_products=payload.total_products,
        )

    def _to_product(self, item: UpstreamProduct) -> Product:
        return Product(
            id=item.id,
            name=item.name,
            short_description=item.short_description or "",
            long_description=item.long_description or "",
            price=item.price or "",
            rating=item.rating,
            review_count=item.review_count,
            in_stock=item.in_stock,
        )
