"""
Dependency injection for FastAPI routes.

Key principle: nothing request-scoped is cached. The HTTP client is a shared
connection pool; the catalog source and engine are built per request and
continuation state always arrives in the request body.
"""

from __future__ import annotations

import httpx
from fastapi import Depends

from catalog_filter.adapters.http_catalog_source import HttpCatalogSource
from catalog_filter.infra.catalog.client import get_http_client
from catalog_filter.infra.catalog.config import catalog_products_path
from catalog_filter.ports.catalog_source import CatalogSource
from catalog_filter.use_cases.paginate_catalog import PaginationEngine


def get_catalog_client() -> httpx.Client:
    """Shared upstream client (lazily created on first use)."""
    return get_http_client()


def get_catalog_source(client: httpx.Client = Depends(get_catalog_client)) -> CatalogSource:
    """
    Catalog source bound to the shared client.

    Args:
        client: HTTP client (injected by FastAPI via Depends(get_catalog_client))

    Returns:
        CatalogSource: HTTP-backed catalog source
    """
    return HttpCatalogSource(client=client, products_path=catalog_products_path())


def get_pagination_engine(
    catalog_source: CatalogSource = Depends(get_catalog_source),
) -> PaginationEngine:
    """
    Factory function that returns a configured PaginationEngine.

    Called per-request, so every request gets a fresh engine with no memory
    of earlier requests.
    """
    return PaginationEngine(catalog_source=catalog_source)
