"""
Test suite for POST /v1/filter/{page_number}/{page_size}.

Verifies the HTTP endpoint behavior:
- Path and body parsing/validation
- Delegation to the pagination engine via dependency injection
- Continuation state round-trips through the response
- Domain errors become structured HTTP errors
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from catalog_filter.adapters.in_memory_catalog_source import InMemoryCatalogSource
from catalog_filter.domain.continuation import ContinuationState
from catalog_filter.domain.errors import FetchError
from catalog_filter.domain.product import Product
from catalog_filter.entrypoints.http.dependencies import get_pagination_engine
from catalog_filter.entrypoints.http.exception_handlers import register_exception_handlers
from catalog_filter.entrypoints.http.routes.filter import router
from catalog_filter.use_cases.paginate_catalog import (
    FilteredPageRequest,
    FilteredPageResult,
    PaginationEngine,
)


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the filter router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def catalog() -> list[Product]:
    """Seven products; P2 and P5 are out of stock."""
    return [
        Product(
            id=f"P{i}",
            name=f"Desk Lamp {i}",
            price=f"${i * 10}.00",
            rating=3.0 + (i % 3),
            review_count=i * 5,
            in_stock=i not in (2, 5),
        )
        for i in range(1, 8)
    ]


@pytest.fixture
def source(app: FastAPI, catalog: list[Product]) -> InMemoryCatalogSource:
    in_memory = InMemoryCatalogSource(catalog)
    app.dependency_overrides[get_pagination_engine] = lambda: PaginationEngine(in_memory)
    return in_memory


# ==============================================================================
# Happy Path
# ==============================================================================


def test_first_page_without_body(client: TestClient, source: InMemoryCatalogSource) -> None:
    response = client.post("/v1/filter/1/3")

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data["products"]] == ["P1", "P2", "P3"]
    assert data["total"] == 3
    assert data["page_number"] == 1
    assert data["page_size"] == 3
    assert data["status"] == 200
    assert data["state"]["version"] == 1
    assert data["state"]["completed"] is False
    assert data["state"]["markers"][1] == {
        "next_product_id": None,
        "start_page": 2,
        "filter_page": 2,
        "page_size": 3,
    }


def test_response_is_not_cacheable(client: TestClient, source: InMemoryCatalogSource) -> None:
    response = client.post("/v1/filter/1/3", json={})

    assert response.headers["cache-control"] == "no-cache"


def test_product_fields_are_returned(client: TestClient, source: InMemoryCatalogSource) -> None:
    response = client.post("/v1/filter/1/1", json={})

    assert response.json()["products"][0] == {
        "id": "P1",
        "name": "Desk Lamp 1",
        "short_description": "",
        "long_description": "",
        "price": "$10.00",
        "rating": 4.0,
        "review_count": 5,
        "in_stock": True,
    }


def test_resubmitted_state_walks_the_filtered_catalog(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    filters = {"in_stock": True}

    first = client.post("/v1/filter/1/3", json={"filters": filters}).json()
    second = client.post(
        "/v1/filter/2/3", json={"filters": filters, "state": first["state"]}
    ).json()
    third = client.post(
        "/v1/filter/3/3", json={"filters": filters, "state": second["state"]}
    ).json()

    assert [p["id"] for p in first["products"]] == ["P1", "P3", "P4"]
    assert first["state"]["markers"][1]["next_product_id"] == "P6"
    assert [p["id"] for p in second["products"]] == ["P6", "P7"]
    assert second["state"]["completed"] is True
    assert second["total"] == 5
    assert third["products"] == []
    assert third["state"] == second["state"]


def test_price_and_search_filters_are_applied(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    response = client.post(
        "/v1/filter/1/10",
        json={"filters": {"search": "LAMP", "min_price": "20.00", "max_price": "40"}},
    )

    assert [p["id"] for p in response.json()["products"]] == ["P2", "P3", "P4"]


def test_zero_page_size_returns_empty_page(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    response = client.post("/v1/filter/1/0")

    assert response.status_code == 200
    assert response.json()["products"] == []
    assert source.fetches == []


def test_negative_page_number_returns_empty_page(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    response = client.post("/v1/filter/-1/3")

    assert response.status_code == 200
    assert response.json()["products"] == []
    assert source.fetches == []


def test_state_from_other_page_size_restarts(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    first = client.post("/v1/filter/1/2").json()

    response = client.post("/v1/filter/2/3", json={"state": first["state"]})

    assert [p["id"] for p in response.json()["products"]] == ["P4", "P5", "P6"]
    assert response.json()["state"]["markers"][0]["page_size"] == 3


# ==============================================================================
# Delegation
# ==============================================================================


def test_route_maps_body_to_domain_request(app: FastAPI, client: TestClient) -> None:
    engine = Mock()
    engine.execute.return_value = FilteredPageResult(
        products=[], state=ContinuationState(), known_products=0
    )
    app.dependency_overrides[get_pagination_engine] = lambda: engine

    client.post(
        "/v1/filter/4/5",
        json={
            "filters": {"max_price": "9.99", "min_reviews": 3},
            "state": {"markers": [{"start_page": 1, "filter_page": 1, "page_size": 5}]},
        },
    )

    engine.execute.assert_called_once()
    request: FilteredPageRequest = engine.execute.call_args.args[0]
    assert request.page_number == 4
    assert request.page_size == 5
    assert str(request.constraints.max_price) == "9.99"
    assert request.constraints.min_reviews == 3
    assert request.prior_state is not None
    assert request.prior_state.markers[0].start_page == 1


# ==============================================================================
# Validation and Errors
# ==============================================================================


@pytest.mark.parametrize("page_size", [31, -1])
def test_page_size_out_of_range_returns_422(
    client: TestClient, source: InMemoryCatalogSource, page_size: int
) -> None:
    response = client.post(f"/v1/filter/1/{page_size}")

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "page_size"


def test_invalid_price_format_returns_422(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    response = client.post("/v1/filter/1/3", json={"filters": {"min_price": "abc"}})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "filters.min_price"


def test_inverted_range_returns_422_with_field_errors(
    client: TestClient, source: InMemoryCatalogSource
) -> None:
    response = client.post(
        "/v1/filter/1/3", json={"filters": {"min_rating": 4.5, "max_rating": 2}}
    )

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "min_rating"
    assert data["errors"][0]["code"] == "INVALID_RANGE"
    assert source.fetches == []


def test_upstream_failure_returns_502(app: FastAPI, client: TestClient) -> None:
    engine = Mock()
    engine.execute.side_effect = FetchError("Catalog is unreachable", page_number=2)
    app.dependency_overrides[get_pagination_engine] = lambda: engine

    response = client.post("/v1/filter/1/3")

    assert response.status_code == 502
    assert response.json() == {"detail": "Catalog is unreachable", "code": "UPSTREAM_ERROR"}
