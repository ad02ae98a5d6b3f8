from fastapi import APIRouter, Depends, Path, Response

from catalog_filter.entrypoints.http.dependencies import get_pagination_engine
from catalog_filter.entrypoints.http.dtos.filtered_page import (
    FilteredPageResponseDTO,
    FilterPageRequestDTO,
)
from catalog_filter.entrypoints.http.error_responses import ErrorResponse
from catalog_filter.entrypoints.http.mappers.filtered_page_mapper import FilteredPageMapper
from catalog_filter.use_cases.paginate_catalog import PaginationEngine


router = APIRouter(tags=["Filter"])


@router.post(
    "/filter/{page_number}/{page_size}",
    response_model=FilteredPageResponseDTO,
    summary="Get a filtered page of the catalog",
    description="""
    Returns output page `page_number` of `page_size` products matching the filters.

    ## Filters
    - All filters use AND semantics
    - search: case-insensitive substring of name or descriptions
    - price/rating/reviews: inclusive ranges
    - in_stock: only products in stock

    ## Continuation state
    - The response carries a `state` object
    - Send it back unchanged in the next request to resume without rescanning
    - Omit it (or send one from another page size) to start from page 1

    ## Example
    ```
    POST /v1/filter/2/10
    {"filters": {"search": "lamp", "max_price": "50.00"}, "state": {...}}
    ```
    """,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        502: {"model": ErrorResponse, "description": "Upstream catalog unavailable"},
    },
)
def filter_catalog(
    response: Response,
    page_number: int = Path(description="1-based output page; values < 1 return no products"),
    page_size: int = Path(ge=0, le=30, description="Products per output page (0-30)"),
    payload: FilterPageRequestDTO | None = None,
    engine: PaginationEngine = Depends(get_pagination_engine),
) -> FilteredPageResponseDTO:
    """Filter endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request (string → Decimal, DTO → state)
    request = FilteredPageMapper.to_domain_request(
        page_number, page_size, payload or FilterPageRequestDTO()
    )

    # 2. Execute use case
    result = engine.execute(request)

    # 3. Map to response; state changes on every call
    response.headers["Cache-Control"] = "no-cache"
    return FilteredPageMapper.to_response(
        result=result,
        page_number=page_number,
        page_size=page_size,
    )
