from __future__ import annotations

from decimal import Decimal

from catalog_filter.domain.continuation import ContinuationState, PageMarker
from catalog_filter.domain.product import FilterConstraints, Product
from catalog_filter.entrypoints.http.dtos.filtered_page import (
    ContinuationStateDTO,
    FilterConstraintsDTO,
    FilteredPageResponseDTO,
    FilterPageRequestDTO,
    PageMarkerDTO,
    ProductResponseDTO,
)
from catalog_filter.use_cases.paginate_catalog import FilteredPageRequest, FilteredPageResult


class FilteredPageMapper:
    """Maps between REST DTOs and domain models for filtered pagination."""

    @staticmethod
    def to_domain_constraints(dto: FilterConstraintsDTO) -> FilterConstraints:
        """
        Converts the filters payload to domain constraints, handling Decimal conversion.

        Args:
            dto: Filters from the request body

        Returns:
            FilterConstraints: Domain constraints with Decimal prices
        """
        return FilterConstraints(
            search=dto.search or None,
            min_price=Decimal(dto.min_price) if dto.min_price else None,
            max_price=Decimal(dto.max_price) if dto.max_price else None,
            min_rating=dto.min_rating,
            max_rating=dto.max_rating,
            min_reviews=dto.min_reviews,
            max_reviews=dto.max_reviews,
            in_stock=dto.in_stock,
        )

    @staticmethod
    def to_domain_state(dto: ContinuationStateDTO | None) -> ContinuationState | None:
        """Structural conversion only; resumability is judged by the engine."""
        if dto is None:
            return None

        return ContinuationState(
            markers=tuple(
                PageMarker(
                    next_product_id=marker.next_product_id,
                    start_page=marker.start_page,
                    filter_page=marker.filter_page,
                    page_size=marker.page_size,
                )
                for marker in dto.markers
            ),
            known_products=dto.known_products,
            completed=dto.completed,
            version=dto.version,
        )

    @staticmethod
    def to_domain_request(
        page_number: int, page_size: int, dto: FilterPageRequestDTO
    ) -> FilteredPageRequest:
        return FilteredPageRequest(
            page_number=page_number,
            page_size=page_size,
            constraints=FilteredPageMapper.to_domain_constraints(dto.filters),
            prior_state=FilteredPageMapper.to_domain_state(dto.state),
        )

    @staticmethod
    def to_state_dto(state: ContinuationState) -> ContinuationStateDTO:
        return ContinuationStateDTO(
            version=state.version,
            markers=[
                PageMarkerDTO(
                    next_product_id=marker.next_product_id,
                    start_page=marker.start_page,
                    filter_page=marker.filter_page,
                    page_size=marker.page_size,
                )
                for marker in state.markers
            ],
            known_products=state.known_products,
            completed=state.completed,
        )

    @staticmethod
    def to_product_response(product: Product) -> ProductResponseDTO:
        return ProductResponseDTO(
            id=product.id,
            name=product.name,
            short_description=product.short_description,
            long_description=product.long_description,
            price=product.price,  # Echoed as served upstream
            rating=product.rating,
            review_count=product.review_count,
            in_stock=product.in_stock,
        )

    @staticmethod
    def to_response(
        result: FilteredPageResult,
        page_number: int,
        page_size: int,
        status: int = 200,
    ) -> FilteredPageResponseDTO:
        """
        Converts the engine result to the REST response.

        Args:
            result: Output page and updated continuation state
            page_number: Requested output page (echoed)
            page_size: Requested page size (echoed)
            status: Status code reported in the body

        Returns:
            FilteredPageResponseDTO: Products, counters and state to resubmit
        """
        return FilteredPageResponseDTO(
            products=[FilteredPageMapper.to_product_response(p) for p in result.products],
            total=result.known_products,
            page_number=page_number,
            page_size=page_size,
            status=status,
            state=FilteredPageMapper.to_state_dto(result.state),
        )
