"""Filtered re-pagination over the upstream catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from catalog_filter.domain.continuation import ContinuationState, PageMarker
from catalog_filter.domain.errors import MalformedStateError
from catalog_filter.domain.filters import matches
from catalog_filter.domain.product import CatalogPage, FilterConstraints, Product
from catalog_filter.ports.catalog_source import CatalogSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilteredPageRequest:
    page_number: int
    page_size: int
    constraints: FilterConstraints
    prior_state: ContinuationState | None = None


@dataclass(frozen=True, slots=True)
class FilteredPageResult:
    products: list[Product]
    state: ContinuationState
    known_products: int  # Matches discovered across every output page visited so far


@dataclass(frozen=True, slots=True)
class _OutputPage:
    products: list[Product]
    next_marker: PageMarker
    exhausted: bool
    last_fetch: CatalogPage


class PaginationEngine:
    """
    Produces output page N of size S under a filter, over an upstream catalog
    that can neither filter nor hold a stable page size.

    Upstream pages are walked in order, filtering as they go, until the output
    page is full or the catalog ends. When an output page ends in the middle
    of an upstream page, the identifier of the first excess match is recorded
    so the next output page resumes exactly there.

    The engine is stateless: the caller holds the ContinuationState and
    resubmits it. A fresh state is built on every call and the prior one is
    never mutated, so an abandoned call leaves nothing half-written.
    """

    def __init__(self, catalog_source: CatalogSource) -> None:
        self._catalog_source = catalog_source

    def execute(self, request: FilteredPageRequest) -> FilteredPageResult:
        """
        Validate constraints and produce the requested output page.

        Raises:
            ValidationError: If constraint bounds are inconsistent
            FetchError: If any upstream fetch fails (prior state stays valid)
        """
        request.constraints.validate()

        return self.get_page(
            page_number=request.page_number,
            page_size=request.page_size,
            constraints=request.constraints,
            prior_state=request.prior_state,
        )

    def get_page(
        self,
        page_number: int,
        page_size: int,
        constraints: FilterConstraints,
        prior_state: ContinuationState | None = None,
    ) -> FilteredPageResult:
        # Degenerate inputs: nothing to produce, upstream cursor stays put
        if page_size <= 0 or page_number < 1:
            state = prior_state if prior_state is not None else ContinuationState.empty()
            return FilteredPageResult(products=[], state=state, known_products=state.known_products)

        state = self._resumable_state(prior_state, page_size)

        # Resume from the furthest recorded marker at or before the target page
        ordinal = min(page_number, len(state.markers))
        last_fetch: CatalogPage | None = None
        products: list[Product] = []

        while ordinal <= page_number:
            marker = state.marker_for(ordinal)
            # Past the terminal marker of an exhausted catalog: nothing left
            if marker is None or (state.completed and ordinal == len(state.markers)):
                products = []
                break

            output_page = self._fill_output_page(marker, page_size, constraints, last_fetch)
            products = output_page.products
            last_fetch = output_page.last_fetch

            if ordinal == len(state.markers):
                # Fresh state per append; the caller's state is never touched
                state = replace(
                    state,
                    markers=state.markers + (output_page.next_marker,),
                    known_products=state.known_products + len(products),
                    completed=output_page.exhausted,
                )
                logger.debug(
                    "Recorded page marker",
                    extra={
                        "filter_page": output_page.next_marker.filter_page,
                        "start_page": output_page.next_marker.start_page,
                        "next_product_id": output_page.next_marker.next_product_id,
                        "completed": state.completed,
                    },
                )

            ordinal += 1

        logger.info(
            "Filtered page produced",
            extra={
                "page_number": page_number,
                "page_size": page_size,
                "returned": len(products),
                "markers": len(state.markers),
                "known_products": state.known_products,
                "completed": state.completed,
            },
        )

        return FilteredPageResult(
            products=products,
            state=state,
            known_products=state.known_products,
        )

    def _resumable_state(
        self, prior_state: ContinuationState | None, page_size: int
    ) -> ContinuationState:
        """Prior state when it can be resumed from, otherwise a fresh start at page 1."""
        has_prior_state = prior_state is not None and prior_state.has_markers
        if not has_prior_state:
            return ContinuationState.initial(page_size)

        try:
            prior_state.validate(page_size)
        except MalformedStateError as exc:
            # Availability over strictness: restart instead of rejecting the request
            logger.warning(
                "Discarding malformed continuation state",
                extra={"reason": exc.message, "context": exc.context},
            )
            return ContinuationState.initial(page_size)

        return prior_state

    def _fill_output_page(
        self,
        marker: PageMarker,
        page_size: int,
        constraints: FilterConstraints,
        last_fetch: CatalogPage | None,
    ) -> _OutputPage:
        """
        Walk upstream pages from `marker` until `page_size` matches or the end.

        Stops as soon as the buffer first reaches page_size, so any excess
        always lies inside the upstream page fetched last.
        """
        buffer: list[Product] = []
        upstream_page = marker.start_page
        skip_until_id = marker.next_product_id

        while True:
            if last_fetch is not None and last_fetch.page_number == upstream_page:
                page = last_fetch
            else:
                page = self._fetch(upstream_page, page_size)
                last_fetch = page

            for product in page.products:
                is_match, still_skipping = matches(product, constraints, skip_until_id)
                if not still_skipping:
                    skip_until_id = None
                if is_match:
                    buffer.append(product)

            if skip_until_id is not None:
                logger.warning(
                    "Resume product not found in upstream page",
                    extra={"product_id": skip_until_id, "upstream_page": upstream_page},
                )
            # Resume applies to the first upstream page only
            skip_until_id = None

            upstream_page += 1
            is_last = page.is_last

            if len(buffer) >= page_size or is_last:
                break

        next_filter_page = marker.filter_page + 1

        if len(buffer) > page_size:
            # Boundary falls inside the page just fetched; it will be revisited
            next_marker = PageMarker(
                next_product_id=buffer[page_size].id,
                start_page=upstream_page - 1,
                filter_page=next_filter_page,
                page_size=page_size,
            )
            del buffer[page_size:]
            exhausted = False
        else:
            next_marker = PageMarker(
                next_product_id=None,
                start_page=upstream_page,
                filter_page=next_filter_page,
                page_size=page_size,
            )
            exhausted = is_last

        return _OutputPage(
            products=buffer,
            next_marker=next_marker,
            exhausted=exhausted,
            last_fetch=last_fetch,
        )

    def _fetch(self, page_number: int, page_size: int) -> CatalogPage:
        logger.debug(
            "Fetching upstream page",
            extra={"upstream_page": page_number, "page_size": page_size},
        )
        return self._catalog_source.fetch_page(page_number, page_size)
