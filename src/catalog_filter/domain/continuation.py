"""Caller-held continuation state.

The server keeps no session memory: everything needed to resume at the next
output page travels in this structure, which the caller resubmits verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog_filter.domain.errors import MalformedStateError

STATE_VERSION = 1


@dataclass(frozen=True, slots=True)
class PageMarker:
    """Where in the upstream catalog output page `filter_page` begins."""

    next_product_id: str | None  # None = start of the upstream page
    start_page: int
    filter_page: int
    page_size: int


@dataclass(frozen=True, slots=True)
class ContinuationState:
    """
    Ordered page markers plus bookkeeping.

    markers[0] describes output page 1 and is always the start of the
    catalog. Once `completed` is set the last marker is terminal: it points
    past the end of the catalog and no marker is ever appended after it.
    """

    markers: tuple[PageMarker, ...] = ()
    known_products: int = 0
    completed: bool = False
    version: int = STATE_VERSION

    @classmethod
    def empty(cls) -> ContinuationState:
        return cls()

    @classmethod
    def initial(cls, page_size: int) -> ContinuationState:
        return cls(
            markers=(
                PageMarker(next_product_id=None, start_page=1, filter_page=1, page_size=page_size),
            )
        )

    @property
    def has_markers(self) -> bool:
        return bool(self.markers)

    def marker_for(self, page_number: int) -> PageMarker | None:
        """Marker where output page `page_number` begins, or None if not yet recorded."""
        if 1 <= page_number <= len(self.markers):
            return self.markers[page_number - 1]
        return None

    def validate(self, page_size: int) -> None:
        """
        Check the state can be resumed under `page_size`.

        Raises:
            MalformedStateError: Unknown version, gapped or out-of-order
                markers, a marker recorded under another page size, or a first
                marker that does not start at the beginning of the catalog.
        """
        if self.version != STATE_VERSION:
            raise MalformedStateError(
                f"Unsupported state version {self.version}", version=self.version
            )
        if self.known_products < 0:
            raise MalformedStateError("known_products must be >= 0")
        if self.completed and not self.markers:
            raise MalformedStateError("Completed state without markers")

        for index, marker in enumerate(self.markers):
            if marker.filter_page != index + 1:
                raise MalformedStateError(
                    "Marker sequence has a gap", expected=index + 1, found=marker.filter_page
                )
            if marker.page_size != page_size:
                raise MalformedStateError(
                    "Marker recorded under a different page size",
                    expected=page_size,
                    found=marker.page_size,
                )
            if marker.start_page < 1:
                raise MalformedStateError("Marker start_page must be >= 1")

        first = self.markers[0] if self.markers else None
        if first is not None and (first.start_page != 1 or first.next_product_id is not None):
            raise MalformedStateError("First marker must start at the beginning of the catalog")
