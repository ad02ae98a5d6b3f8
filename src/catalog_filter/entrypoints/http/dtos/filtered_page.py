from pydantic import BaseModel, ConfigDict, Field

DECIMAL_PATTERN = r"^\d+(\.\d{1,2})?$"


class ProductResponseDTO(BaseModel):
    id: str
    name: str
    short_description: str
    long_description: str
    price: str
    rating: float | None = None
    review_count: int | None = None
    in_stock: bool


class FilterConstraintsDTO(BaseModel):
    """Filter constraints. Every field is optional; all present fields are ANDed."""

    search: str | None = Field(
        default=None,
        description="Case-insensitive substring of name, short or long description",
        examples=["headphones"],
    )
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["10.00"],
        pattern=DECIMAL_PATTERN,
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["99.99"],
        pattern=DECIMAL_PATTERN,
    )
    min_rating: float | None = Field(default=None, description="Minimum average rating (inclusive)", ge=0)
    max_rating: float | None = Field(default=None, description="Maximum average rating (inclusive)", ge=0)
    min_reviews: int | None = Field(default=None, description="Minimum review count (inclusive)", ge=0)
    max_reviews: int | None = Field(default=None, description="Maximum review count (inclusive)", ge=0)
    in_stock: bool = Field(default=False, description="Only products currently in stock")


class PageMarkerDTO(BaseModel):
    next_product_id: str | None = None
    start_page: int
    filter_page: int
    page_size: int


class ContinuationStateDTO(BaseModel):
    """Opaque to callers: resubmit exactly as received to continue paging."""

    version: int = 1
    markers: list[PageMarkerDTO] = Field(default_factory=list)
    known_products: int = 0
    completed: bool = False


class FilterPageRequestDTO(BaseModel):
    """Request body for a filtered page."""

    filters: FilterConstraintsDTO = Field(default_factory=FilterConstraintsDTO)
    state: ContinuationStateDTO | None = Field(
        default=None,
        description="State returned by the previous call; omit to start from page 1",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filters": {
                    "search": "wireless",
                    "min_price": "10.00",
                    "max_price": "99.99",
                    "min_rating": 4,
                    "in_stock": True,
                },
                "state": None,
            }
        }
    )


class FilteredPageResponseDTO(BaseModel):
    products: list[ProductResponseDTO]
    total: int = Field(description="Matching products discovered so far")
    page_number: int
    page_size: int
    status: int
    state: ContinuationStateDTO
