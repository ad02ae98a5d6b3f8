"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "min_price",
                "message": "Must be less than or equal to max_price",
                "code": "INVALID_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Upstream failure:
            {
                "detail": "Catalog is unreachable",
                "code": "UPSTREAM_ERROR"
            }

        Validation error with field errors:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "min_rating",
                        "message": "Must be less than or equal to max_rating",
                        "code": "INVALID_RANGE"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Catalog is unreachable", "code": "UPSTREAM_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "min_price",
                            "message": "Must be less than or equal to max_price",
                            "code": "INVALID_RANGE",
                        },
                    ],
                },
            ]
        }
    )
