"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "residual",
                "message": "Residual must not exceed 30% of price (30000.00)",
                "code": "RESIDUAL_TOO_HIGH",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)

    Examples:
        Simple error:
            {
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "residual",
                        "message": "Residual must not exceed 30% of price (30000.00)",
                        "code": "RESIDUAL_TOO_HIGH"
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
                {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "residual",
                            "message": "Residual must not exceed 30% of price (30000.00)",
                            "code": "RESIDUAL_TOO_HIGH",
                        },
                        {
                            "field": "down_payment",
                            "message": (
                                "For 12 months the minimum down payment is "
                                "10% of price (10000.00)"
                            ),
                            "code": "DOWN_PAYMENT_TOO_LOW",
                        },
                    ],
                },
            ]
        }
    )
