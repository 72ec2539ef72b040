from pydantic import BaseModel, ConfigDict, Field

# Signed values pass the shape check; positivity is a business rule.
_MONEY_PATTERN = r"^-?\d{1,15}(\.\d{1,2})?$"
_RATE_PATTERN = r"^-?\d{1,6}(\.\d{1,12})?$"


class QuoteRequestDTO(BaseModel):
    """Request payload for calculating or saving a lease quote."""

    client_name: str = Field(
        description="Name of the client requesting the quote",
        examples=["ACME"],
    )
    price: str = Field(
        description="Asset price as decimal string",
        examples=["100000.00"],
        pattern=_MONEY_PATTERN,
    )
    down_payment: str = Field(
        description="Down payment amount as decimal string",
        examples=["10000.00"],
        pattern=_MONEY_PATTERN,
    )
    term_months: int = Field(
        description="Lease term in months",
        examples=[12],
    )
    residual: str = Field(
        description="Residual value at the end of the term as decimal string",
        examples=["20000.00"],
        pattern=_MONEY_PATTERN,
    )
    annual_rate: str = Field(
        description="Annual interest rate as decimal fraction string (e.g., '0.12' = 12%)",
        examples=["0.12"],
        pattern=_RATE_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client_name": "ACME",
                "price": "100000.00",
                "down_payment": "10000.00",
                "term_months": 12,
                "residual": "20000.00",
                "annual_rate": "0.12",
            }
        }
    )


class QuoteResponseDTO(BaseModel):
    """A priced lease quote."""

    id: str = Field(description="Quote identifier (UUID)")
    client_id: str = Field(description="Client reference identifier (UUID)")
    client_name: str = Field(description="Client name", examples=["ACME"])
    price: str = Field(description="Asset price as decimal string", examples=["100000.00"])
    down_payment: str = Field(description="Down payment as decimal string", examples=["10000.00"])
    term_months: int = Field(description="Lease term in months", examples=[12])
    residual: str = Field(description="Residual value as decimal string", examples=["20000.00"])
    annual_rate: str = Field(description="Annual interest rate as decimal string", examples=["0.12"])
    monthly_payment: str = Field(
        description="Monthly payment as decimal string", examples=["9573.37"]
    )
    total_payment: str = Field(
        description="Total paid over the term (monthly_payment × term_months)",
        examples=["114880.44"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0b6e5c1e-4d0a-4f43-9f5e-3f0a4b6b2a10",
                "client_id": "5a4f3c2b-1d0e-4f9a-8b7c-6d5e4f3a2b1c",
                "client_name": "ACME",
                "price": "100000.00",
                "down_payment": "10000.00",
                "term_months": 12,
                "residual": "20000.00",
                "annual_rate": "0.12",
                "monthly_payment": "9573.37",
                "total_payment": "114880.44",
            }
        }
    )
