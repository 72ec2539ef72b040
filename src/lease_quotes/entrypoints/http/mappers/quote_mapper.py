from __future__ import annotations

from decimal import Decimal, InvalidOperation

from lease_quotes.domain.errors import ValidationError
from lease_quotes.domain.quote import Quote
from lease_quotes.domain.quote_input import QuoteInput
from lease_quotes.entrypoints.http.dtos.quotes import QuoteRequestDTO, QuoteResponseDTO
from lease_quotes.use_cases.calculate_quote import QuoteRequest

_DECIMAL_FIELDS = ("price", "down_payment", "residual", "annual_rate")


class QuoteMapper:
    """Maps between REST DTOs and domain models for quotes."""

    @staticmethod
    def to_domain_request(dto: QuoteRequestDTO) -> QuoteRequest:
        """
        Converts request DTO to a domain QuoteRequest.

        Handles string → Decimal conversion at the boundary. Business rules
        are not checked here; that is the use case's job.

        Raises:
            ValidationError: If string values cannot be converted to valid Decimals
        """
        errors = []
        values: dict[str, Decimal] = {}

        for field in _DECIMAL_FIELDS:
            raw = getattr(dto, field)
            try:
                values[field] = Decimal(raw)
            except (InvalidOperation, ValueError):
                errors.append(
                    {
                        "field": field,
                        "message": f"Must be a valid decimal: {raw}",
                        "code": "INVALID_DECIMAL",
                    }
                )

        if errors:
            raise ValidationError(errors=errors)

        return QuoteRequest(
            client_name=dto.client_name,
            quote_input=QuoteInput(
                price=values["price"],
                down_payment=values["down_payment"],
                term_months=dto.term_months,
                residual=values["residual"],
                annual_rate=values["annual_rate"],
            ),
        )

    @staticmethod
    def to_response(quote: Quote) -> QuoteResponseDTO:
        """Converts a domain Quote to response DTO (Decimal → string)."""
        return QuoteResponseDTO(
            id=str(quote.id),
            client_id=str(quote.client.id),
            client_name=quote.client_name,
            price=str(quote.price),
            down_payment=str(quote.down_payment),
            term_months=quote.term_months,
            residual=str(quote.residual),
            annual_rate=str(quote.annual_rate),
            monthly_payment=str(quote.monthly_payment),
            total_payment=str(quote.total_payment),
        )
