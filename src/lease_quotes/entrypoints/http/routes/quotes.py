from urllib.parse import quote as url_quote

from fastapi import APIRouter, Depends, Request, Response, status

from lease_quotes.entrypoints.http.dependencies import (
    get_calculate_quote_use_case,
    get_list_client_quotes_use_case,
    get_save_quote_use_case,
)
from lease_quotes.entrypoints.http.dtos.quotes import QuoteRequestDTO, QuoteResponseDTO
from lease_quotes.entrypoints.http.error_responses import ErrorResponse
from lease_quotes.entrypoints.http.mappers.quote_mapper import QuoteMapper
from lease_quotes.use_cases.calculate_quote import CalculateQuote
from lease_quotes.use_cases.list_client_quotes import ListClientQuotes
from lease_quotes.use_cases.save_quote import SaveQuote


router = APIRouter(tags=["Quotes"])

_RULE_VIOLATION_RESPONSE = {
    "model": ErrorResponse,
    "description": "One or more business rules were violated",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "residual",
                        "message": "Residual must not exceed 30% of price (30000.00)",
                        "code": "RESIDUAL_TOO_HIGH",
                    }
                ],
            }
        }
    },
}


@router.post(
    "/quotes/calculate",
    response_model=QuoteResponseDTO,
    summary="Calculate lease quote",
    description="""
    Price a lease quote without storing it.

    ## Business Rules
    - Client name is required
    - Price must be greater than zero
    - Residual may not exceed 30% of price
    - Minimum down payment by term: 12 months → 10%, 13-24 months → 7.5%,
      25 months or more → 5%
    - Term and annual rate must be greater than zero

    Every violated rule is reported at once (400).

    ## Calculation
    - Monthly payment uses the PMT formula with periodic rate = annual_rate / 12,
      financed amount = price - down_payment and the residual as future value
    - Monthly payment is rounded to cents (half-even)
    - Total payment = monthly_payment × term_months
    """,
    responses={400: _RULE_VIOLATION_RESPONSE},
)
def calculate_quote(
    payload: QuoteRequestDTO,
    use_case: CalculateQuote = Depends(get_calculate_quote_use_case),
) -> QuoteResponseDTO:
    """Calculate quote endpoint following parse → execute → map → return pattern."""
    request = QuoteMapper.to_domain_request(payload)

    quote = use_case.execute(request)

    return QuoteMapper.to_response(quote)


@router.post(
    "/quotes",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Save lease quote",
    description="""
    Price a lease quote and store it under the client's name.

    Applies the same rules as `/quotes/calculate`. On success the response
    has no body; the `Location` header points at the client's quote list.
    """,
    responses={
        201: {"description": "Quote stored; see Location header"},
        400: _RULE_VIOLATION_RESPONSE,
    },
)
def save_quote(
    payload: QuoteRequestDTO,
    request: Request,
    use_case: SaveQuote = Depends(get_save_quote_use_case),
) -> Response:
    domain_request = QuoteMapper.to_domain_request(payload)

    quote = use_case.execute(domain_request)

    location = f"{request.url.path.rstrip('/')}/{url_quote(quote.client_name, safe='')}"
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.get(
    "/quotes/{client_name}",
    response_model=list[QuoteResponseDTO],
    summary="List client quotes",
    description="""
    List every stored quote for a client.

    - Client name match is exact but case-insensitive
    - Quotes are returned in the order they were saved
    - Unknown clients yield an empty list (never 404)
    """,
)
def list_client_quotes(
    client_name: str,
    use_case: ListClientQuotes = Depends(get_list_client_quotes_use_case),
) -> list[QuoteResponseDTO]:
    quotes = use_case.execute(client_name)

    return [QuoteMapper.to_response(quote) for quote in quotes]
