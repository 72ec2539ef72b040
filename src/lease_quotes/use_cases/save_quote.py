from __future__ import annotations

import logging

from lease_quotes.domain.quote import Quote
from lease_quotes.ports.quote_repository import QuoteRepository
from lease_quotes.use_cases.calculate_quote import CalculateQuote, QuoteRequest

logger = logging.getLogger(__name__)


class SaveQuote:
    """
    Price a quote and hand it to storage.

    Pricing is delegated to CalculateQuote, so saving applies exactly the
    same rules as the calculate-only path.
    """

    def __init__(
        self,
        quote_repository: QuoteRepository,
        calculate_quote: CalculateQuote | None = None,
    ) -> None:
        self._repository = quote_repository
        self._calculate_quote = calculate_quote or CalculateQuote()

    def execute(self, request: QuoteRequest) -> Quote:
        """
        Raises:
            ValidationError: If any business rule is violated
            InternalError: If the rule paths disagree
        """
        quote = self._calculate_quote.execute(request)
        self._repository.add(quote)

        logger.info(
            "Quote saved",
            extra={"quote_id": str(quote.id), "client_name": quote.client_name},
        )
        return quote
