from __future__ import annotations

import logging
from dataclasses import dataclass

from lease_quotes.domain import rules
from lease_quotes.domain.client import ClientRef
from lease_quotes.domain.errors import InternalError, ValidationError
from lease_quotes.domain.quote import PAYMENT_NOT_FINITE, Err, Quote, new_quote
from lease_quotes.domain.quote_input import QuoteInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuoteRequest:
    client_name: str
    quote_input: QuoteInput


class CalculateQuote:
    """
    Price a quote without storing it.

    Flow:
    1. Collect-all validation (every violated rule is reported)
    2. Quote construction, which re-runs the rules fail-fast
    3. A payment the formula cannot represent is a client error (400)
    4. Any other rejection at step 2 after step 1 approved the same input
       means the two rule paths disagree: that is a bug, reported as
       InternalError
    """

    def execute(self, request: QuoteRequest) -> Quote:
        """
        Validate and price a quote.

        Args:
            request: Client name plus raw quote parameters

        Returns:
            The priced Quote

        Raises:
            ValidationError: If any business rule is violated (all violations listed)
                or the monthly payment cannot be computed
            InternalError: If construction rejects input the validator accepted
        """
        outcome = rules.validate(request.quote_input, request.client_name)
        if not outcome:
            raise ValidationError(errors=outcome.to_errors())

        result = new_quote(ClientRef(name=request.client_name), request.quote_input)
        if isinstance(result, Err) and result.error.code == PAYMENT_NOT_FINITE:
            logger.info(
                "Quote payment could not be computed",
                extra={
                    "client_name": request.client_name,
                    "term_months": request.quote_input.term_months,
                },
            )
            raise ValidationError(errors=[result.error.to_dict()])

        if isinstance(result, Err):
            logger.error(
                "Quote construction rejected validated input",
                extra={
                    "client_name": request.client_name,
                    "field": result.error.field,
                    "rule": result.error.code,
                },
            )
            raise InternalError(
                "Quote rules disagree for validated input",
                field=result.error.field,
                rule=result.error.code,
            )

        quote = result.value
        logger.info(
            "Quote calculated",
            extra={
                "quote_id": str(quote.id),
                "client_name": quote.client_name,
                "term_months": quote.term_months,
                "monthly_payment": str(quote.monthly_payment),
            },
        )
        return quote
