from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Generic, TypeVar
from uuid import UUID, uuid4

from lease_quotes.domain.client import ClientRef
from lease_quotes.domain.errors import BusinessRuleViolation
from lease_quotes.domain.quote_input import QuoteInput
from lease_quotes.domain.rules import RuleViolation, first_violation


CENTS = Decimal("0.01")
MONTHS_PER_YEAR = 12

# Rule code for payments that are not finite or do not fit in cents.
PAYMENT_NOT_FINITE = "PAYMENT_NOT_FINITE"


def monthly_payment(
    principal: Decimal,
    residual: Decimal,
    annual_rate: Decimal,
    term_months: int,
) -> Decimal:
    """
    Level monthly payment that amortizes principal down to the residual.

    PMT = r * (pv + fv / (1+r)^n) / (1 - (1+r)^(-n))

    Where:
    - r  = annual_rate / 12 (periodic rate)
    - pv = principal (price - down_payment)
    - fv = residual
    - n  = term_months

    Rounding policy:
    - The formula runs in float (it needs a real power operator)
    - The result is converted to Decimal and rounded to cents with ROUND_HALF_EVEN
    - Rule checks never see the float values; they run on the Decimal inputs

    With a zero (or vanishingly small) periodic rate the formula degenerates
    to (pv + fv) / n, which is computed directly. Discounting uses
    (1+r)^(-n), which underflows to 0 for very long terms, so the payment
    tends to r * pv instead of overflowing.

    Raises:
        BusinessRuleViolation: If the amount is not finite or does not fit
            a cent-precision Decimal (rule PAYMENT_NOT_FINITE)
    """
    r = float(annual_rate) / MONTHS_PER_YEAR
    pv = float(principal)
    fv = float(residual)
    n = term_months

    try:
        discount = (1.0 + r) ** -n if r != 0 else 1.0
        denominator = 1.0 - discount
        if denominator == 0:
            payment = (pv + fv) / n
        else:
            payment = r * (pv + fv * discount) / denominator
    except (OverflowError, ZeroDivisionError):
        payment = math.inf

    if not math.isfinite(payment):
        raise _payment_not_computable()

    try:
        return Decimal(repr(payment)).quantize(CENTS, rounding=ROUND_HALF_EVEN)
    except InvalidOperation as exc:
        raise _payment_not_computable() from exc


def _payment_not_computable() -> BusinessRuleViolation:
    return BusinessRuleViolation(
        "Monthly payment could not be computed for these terms",
        field="monthly_payment",
        rule=PAYMENT_NOT_FINITE,
    )


@dataclass(frozen=True, slots=True)
class Quote:
    """
    A priced lease quote.

    Build quotes with Quote.create (raises) or new_quote (returns Ok/Err);
    both re-run the business rules, so a Quote that came out of either one
    always satisfies policy. total_payment is monthly_payment * term_months
    computed on the rounded payment, so it is exact in cents.
    """

    client: ClientRef
    price: Decimal
    down_payment: Decimal
    term_months: int
    residual: Decimal
    annual_rate: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def client_name(self) -> str:
        return self.client.name

    @property
    def principal(self) -> Decimal:
        return self.price - self.down_payment

    @classmethod
    def create(cls, client: ClientRef, quote_input: QuoteInput) -> Quote:
        """
        Check the rules (fail-fast) and price the quote.

        Raises:
            BusinessRuleViolation: On the first violated rule, in the order
                residual cap, down-payment tier, price, term, rate
        """
        violation = first_violation(quote_input)
        if violation is not None:
            raise BusinessRuleViolation(
                violation.message, field=violation.field, rule=violation.code
            )

        payment = monthly_payment(
            principal=quote_input.price - quote_input.down_payment,
            residual=quote_input.residual,
            annual_rate=quote_input.annual_rate,
            term_months=quote_input.term_months,
        )

        return cls(
            client=client,
            price=quote_input.price,
            down_payment=quote_input.down_payment,
            term_months=quote_input.term_months,
            residual=quote_input.residual,
            annual_rate=quote_input.annual_rate,
            monthly_payment=payment,
            total_payment=payment * quote_input.term_months,
        )


# ==============================================================================
# Tagged result
# ==============================================================================

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


QuoteResult = Ok[Quote] | Err[RuleViolation]


def new_quote(client: ClientRef, quote_input: QuoteInput) -> QuoteResult:
    """Build a quote, returning the rejection as a value instead of raising."""
    try:
        return Ok(Quote.create(client, quote_input))
    except BusinessRuleViolation as exc:
        return Err(
            RuleViolation(
                field=exc.field or "quote",
                message=exc.message,
                code=exc.rule or exc.error_code,
            )
        )
