"""Business rules a quote input must satisfy before a quote is priced.

Two call styles share one threshold table:

- ``validate`` evaluates every rule and reports all violations in a fixed
  order (client name, price, residual, down payment, term, rate). The
  HTTP boundary uses it so callers can fix every problem at once.
- ``first_violation`` stops at the first failure, checking the residual
  cap, then the down-payment tier, then the structural guards. Quote
  construction uses it as the authoritative last check.

Both styles call the same ``check_*`` predicates, so they accept and reject
exactly the same inputs. All comparisons use exact Decimal arithmetic.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from lease_quotes.domain.client import is_blank
from lease_quotes.domain.quote_input import QuoteInput


RESIDUAL_CAP_RATIO = Decimal("0.30")


@dataclass(frozen=True, slots=True)
class DownPaymentTier:
    min_term: int
    max_term: int | None
    min_ratio: Decimal
    label: str

    def covers(self, term_months: int) -> bool:
        if term_months < self.min_term:
            return False
        return self.max_term is None or term_months <= self.max_term


# Terms under 12 months fall outside every tier: only term > 0 applies.
DOWN_PAYMENT_TIERS: tuple[DownPaymentTier, ...] = (
    DownPaymentTier(min_term=12, max_term=12, min_ratio=Decimal("0.10"), label="12 months"),
    DownPaymentTier(min_term=13, max_term=24, min_ratio=Decimal("0.075"), label="13-24 months"),
    DownPaymentTier(min_term=25, max_term=None, min_ratio=Decimal("0.05"), label="25 months or more"),
)


def tier_for_term(term_months: int) -> DownPaymentTier | None:
    for tier in DOWN_PAYMENT_TIERS:
        if tier.covers(term_months):
            return tier
    return None


def _percent(ratio: Decimal) -> str:
    return f"{(ratio * 100).normalize():f}%"


@dataclass(frozen=True, slots=True)
class RuleViolation:
    """One failed rule: which field, why, and a machine-readable code."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """
    Result of the collect-all validation.

    is_valid is True only when there are no violations; violations keep
    rule order. bool(outcome) == outcome.is_valid.
    """

    is_valid: bool
    violations: tuple[RuleViolation, ...] = ()

    @classmethod
    def success(cls) -> ValidationOutcome:
        return cls(is_valid=True, violations=())

    @classmethod
    def failure(cls, *violations: RuleViolation) -> ValidationOutcome:
        return cls(is_valid=False, violations=tuple(violations))

    def __bool__(self) -> bool:
        return self.is_valid

    def to_errors(self) -> list[dict[str, str]]:
        return [violation.to_dict() for violation in self.violations]


# ==============================================================================
# Rule predicates
# ==============================================================================


def check_client_name(client_name: str | None) -> RuleViolation | None:
    if is_blank(client_name):
        return RuleViolation("client_name", "Client name is required", "REQUIRED")
    return None


def check_price(quote_input: QuoteInput) -> RuleViolation | None:
    if quote_input.price <= 0:
        return RuleViolation("price", "Price must be greater than zero", "INVALID_VALUE")
    return None


def check_residual(quote_input: QuoteInput) -> RuleViolation | None:
    limit = quote_input.price * RESIDUAL_CAP_RATIO
    if quote_input.residual > limit:
        return RuleViolation(
            "residual",
            f"Residual must not exceed {_percent(RESIDUAL_CAP_RATIO)} of price ({limit})",
            "RESIDUAL_TOO_HIGH",
        )
    return None


def check_down_payment(quote_input: QuoteInput) -> RuleViolation | None:
    tier = tier_for_term(quote_input.term_months)
    if tier is None:
        return None

    minimum = quote_input.price * tier.min_ratio
    if quote_input.down_payment < minimum:
        return RuleViolation(
            "down_payment",
            f"For {tier.label} the minimum down payment is "
            f"{_percent(tier.min_ratio)} of price ({minimum})",
            "DOWN_PAYMENT_TOO_LOW",
        )
    return None


def check_term(quote_input: QuoteInput) -> RuleViolation | None:
    if quote_input.term_months <= 0:
        return RuleViolation("term_months", "Term must be at least 1 month", "INVALID_VALUE")
    return None


def check_annual_rate(quote_input: QuoteInput) -> RuleViolation | None:
    if quote_input.annual_rate <= 0:
        return RuleViolation(
            "annual_rate", "Annual rate must be greater than zero", "INVALID_VALUE"
        )
    return None


# ==============================================================================
# Call styles
# ==============================================================================


_FAIL_FAST_CHECKS: tuple[Callable[[QuoteInput], RuleViolation | None], ...] = (
    check_residual,
    check_down_payment,
    check_price,
    check_term,
    check_annual_rate,
)


def validate(quote_input: QuoteInput, client_name: str | None) -> ValidationOutcome:
    """
    Evaluate every rule and report all violations.

    Args:
        quote_input: Raw quote parameters
        client_name: Name of the requesting client

    Returns:
        ValidationOutcome with violations in rule order (empty when valid)
    """
    results = (
        check_client_name(client_name),
        check_price(quote_input),
        check_residual(quote_input),
        check_down_payment(quote_input),
        check_term(quote_input),
        check_annual_rate(quote_input),
    )
    violations = [violation for violation in results if violation is not None]

    if violations:
        return ValidationOutcome.failure(*violations)
    return ValidationOutcome.success()


def first_violation(quote_input: QuoteInput) -> RuleViolation | None:
    """Return the first violated rule in fail-fast order, or None."""
    for check in _FAIL_FAST_CHECKS:
        violation = check(quote_input)
        if violation is not None:
            return violation
    return None
