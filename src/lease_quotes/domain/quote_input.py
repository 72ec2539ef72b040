from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class QuoteInput:
    """
    Raw lease parameters to evaluate.

    Shape only: no invariants are enforced here. Whether the values may be
    priced is decided by lease_quotes.domain.rules.
    """

    price: Decimal
    down_payment: Decimal
    term_months: int
    residual: Decimal
    annual_rate: Decimal  # fraction, e.g. Decimal("0.12") = 12%
