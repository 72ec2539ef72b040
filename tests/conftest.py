from __future__ import annotations

from collections.abc import Callable, Iterator
from decimal import Decimal

import pytest

from lease_quotes.domain.client import ClientRef
from lease_quotes.domain.quote import Quote
from lease_quotes.domain.quote_input import QuoteInput
from lease_quotes.infra.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """App lifespans configure logging globally; undo it after every test."""
    yield
    reset_logging()


def _make_input(
    price: str = "100000",
    down_payment: str = "10000",
    term_months: int = 12,
    residual: str = "20000",
    annual_rate: str = "0.12",
) -> QuoteInput:
    return QuoteInput(
        price=Decimal(price),
        down_payment=Decimal(down_payment),
        term_months=term_months,
        residual=Decimal(residual),
        annual_rate=Decimal(annual_rate),
    )


@pytest.fixture()
def valid_input() -> QuoteInput:
    return _make_input()


@pytest.fixture()
def quote_factory() -> Callable[..., Quote]:
    def _make(client_name: str = "ACME", **overrides: object) -> Quote:
        return Quote.create(ClientRef(name=client_name), _make_input(**overrides))  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def input_factory() -> Callable[..., QuoteInput]:
    return _make_input
