"""
Dependency injection for FastAPI routes.

Key principle: the quote repository is created once per application (in the
lifespan) and shared through app.state; use cases are cheap and built
per request around it.
"""

from __future__ import annotations

from fastapi import Depends, Request

from lease_quotes.ports.quote_repository import QuoteRepository
from lease_quotes.use_cases.calculate_quote import CalculateQuote
from lease_quotes.use_cases.list_client_quotes import ListClientQuotes
from lease_quotes.use_cases.save_quote import SaveQuote


def get_quote_repository(request: Request) -> QuoteRepository:
    """
    Provides the application-wide quote repository.

    Raises:
        RuntimeError: If the application was started without a repository
    """
    repository = getattr(request.app.state, "quote_repository", None)

    if repository is None:
        raise RuntimeError("Quote repository is not initialized")

    return repository


def get_calculate_quote_use_case() -> CalculateQuote:
    """Returns a CalculateQuote use case (stateless, no storage needed)."""
    return CalculateQuote()


def get_save_quote_use_case(
    repository: QuoteRepository = Depends(get_quote_repository),
) -> SaveQuote:
    """Returns a SaveQuote use case wired to the shared repository."""
    return SaveQuote(quote_repository=repository)


def get_list_client_quotes_use_case(
    repository: QuoteRepository = Depends(get_quote_repository),
) -> ListClientQuotes:
    """Returns a ListClientQuotes use case wired to the shared repository."""
    return ListClientQuotes(quote_repository=repository)
