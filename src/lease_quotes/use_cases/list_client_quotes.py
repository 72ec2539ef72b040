"""List client quotes use case."""

from __future__ import annotations

from lease_quotes.domain.quote import Quote
from lease_quotes.ports.quote_repository import QuoteRepository


class ListClientQuotes:
    """Pass-through to storage: blank or unknown names yield an empty list."""

    def __init__(self, quote_repository: QuoteRepository) -> None:
        self._repository = quote_repository

    def execute(self, client_name: str) -> list[Quote]:
        return self._repository.get_by_client_name(client_name)
