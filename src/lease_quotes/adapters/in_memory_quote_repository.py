from __future__ import annotations

import logging
import threading

from lease_quotes.domain.client import is_blank
from lease_quotes.domain.quote import Quote
from lease_quotes.ports.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


class InMemoryQuoteRepository(QuoteRepository):
    """
    Process-local quote storage.

    - Indexes quotes by case-folded client name
    - Preserves insertion order per client
    - A single lock guards the index; readers get a snapshot list, so a
      quote is visible once add() has returned
    """

    def __init__(self) -> None:
        self._quotes_by_client: dict[str, list[Quote]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(client_name: str) -> str:
        return client_name.casefold()

    def add(self, quote: Quote) -> None:
        if quote is None:
            raise ValueError("quote is required")

        key = self._key(quote.client_name)
        with self._lock:
            self._quotes_by_client.setdefault(key, []).append(quote)

        logger.debug(
            "Quote stored",
            extra={"quote_id": str(quote.id), "client_name": quote.client_name},
        )

    def get_by_client_name(self, client_name: str) -> list[Quote]:
        if is_blank(client_name):
            return []

        with self._lock:
            return list(self._quotes_by_client.get(self._key(client_name), ()))

    def count(self) -> int:
        with self._lock:
            return sum(len(quotes) for quotes in self._quotes_by_client.values())

    def close(self) -> None:
        """Drop every stored quote. Called when the application shuts down."""
        with self._lock:
            dropped = sum(len(quotes) for quotes in self._quotes_by_client.values())
            self._quotes_by_client.clear()

        logger.info("Quote repository closed", extra={"dropped_quotes": dropped})
