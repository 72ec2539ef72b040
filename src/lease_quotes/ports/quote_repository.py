from __future__ import annotations

from abc import ABC, abstractmethod

from lease_quotes.domain.quote import Quote


class QuoteRepository(ABC):
    """
    Port for quote storage.

    Contract:
        - add() accepts fully constructed, rule-valid quotes and fails only
          when no quote is given
        - get_by_client_name() matches the client name exactly but
          case-insensitively, returns quotes in insertion order, and returns
          an empty list for blank or unknown names instead of failing
        - Implementations must tolerate concurrent add/get calls
    """

    @abstractmethod
    def add(self, quote: Quote) -> None:
        """
        Store a quote.

        Raises:
            ValueError: If quote is None
        """
        ...

    @abstractmethod
    def get_by_client_name(self, client_name: str) -> list[Quote]:
        """
        List every stored quote for a client.

        Args:
            client_name: Client name (case-insensitive exact match)

        Returns:
            Matching quotes in insertion order, possibly empty
        """
        ...
