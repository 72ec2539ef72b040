from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from lease_quotes.domain.errors import InvalidClientName


def is_blank(name: str | None) -> bool:
    return name is None or not name.strip()


@dataclass(frozen=True, slots=True)
class ClientRef:
    """
    The requester a quote belongs to.

    The id is generated at construction. Names are kept as given (no
    trimming or case folding); blank names are rejected, never coerced.
    """

    name: str
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if is_blank(self.name):
            raise InvalidClientName()
