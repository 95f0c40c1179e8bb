"""Capability protocols for the repository's collaborators.

The repository depends only on these two protocols. Production sources
(``NumbersApiRemoteSource``, ``RedisLocalSource``) and test doubles satisfy
them structurally; no base class is involved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from number_trivia.models import NumberTrivia


class RemoteSource(Protocol):
    """Network-backed provider of number trivia.

    Both methods raise ``NoConnectivityError`` when the provider is
    unreachable and ``NotFoundError`` when it has no trivia for the request.
    Any other exception is treated as an unknown failure.
    """

    def get_concrete_number_trivia(self, number: int) -> NumberTrivia:
        """Fetch the trivia for ``number``."""
        ...

    def get_random_number_trivia(self) -> NumberTrivia:
        """Fetch trivia for a number chosen by the provider."""
        ...


class LocalSource(Protocol):
    """Durable cache of previously fetched trivia, keyed by number."""

    def get_number_trivia(self, number: int) -> NumberTrivia | None:
        """Return the cached trivia for ``number``, or None if absent."""
        ...

    def save_number_trivia(self, trivia: NumberTrivia) -> None:
        """Store ``trivia``, replacing any record for the same number."""
        ...
