"""Remote-first repository with local fallback for number trivia.

The repository always asks the remote source first. A fresh record is saved to
the local source and returned. When the remote is unreachable, the keyed
lookup falls back to the local copy; an explicit "not found" from the remote,
or any other failure, is returned as-is without looking at the cache.

Every outcome is returned as a ``TriviaResult``. No exception raised by a
collaborator escapes this module.

Example:
    >>> repository = NumberTriviaRepository(remote=remote, local=local)
    >>> result = repository.get_number_trivia(42)
    >>> if isinstance(result, Success):
    ...     print(result.trivia.text)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from number_trivia.errors import NoConnectivityError, NotFoundError
from number_trivia.models import ErrorKind, Failure, Success, TriviaResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from number_trivia.models import NumberTrivia
    from number_trivia.sources import LocalSource, RemoteSource

logger = logging.getLogger(__name__)


class NumberTriviaRepository:
    """Mediates between the remote provider and the local cache.

    The repository holds no state beyond its two collaborators, so a single
    instance can serve concurrent callers as long as the collaborators can.

    Args:
        remote: Source of truth for trivia. Always tried first.
        local: Cache populated on every remote success and read only when the
            remote is unreachable during a keyed lookup.
    """

    def __init__(self, *, remote: RemoteSource, local: LocalSource) -> None:
        self._remote = remote
        self._local = local

    def get_number_trivia(self, number: int) -> TriviaResult:
        """Return trivia for ``number``.

        Outcomes:
            - Remote returns a record: it is saved locally and returned.
            - Remote unreachable: the cached record is returned if present,
              otherwise ``Failure(NO_CONNECTIVITY)``.
            - Remote reports not found: ``Failure(NOT_FOUND)``. The cache is
              not consulted.
            - Any other remote error: ``Failure(UNKNOWN)``. The cache is not
              consulted.

        Args:
            number: The number to look up.

        Returns:
            A ``Success`` or ``Failure``; never raises.
        """
        return self._fetch(
            lambda: self._remote.get_concrete_number_trivia(number),
            fallback=lambda: self._get_cached(number),
            label=f"number {number}",
        )

    def get_random_number_trivia(self) -> TriviaResult:
        """Return trivia for a number chosen by the remote.

        Same contract as :meth:`get_number_trivia`, except that there is no
        number to look up locally when the remote is unreachable, so that
        case is always ``Failure(NO_CONNECTIVITY)``.
        """
        return self._fetch(
            self._remote.get_random_number_trivia,
            fallback=None,
            label="random number",
        )

    def _fetch(
        self,
        call_remote: Callable[[], NumberTrivia],
        *,
        fallback: Callable[[], TriviaResult] | None,
        label: str,
    ) -> TriviaResult:
        try:
            trivia = call_remote()
        except NoConnectivityError as e:
            logger.info("Remote unreachable for %s: %s", label, e)
            if fallback is None:
                return Failure(error=ErrorKind.NO_CONNECTIVITY, message=str(e))
            return fallback()
        except NotFoundError as e:
            logger.debug("Remote has no trivia for %s: %s", label, e)
            return Failure(error=ErrorKind.NOT_FOUND, message=str(e))
        except Exception as e:
            logger.exception("Remote failed for %s", label)
            return Failure(error=ErrorKind.UNKNOWN, message=str(e))

        self._save(trivia)
        return Success(trivia=trivia)

    def _get_cached(self, number: int) -> TriviaResult:
        try:
            cached = self._local.get_number_trivia(number)
        except Exception as e:
            logger.exception("Local lookup failed for number %s", number)
            return Failure(error=ErrorKind.UNKNOWN, message=str(e))

        if cached is None:
            return Failure(
                error=ErrorKind.NO_CONNECTIVITY,
                message=f"No connection and no cached trivia for {number}",
            )
        logger.debug("Serving cached trivia for number %s", number)
        return Success(trivia=cached)

    def _save(self, trivia: NumberTrivia) -> None:
        # Best effort: a failed save never changes the outcome.
        try:
            self._local.save_number_trivia(trivia)
        except Exception:
            logger.warning("Failed to cache trivia for number %s", trivia.number, exc_info=True)
