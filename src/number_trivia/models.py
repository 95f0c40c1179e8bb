"""Value and result models for number trivia.

This module defines the record exchanged with both data sources and the
discriminated result returned by the repository. All models are immutable
frozen dataclasses.

Example:
    >>> from number_trivia.models import ErrorKind, Failure, NumberTrivia, Success
    >>> trivia = NumberTrivia(number=42, text="42 is the answer.")
    >>> result = Success(trivia=trivia)
    >>> missing = Failure(error=ErrorKind.NOT_FOUND)
"""

from enum import StrEnum

from weakincentives import FrozenDataclass


@FrozenDataclass()
class NumberTrivia:
    """A fact about a single number.

    Produced by the remote source on a live fetch and by the local source when
    a previously saved copy is read back. The number is the only identity a
    record has; saving a second record for the same number replaces the first.

    Attributes:
        number: The integer the fact is about.
        text: The fact itself, as returned by the provider.

    Example:
        >>> trivia = NumberTrivia(number=1, text="1 is the loneliest number.")
        >>> trivia.number
        1
    """

    number: int
    text: str


class ErrorKind(StrEnum):
    """Closed set of failure classifications returned to callers.

    Attributes:
        NO_CONNECTIVITY: The remote could not be reached and nothing usable
            was cached locally.
        NOT_FOUND: The remote was reached and reported that it has no trivia
            for the request. Never masked by a cached copy.
        UNKNOWN: Any other failure.
    """

    NO_CONNECTIVITY = "no_connectivity"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


@FrozenDataclass()
class Success:
    """Successful outcome carrying the trivia record.

    Attributes:
        trivia: The record, either fresh from the remote or read back from
            the local cache.
    """

    trivia: NumberTrivia


@FrozenDataclass()
class Failure:
    """Failed outcome carrying the error classification.

    Attributes:
        error: The classification callers branch on.
        message: Optional diagnostic text copied from the underlying error.
            Informational only; callers should not parse it.
    """

    error: ErrorKind
    message: str = ""


TriviaResult = Success | Failure
"""Outcome of a repository operation: exactly one of Success or Failure."""
