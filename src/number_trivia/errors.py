"""Exceptions raised by number trivia data sources.

Data sources signal failures with these exceptions. The repository catches
them and converts each into a ``Failure`` with the matching ``ErrorKind``, so
none of them reach the repository's callers.
"""


class TriviaSourceError(Exception):
    """Base class for data source failures."""


class NoConnectivityError(TriviaSourceError):
    """The remote provider could not be reached."""


class NotFoundError(TriviaSourceError):
    """The remote provider has no trivia for the request."""


class RemoteSourceError(TriviaSourceError):
    """The remote provider failed in some other way (bad status, bad body)."""
