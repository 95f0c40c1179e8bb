"""Numbers API remote source.

Fetches number trivia from the Numbers API over HTTP.
http://numbersapi.com/

Transport failures are translated into the exceptions the repository
classifies:

- timeouts and network errors -> ``NoConnectivityError``
- HTTP 404 or a ``"found": false`` body -> ``NotFoundError``
- any other bad status or malformed body -> ``RemoteSourceError``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from number_trivia.errors import NoConnectivityError, NotFoundError, RemoteSourceError
from number_trivia.models import NumberTrivia

if TYPE_CHECKING:
    from types import TracebackType

    from number_trivia.config import TriviaSettings

logger = logging.getLogger(__name__)

RANDOM_PATH = "/random/trivia"


class NumbersApiRemoteSource:
    """Remote source backed by the Numbers API.

    The source does not retry. Each call performs a single GET and either
    returns a record or raises.

    Args:
        client: An ``httpx.Client`` whose ``base_url`` points at the API.
            The source takes ownership and closes it in :meth:`close`.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def get_concrete_number_trivia(self, number: int) -> NumberTrivia:
        """Fetch the trivia for ``number``.

        Raises:
            NoConnectivityError: The API could not be reached in time.
            NotFoundError: The API has no trivia for ``number``.
            RemoteSourceError: Any other failure.
        """
        return self._get(f"/{number}/trivia", requested=number)

    def get_random_number_trivia(self) -> NumberTrivia:
        """Fetch trivia for a number chosen by the API."""
        return self._get(RANDOM_PATH, requested=None)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> NumbersApiRemoteSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get(self, path: str, *, requested: int | None) -> NumberTrivia:
        logger.debug("GET %s", path)
        try:
            response = self._client.get(path, params={"json": "true"})
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise NoConnectivityError(f"Numbers API unreachable: {e}") from e
        except httpx.HTTPError as e:
            raise RemoteSourceError(f"Numbers API request failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"No trivia at {path}")
        if response.is_error:
            raise RemoteSourceError(f"Numbers API returned HTTP {response.status_code} for {path}")

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteSourceError(f"Numbers API returned invalid JSON for {path}") from e

        return _parse_trivia(data, requested=requested, path=path)


def _parse_trivia(data: Any, *, requested: int | None, path: str) -> NumberTrivia:
    """Build a record from a Numbers API JSON body."""
    if not isinstance(data, dict):
        raise RemoteSourceError(f"Unexpected body for {path}: expected an object")

    if data.get("found") is False:
        raise NotFoundError(f"No trivia at {path}")

    text = data.get("text")
    if not isinstance(text, str):
        raise RemoteSourceError(f"Missing 'text' in body for {path}")

    number = data.get("number", requested)
    # bool is an int subclass; reject it explicitly
    if not isinstance(number, int) or isinstance(number, bool):
        raise RemoteSourceError(f"Missing or invalid 'number' in body for {path}")

    return NumberTrivia(number=number, text=text)


def create_remote_source(
    settings: TriviaSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> NumbersApiRemoteSource:
    """Create a Numbers API source from settings.

    Args:
        settings: Provides the API base URL and request timeout.
        transport: Optional transport override, e.g. ``httpx.MockTransport``
            in tests.

    Returns:
        A source owning a fresh ``httpx.Client``.
    """
    client = httpx.Client(
        base_url=settings.api_url,
        timeout=settings.timeout_seconds,
        transport=transport,
    )
    return NumbersApiRemoteSource(client)
