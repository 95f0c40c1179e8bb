"""Redis-backed local source for number trivia.

Each record is stored as a JSON string under ``"{prefix}:{number}"``. Saving a
record for a number that is already cached replaces it; keys never expire.

Example:
    Creating the source from settings::

        from number_trivia.config import load_settings
        from number_trivia.local import create_local_source

        settings, _ = load_settings(os.environ)
        local = create_local_source(settings)
        local.save_number_trivia(NumberTrivia(number=7, text="7 is lucky."))
        local.get_number_trivia(7)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from redis import Redis
from weakincentives.serde import dump, parse

from number_trivia.models import NumberTrivia

if TYPE_CHECKING:
    from number_trivia.config import TriviaSettings

logger = logging.getLogger(__name__)


def build_cache_key(prefix: str, number: int) -> str:
    """Build the Redis key for a number.

    Args:
        prefix: Namespace for trivia keys (e.g., "number_trivia"). Must be
            non-empty.
        number: The number the record is about.

    Returns:
        A key in the format "{prefix}:{number}".

    Raises:
        ValueError: If prefix is empty.

    Example:
        >>> build_cache_key("number_trivia", 42)
        'number_trivia:42'
    """
    if not prefix:
        raise ValueError("Cache key prefix must be non-empty.")
    return f"{prefix}:{number}"


class RedisLocalSource:
    """Local source storing trivia records in Redis.

    Args:
        client: Redis client. May use ``decode_responses`` or not; both bytes
            and str values are accepted on read.
        prefix: Namespace for cache keys.
    """

    def __init__(
        self,
        client: Redis,  # type: ignore[type-arg]
        *,
        prefix: str,
    ) -> None:
        if not prefix:
            raise ValueError("Cache key prefix must be non-empty.")
        self._client = client
        self._prefix = prefix

    def get_number_trivia(self, number: int) -> NumberTrivia | None:
        """Return the cached record for ``number``, or None if absent."""
        raw = self._client.get(build_cache_key(self._prefix, number))
        if raw is None:
            return None
        return parse(NumberTrivia, json.loads(raw))  # type: ignore[arg-type]

    def save_number_trivia(self, trivia: NumberTrivia) -> None:
        """Store ``trivia``, replacing any record for the same number."""
        key = build_cache_key(self._prefix, trivia.number)
        self._client.set(key, json.dumps(dump(trivia)))
        logger.debug("Cached trivia under %s", key)


def create_local_source(settings: TriviaSettings) -> RedisLocalSource:
    """Create a Redis local source from settings.

    Args:
        settings: Provides the Redis URL and cache key prefix.

    Returns:
        A source using a new Redis client for ``settings.redis_url``.
    """
    client = Redis.from_url(settings.redis_url)  # type: ignore[reportUnknownMemberType]
    return RedisLocalSource(client, prefix=settings.cache_prefix)
