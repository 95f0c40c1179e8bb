"""Environment configuration for number trivia.

This module loads the settings for the Redis-backed cache and the Numbers API
client. Configuration is read from environment variables, with defaults for
everything except the Redis URL.

Example:
    Load settings from the current environment::

        import os
        from number_trivia.config import load_settings

        settings, error = load_settings(os.environ)
        if error:
            raise RuntimeError(error)
        print(f"Caching trivia in {settings.redis_url}")

Environment Variables:
    REDIS_URL: Required. Redis connection URL (e.g., "redis://localhost:6379").
    NUMBERS_API_URL: Optional. Base URL of the Numbers API.
        Defaults to "http://numbersapi.com".
    NUMBERS_API_TIMEOUT: Optional. HTTP timeout in seconds. Must be a
        positive number. Defaults to 10.0.
    TRIVIA_CACHE_PREFIX: Optional. Prefix for cache keys in Redis.
        Defaults to "number_trivia".
"""

from collections.abc import Mapping

from weakincentives import FrozenDataclass

DEFAULT_NUMBERS_API_URL = "http://numbersapi.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CACHE_PREFIX = "number_trivia"


@FrozenDataclass()
class TriviaSettings:
    """Connection settings for the remote provider and the local cache.

    Instances are created via :func:`load_settings` rather than direct
    instantiation.

    Attributes:
        redis_url: Redis connection URL used by the local cache.
        api_url: Base URL of the Numbers API, without a trailing slash.
        timeout_seconds: Timeout applied to every HTTP request. Expiry is
            reported as a connectivity failure.
        cache_prefix: Prefix for Redis keys. A record for number 7 is stored
            under ``"{cache_prefix}:7"``.
    """

    redis_url: str
    api_url: str
    timeout_seconds: float
    cache_prefix: str


def load_settings(
    env: Mapping[str, str],
) -> tuple[TriviaSettings | None, str | None]:
    """Load settings from environment variables.

    Uses the result tuple pattern instead of exceptions so entry points can
    report configuration problems without a traceback.

    Args:
        env: A mapping of environment variable names to values. Typically
            ``os.environ``; any ``Mapping[str, str]`` works in tests.

    Returns:
        A 2-tuple of ``(settings, error)``:

        - On success: ``(TriviaSettings(...), None)``
        - On failure: ``(None, "error message describing the problem")``

    Example:
        >>> settings, error = load_settings({"REDIS_URL": "redis://localhost:6379"})
        >>> settings.api_url
        'http://numbersapi.com'
    """
    redis_url = env.get("REDIS_URL")
    if not redis_url:
        return None, "REDIS_URL environment variable is required"

    api_url = env.get("NUMBERS_API_URL", "").strip() or DEFAULT_NUMBERS_API_URL

    timeout_str = env.get("NUMBERS_API_TIMEOUT", "").strip()
    timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    if timeout_str:
        try:
            timeout_seconds = float(timeout_str)
        except ValueError:
            return None, f"NUMBERS_API_TIMEOUT must be a number, got {timeout_str!r}"
        if timeout_seconds <= 0:
            return None, f"NUMBERS_API_TIMEOUT must be positive, got {timeout_str!r}"

    cache_prefix = env.get("TRIVIA_CACHE_PREFIX", "").strip() or DEFAULT_CACHE_PREFIX

    return (
        TriviaSettings(
            redis_url=redis_url,
            api_url=api_url.rstrip("/"),
            timeout_seconds=timeout_seconds,
            cache_prefix=cache_prefix,
        ),
        None,
    )
