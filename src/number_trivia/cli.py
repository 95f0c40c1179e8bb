"""Look up number trivia from the command line.

This module provides the CLI entry point for the repository. It supports two
modes of operation:

1. **Number mode**: Fetch trivia about a specific number, falling back to the
   cached copy when the Numbers API is unreachable.
2. **Random mode**: Fetch trivia about a number chosen by the API.

Fresh results are cached in Redis so later lookups for the same number keep
working offline.

Example usage from command line::

    # Trivia about 42
    python -m number_trivia.cli --number 42

    # Trivia about a random number
    python -m number_trivia.cli --random

Environment variables:
    REDIS_URL: Redis connection URL (required)
    NUMBERS_API_URL: Numbers API base URL (default: http://numbersapi.com)
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from dataclasses import field
from typing import TextIO

from weakincentives import FrozenDataclass
from weakincentives.runtime.logging import configure_logging

from number_trivia.config import load_settings
from number_trivia.local import create_local_source
from number_trivia.models import ErrorKind, Failure, Success, TriviaResult
from number_trivia.remote import create_remote_source
from number_trivia.repository import NumberTriviaRepository
from number_trivia.sources import LocalSource, RemoteSource

DEFAULT_LOG_LEVEL = "WARNING"

_ERROR_MESSAGES = {
    ErrorKind.NO_CONNECTIVITY: "No connection and no cached trivia for this number.",
    ErrorKind.NOT_FOUND: "No trivia found.",
}


@FrozenDataclass()
class CliRuntime:
    """Runtime dependencies for the CLI, enabling dependency injection.

    In production, use the defaults. In tests, inject fake sources and
    capture the output streams.

    Attributes:
        remote: Remote source to query. When None, a Numbers API source is
            created from environment configuration and closed on exit.
        local: Local source for caching. When None, a Redis source is
            created from environment configuration.
        out: Output stream for results (default: sys.stdout).
        err: Output stream for errors (default: sys.stderr).

    Example:
        Test usage (inject fakes)::

            runtime = CliRuntime(remote=fake_remote, local=fake_local, out=StringIO())
            exit_code = main(["--number", "42"], runtime=runtime)
            assert "Trivia #42" in runtime.out.getvalue()
    """

    remote: RemoteSource | None = None
    local: LocalSource | None = None
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)


def render_result(result: TriviaResult) -> tuple[str, bool]:
    """Render a repository result as a line of text.

    Args:
        result: The outcome returned by the repository.

    Returns:
        A 2-tuple of ``(text, ok)`` where ``ok`` is True for a ``Success``.

    Example:
        >>> render_result(Failure(error=ErrorKind.NOT_FOUND))
        ('No trivia found.', False)
    """
    if isinstance(result, Success):
        return f"Trivia #{result.trivia.number}: {result.trivia.text}", True
    assert isinstance(result, Failure)
    if result.error in _ERROR_MESSAGES:
        return _ERROR_MESSAGES[result.error], False
    return f"Unexpected error: {result.message or 'unknown failure'}", False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up trivia about a number.",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--number",
        type=int,
        help="The number to look up.",
    )
    target.add_argument(
        "--random",
        action="store_true",
        help="Look up a random number instead.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL}).",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    runtime: CliRuntime | None = None,
) -> int:
    """Main entry point for the number trivia CLI.

    Args:
        argv: Command-line arguments to parse. When None, uses sys.argv[1:].
            Exactly one of ``--number <int>`` or ``--random`` is required.
        runtime: Injected runtime dependencies for testing. When None, uses
            production defaults (Numbers API, Redis, stdout/stderr).

    Returns:
        Exit code indicating result:
            0 - Trivia printed (fresh or cached)
            1 - Configuration error or any failure result
    """
    rt = runtime or CliRuntime()
    out = rt.out
    err = rt.err

    args = _build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    # Load configuration
    settings, error = load_settings(os.environ)
    if error:
        err.write(f"Configuration error: {error}\n")
        return 1

    assert settings is not None  # for type checker

    # Use injected or create real dependencies
    try:
        local = rt.local or create_local_source(settings)
    except Exception as e:
        err.write(f"Failed to connect to Redis: {e}\n")
        return 1

    owned_remote = None
    if rt.remote is None:
        owned_remote = create_remote_source(settings)
    remote = rt.remote or owned_remote

    try:
        repository = NumberTriviaRepository(remote=remote, local=local)
        if args.random:
            result = repository.get_random_number_trivia()
        else:
            result = repository.get_number_trivia(args.number)
    finally:
        if owned_remote is not None:
            owned_remote.close()

    text, ok = render_result(result)
    if not ok:
        err.write(f"{text}\n")
        return 1

    out.write(f"{text}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
