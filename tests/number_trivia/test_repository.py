"""Tests for the number trivia repository."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from number_trivia.errors import NoConnectivityError, NotFoundError, RemoteSourceError
from number_trivia.models import ErrorKind, Failure, NumberTrivia, Success
from number_trivia.repository import NumberTriviaRepository
from number_trivia.sources import LocalSource, RemoteSource


@pytest.fixture
def remote() -> MagicMock:
    """Create a remote source double."""
    return MagicMock(spec=RemoteSource)


@pytest.fixture
def local() -> MagicMock:
    """Create a local source double with an empty cache."""
    source = MagicMock(spec=LocalSource)
    source.get_number_trivia.return_value = None
    return source


@pytest.fixture
def repository(remote: MagicMock, local: MagicMock) -> NumberTriviaRepository:
    """Create a repository wired to the doubles."""
    return NumberTriviaRepository(remote=remote, local=local)


class TestGetNumberTrivia:
    """Tests for get_number_trivia."""

    def test_returns_remote_trivia(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
    ) -> None:
        """Test that a remote record is returned as Success."""
        trivia = NumberTrivia(number=1, text="trivia")
        remote.get_concrete_number_trivia.return_value = trivia

        result = repository.get_number_trivia(1)

        assert result == Success(trivia=trivia)
        remote.get_concrete_number_trivia.assert_called_once_with(1)

    def test_saves_remote_trivia_once(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that a remote record is saved locally exactly once."""
        trivia = NumberTrivia(number=1, text="trivia")
        remote.get_concrete_number_trivia.return_value = trivia

        repository.get_number_trivia(1)

        local.save_number_trivia.assert_called_once_with(trivia)
        local.get_number_trivia.assert_not_called()

    def test_falls_back_to_cache_when_offline(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that the cached record is returned when the remote is unreachable."""
        cached = NumberTrivia(number=1, text="trivia")
        remote.get_concrete_number_trivia.side_effect = NoConnectivityError()
        local.get_number_trivia.return_value = cached

        result = repository.get_number_trivia(1)

        assert result == Success(trivia=cached)
        local.get_number_trivia.assert_called_once_with(1)
        local.save_number_trivia.assert_not_called()

    def test_no_connectivity_when_offline_and_not_cached(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test NO_CONNECTIVITY when the remote is unreachable and nothing is cached."""
        remote.get_concrete_number_trivia.side_effect = NoConnectivityError()

        result = repository.get_number_trivia(1)

        assert isinstance(result, Failure)
        assert result.error is ErrorKind.NO_CONNECTIVITY
        local.get_number_trivia.assert_called_once_with(1)

    def test_not_found_skips_cache(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that NOT_FOUND is returned even when a cached copy exists."""
        remote.get_concrete_number_trivia.side_effect = NotFoundError("nothing for 1")
        local.get_number_trivia.return_value = NumberTrivia(number=1, text="stale")

        result = repository.get_number_trivia(1)

        assert result == Failure(error=ErrorKind.NOT_FOUND, message="nothing for 1")
        local.get_number_trivia.assert_not_called()
        local.save_number_trivia.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [RemoteSourceError("HTTP 500"), RuntimeError("HTTP 500"), ValueError("HTTP 500")],
    )
    def test_other_errors_are_unknown(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
        error: Exception,
    ) -> None:
        """Test that any other remote error maps to UNKNOWN without touching the cache."""
        remote.get_concrete_number_trivia.side_effect = error

        result = repository.get_number_trivia(1)

        assert result == Failure(error=ErrorKind.UNKNOWN, message="HTTP 500")
        local.get_number_trivia.assert_not_called()
        local.save_number_trivia.assert_not_called()

    def test_failed_save_still_succeeds(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that a failing save is logged and does not change the outcome."""
        trivia = NumberTrivia(number=1, text="trivia")
        remote.get_concrete_number_trivia.return_value = trivia
        local.save_number_trivia.side_effect = ConnectionError("redis down")

        with patch("number_trivia.repository.logger") as logger:
            result = repository.get_number_trivia(1)

        assert result == Success(trivia=trivia)
        logger.warning.assert_called_once()

    def test_failed_cache_lookup_is_unknown(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that a failing cache lookup during fallback maps to UNKNOWN."""
        remote.get_concrete_number_trivia.side_effect = NoConnectivityError()
        local.get_number_trivia.side_effect = ConnectionError("redis down")

        result = repository.get_number_trivia(1)

        assert result == Failure(error=ErrorKind.UNKNOWN, message="redis down")


class TestGetRandomNumberTrivia:
    """Tests for get_random_number_trivia."""

    def test_returns_remote_trivia(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
    ) -> None:
        """Test that a random remote record is returned as Success."""
        trivia = NumberTrivia(number=1337, text="trivia")
        remote.get_random_number_trivia.return_value = trivia

        result = repository.get_random_number_trivia()

        assert result == Success(trivia=trivia)
        remote.get_random_number_trivia.assert_called_once_with()
        remote.get_concrete_number_trivia.assert_not_called()

    def test_saves_remote_trivia_once(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that a random remote record is saved locally exactly once."""
        trivia = NumberTrivia(number=1337, text="trivia")
        remote.get_random_number_trivia.return_value = trivia

        repository.get_random_number_trivia()

        local.save_number_trivia.assert_called_once_with(trivia)

    def test_no_connectivity_does_not_consult_cache(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test NO_CONNECTIVITY without a local lookup when offline."""
        remote.get_random_number_trivia.side_effect = NoConnectivityError()
        local.get_number_trivia.return_value = NumberTrivia(number=1337, text="cached")

        result = repository.get_random_number_trivia()

        assert isinstance(result, Failure)
        assert result.error is ErrorKind.NO_CONNECTIVITY
        local.get_number_trivia.assert_not_called()

    def test_not_found(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test NOT_FOUND for a random lookup."""
        remote.get_random_number_trivia.side_effect = NotFoundError()

        result = repository.get_random_number_trivia()

        assert isinstance(result, Failure)
        assert result.error is ErrorKind.NOT_FOUND
        local.get_number_trivia.assert_not_called()

    def test_other_errors_are_unknown(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
    ) -> None:
        """Test that unexpected errors map to UNKNOWN."""
        remote.get_random_number_trivia.side_effect = KeyError("text")

        result = repository.get_random_number_trivia()

        assert isinstance(result, Failure)
        assert result.error is ErrorKind.UNKNOWN


class TestStatelessness:
    """Tests that calls are independent."""

    def test_offline_call_after_success_uses_local_not_memory(
        self,
        repository: NumberTriviaRepository,
        remote: MagicMock,
        local: MagicMock,
    ) -> None:
        """Test that the repository keeps no in-memory copy between calls."""
        remote.get_concrete_number_trivia.side_effect = [
            NumberTrivia(number=5, text="fresh"),
            NoConnectivityError(),
        ]

        first = repository.get_number_trivia(5)
        second = repository.get_number_trivia(5)

        assert isinstance(first, Success)
        assert second == Failure(
            error=ErrorKind.NO_CONNECTIVITY,
            message="No connection and no cached trivia for 5",
        )
