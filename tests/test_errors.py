"""Tests for the error taxonomy."""

from stellar_term.errors import (
    CommandCancelled,
    NotFoundError,
    PreconditionError,
    TerminalError,
    TypeMismatchError,
    UsageError,
)
from stellar_term.logging import LogLevel
from stellar_term.session import Session


class TestErrors:
    """Verify error messages and hierarchy."""

    def test_usage_message(self) -> None:
        """UsageError should prefix ``usage:`` and keep the raw usage."""
        error = UsageError("cat <file>")
        assert str(error) == "usage: cat <file>"
        assert error.usage == "cat <file>"

    def test_family(self) -> None:
        """User-facing errors share a base; cancellation does not."""
        for cls in (UsageError, NotFoundError, TypeMismatchError, PreconditionError):
            assert issubclass(cls, TerminalError)
        assert not issubclass(CommandCancelled, TerminalError)

    def test_terminal_errors_logged_as_warnings(self) -> None:
        """A TerminalError should be printed and logged at WARNING."""
        session = Session()
        assert session.execute("rm /projects") == ["rm: is a directory (use -r)"]
        entries = session.logger.filter(min_level=LogLevel.WARNING)
        assert [e.level for e in entries] == [LogLevel.WARNING]
