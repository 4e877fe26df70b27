"""Tests for the session log buffer."""

from stellar_term.logging import LogEntry, Logger, LogLevel


class TestLogger:
    """Verify logging, filtering, and capping."""

    def test_log_appends(self) -> None:
        """Entries should be stored in order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="session")
        logger.log(LogLevel.ERROR, "second", source="session", user="guest")
        assert [e.message for e in logger.entries] == ["first", "second"]
        assert logger.entries[1].user == "guest"
        assert len(logger) == 2  # noqa: PLR2004

    def test_filter_by_level(self) -> None:
        """min_level should drop lower severities."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="session")
        logger.log(LogLevel.WARNING, "warn", source="session")
        assert [e.message for e in logger.filter(min_level=LogLevel.INFO)] == ["warn"]

    def test_filter_by_source(self) -> None:
        """source should keep one subsystem's entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="session")
        logger.log(LogLevel.INFO, "b", source="web")
        assert [e.message for e in logger.filter(source="web")] == ["b"]

    def test_cap(self) -> None:
        """The oldest entries should be dropped past max_entries."""
        logger = Logger(max_entries=2)
        for i in range(3):
            logger.log(LogLevel.INFO, str(i), source="session")
        assert [e.message for e in logger.entries] == ["1", "2"]

    def test_clear(self) -> None:
        """clear should empty the buffer."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="session")
        logger.clear()
        assert logger.entries == []

    def test_entry_str(self) -> None:
        """An entry should format as ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="hi", source="session")
        assert str(entry) == "[WARNING] session: hi"
