"""Tests for the REPL helpers.

The REPL itself is an I/O loop, so we test the pieces it is built
from: the prompt, the banner, record rendering, and the turn runner.
"""

import asyncio

from stellar_term.repl import build_prompt, format_banner, render_record, run_turn
from stellar_term.session import InputLine, OutputLine, Session, SystemLine


class TestREPLHelpers:
    """Verify REPL helper functions."""

    def test_build_prompt(self) -> None:
        """The prompt should end with ``$ ``."""
        assert build_prompt(Session()) == "guest@stellar:/home/guest$ "

    def test_prompt_follows_cd(self) -> None:
        """The prompt should show the new directory after cd."""
        session = Session()
        session.execute("cd /projects")
        assert build_prompt(session) == "guest@stellar:/projects$ "

    def test_format_banner(self) -> None:
        """The banner should name the terminal."""
        assert "Stellar Terminal v1.1" in format_banner()

    def test_render_input(self) -> None:
        """Input records should render with their snapshot prompt."""
        record = InputLine("ls", "guest", "stellar", "/")
        assert render_record(record) == "guest@stellar:/$ ls"

    def test_render_blank_input(self) -> None:
        """A blank input record should render as the bare prompt."""
        assert render_record(InputLine("", "guest", "stellar", "/")) == "guest@stellar:/$"

    def test_render_output_and_system(self) -> None:
        """Output and system records render as their text."""
        assert render_record(OutputLine("hi")) == "hi"
        assert render_record(SystemLine("welcome")) == "welcome"


class TestRunTurn:
    """Verify the turn runner used by the loop."""

    def test_run_turn_returns_output(self) -> None:
        """run_turn should submit the line and return the turn."""
        turn = asyncio.run(run_turn(Session(), "echo hi"))
        assert turn.output == ["hi"]
