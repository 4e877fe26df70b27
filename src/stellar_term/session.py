"""The session — interpreter loop for the terminal.

A session owns everything one terminal window remembers: the working
directory, the environment, the submitted lines, and the scrollback of
rendered line records.  It reads one raw line at a time, looks the
command up in its registry, runs the handler, and applies the result.

Each submitted line is one **turn**, with an explicit state machine::

    IDLE  →  RUNNING  →  IDLE

While a turn is RUNNING the only thing the session accepts is
``cancel()``; a second ``submit()`` raises ``SessionBusyError`` rather
than queueing.  Whatever happens inside the handler — a result, an
exception, or cancellation — the turn ends back in IDLE.

Design choices:
    - **Records, not prints.**  The session appends ``InputLine`` /
      ``OutputLine`` records and returns them from ``submit()``; the
      caller decides how to draw them.
    - **Prompt snapshots.**  An ``InputLine`` stores the user, host, and
      working directory *at submission time*, so old lines keep their
      original prompt after a later ``cd``.
    - **Uniform dispatch.**  Handlers may be plain or coroutine
      functions; the session awaits whatever is awaitable.
    - **Single point of failure handling.**  Any exception a handler
      lets escape becomes one printed line; the session never crashes.
"""

from __future__ import annotations

from typing import TypeAlias

import asyncio
import inspect
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from stellar_term.cancel import CancellationToken
from stellar_term.commands import build_registry
from stellar_term.completer import Completer
from stellar_term.config import TerminalConfig
from stellar_term.context import CommandContext, FsFacade
from stellar_term.env import Environment
from stellar_term.errors import CommandCancelled, SessionBusyError, TerminalError
from stellar_term.fs import VirtualFS, normalize
from stellar_term.history import HistoryCursor
from stellar_term.logging import Logger, LogLevel
from stellar_term.net import LinkOpener, Prober, discard_link, http_probe
from stellar_term.registry import CommandRegistry, CommandResult
from stellar_term.theme import Theme, next_theme, resolve_theme

WELCOME = "Welcome to Stellar Terminal. Type `help` to begin."
CANCEL_MARK = "^C"


class SessionState(StrEnum):
    """Lifecycle of a single turn."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class InputLine:
    """A submitted line, drawn after the prompt it was typed at."""

    text: str
    prompt_user: str
    prompt_host: str
    prompt_cwd: str

    @property
    def kind(self) -> str:
        """Return ``"input"``."""
        return "input"

    def prompt(self) -> str:
        """Return the prompt as it looked when the line was submitted."""
        return f"{self.prompt_user}@{self.prompt_host}:{self.prompt_cwd}$"


@dataclass(frozen=True)
class OutputLine:
    """One line printed by a command or by the session."""

    text: str

    @property
    def kind(self) -> str:
        """Return ``"output"``."""
        return "output"


@dataclass(frozen=True)
class SystemLine:
    """A line the session prints about itself (the welcome banner)."""

    text: str

    @property
    def kind(self) -> str:
        """Return ``"system"``."""
        return "system"


LineRecord: TypeAlias = InputLine | OutputLine | SystemLine


@dataclass
class Turn:
    """What one ``submit()`` call added to the scrollback.

    Attributes:
        records: Records appended during the turn (after any clear).
        cleared: True if the scrollback was emptied during the turn.
        cancelled: True if the turn ended with ``^C``.

    """

    records: list[LineRecord] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    cleared: bool = False
    cancelled: bool = False

    @property
    def output(self) -> list[str]:
        """Return the text of every output line in the turn."""
        return [r.text for r in self.records if isinstance(r, OutputLine)]


class Session:
    """One interactive terminal: state, scrollback, and the turn loop."""

    def __init__(
        self,
        *,
        config: TerminalConfig | None = None,
        vfs: VirtualFS | None = None,
        registry: CommandRegistry | None = None,
        open_link: LinkOpener = discard_link,
        probe: Prober = http_probe,
        logger: Logger | None = None,
        on_record: Callable[[LineRecord], None] | None = None,
        on_clear: Callable[[], None] | None = None,
    ) -> None:
        """Create an idle session.

        Args:
            config: Startup settings (defaults to ``TerminalConfig()``).
            vfs: The file system (defaults to a freshly seeded one).
            registry: Command table (defaults to ``build_registry()``).
            open_link: Called by ``open`` with a validated URL.
            probe: Called by ``ping`` once per packet.
            logger: Audit log (defaults to a new ``Logger``).
            on_record: Called with every record as it is appended.
            on_clear: Called whenever the scrollback is emptied.

        """
        self._config = config or TerminalConfig()
        self._fs = vfs if vfs is not None else VirtualFS()
        self._registry = registry if registry is not None else build_registry()
        self._open_link = open_link
        self._probe = probe
        self._logger = logger if logger is not None else Logger()
        self._on_record = on_record
        self._on_clear = on_clear

        self._cwd = normalize(self._config.home)
        self._env = Environment(self._config.initial_env())
        self._env.set("PWD", self._cwd)
        self._history: list[str] = []
        self._scrollback: list[LineRecord] = []
        self._state = SessionState.IDLE
        self._token: CancellationToken | None = None
        self._turn: Turn | None = None
        self._welcomed = False
        self._started_at = time.monotonic()

        self._cursor = HistoryCursor(self._history)
        self._completer = Completer(self)

    # -- read-only views ------------------------------------------------------

    @property
    def cwd(self) -> str:
        """Return the current working directory."""
        return self._cwd

    @property
    def env(self) -> Environment:
        """Return the session environment."""
        return self._env

    @property
    def fs(self) -> VirtualFS:
        """Return the session's file system."""
        return self._fs

    @property
    def registry(self) -> CommandRegistry:
        """Return the command registry."""
        return self._registry

    @property
    def config(self) -> TerminalConfig:
        """Return the startup settings."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the audit log."""
        return self._logger

    @property
    def completer(self) -> Completer:
        """Return the tab completer bound to this session."""
        return self._completer

    @property
    def history(self) -> list[str]:
        """Return the submitted lines, oldest first."""
        return list(self._history)

    @property
    def scrollback(self) -> list[LineRecord]:
        """Return the rendered line records, oldest first."""
        return list(self._scrollback)

    @property
    def open_link(self) -> LinkOpener:
        """Return the callable ``open`` hands validated URLs to."""
        return self._open_link

    @open_link.setter
    def open_link(self, opener: LinkOpener) -> None:
        """Route later ``open`` calls to *opener*; takes effect next turn."""
        self._open_link = opener

    @property
    def state(self) -> SessionState:
        """Return IDLE or RUNNING."""
        return self._state

    @property
    def running(self) -> bool:
        """Return True while a command is in flight."""
        return self._state is SessionState.RUNNING

    @property
    def theme(self) -> Theme:
        """Return the palette for ``env.THEME``."""
        return resolve_theme(self._env.get("THEME"))

    @property
    def user(self) -> str:
        """Return ``env.USER``."""
        return self._env.get("USER") or ""

    @property
    def host(self) -> str:
        """Return ``env.HOST``."""
        return self._env.get("HOST") or ""

    def prompt(self) -> str:
        """Return the live prompt, e.g. ``guest@stellar:/home/guest$``."""
        return f"{self.user}@{self.host}:{self._cwd}$"

    # -- scrollback -----------------------------------------------------------

    def _append(self, record: LineRecord) -> None:
        self._scrollback.append(record)
        if self._turn is not None:
            self._turn.records.append(record)
        if self._on_record is not None:
            self._on_record(record)

    def print(self, text: str) -> None:
        """Append one output line."""
        self._append(OutputLine(text=text))

    def clear(self) -> None:
        """Empty the scrollback (Ctrl+L, or a command's clear request)."""
        self._scrollback.clear()
        if self._turn is not None:
            self._turn.records.clear()
            self._turn.cleared = True
        if self._on_clear is not None:
            self._on_clear()

    def welcome(self) -> None:
        """Print the welcome banner the first time it is called."""
        if self._welcomed:
            return
        self._welcomed = True
        self._append(SystemLine(text=WELCOME))
        self._append(SystemLine(text=""))

    def _snapshot(self, text: str) -> InputLine:
        return InputLine(
            text=text,
            prompt_user=self.user,
            prompt_host=self.host,
            prompt_cwd=self._cwd,
        )

    # -- state changes --------------------------------------------------------

    def set_cwd(self, path: str) -> None:
        """Move the working directory and mirror it into ``env.PWD``."""
        self._cwd = normalize(self._fs.resolve(self._cwd, path))
        self._env.set("PWD", self._cwd)

    def cycle_theme(self) -> Theme:
        """Advance classic → monokai → dracula → classic and return the palette."""
        name = next_theme(self._env.get("THEME"))
        self._env.set("THEME", str(name))
        self._log(LogLevel.INFO, f"theme set to {name}")
        return self.theme

    def _log(self, level: LogLevel, message: str) -> None:
        self._logger.log(level, message, source="session", user=self.user)

    # -- the turn loop --------------------------------------------------------

    async def submit(self, raw: str) -> Turn:
        """Run one line through the interpreter.

        The line is recorded as an ``InputLine`` even when blank; a
        blank line does nothing else.  Non-blank lines are added to the
        history before their command runs.

        Args:
            raw: The line exactly as typed.

        Returns:
            The records this turn added to the scrollback.

        Raises:
            SessionBusyError: If another command is still running.

        """
        if self._state is SessionState.RUNNING:
            msg = "a command is already running"
            raise SessionBusyError(msg)

        turn = Turn()
        self._turn = turn
        try:
            tokens = raw.split()
            self._append(self._snapshot(raw if tokens else ""))
            if not tokens:
                return turn

            prior_history = list(self._history)
            self._history.append(raw)
            self._cursor.reset()

            name, args = tokens[0], tokens[1:]
            spec = self._registry.get(name)
            if spec is None:
                self._log(LogLevel.WARNING, f"command not found: {name}")
                self.print(f"command not found: {name}")
                return turn

            self._log(LogLevel.DEBUG, f"run {raw.strip()}")
            token = CancellationToken()
            self._token = token
            self._state = SessionState.RUNNING
            try:
                result = spec.handler(args, self._context(token, prior_history))
                if inspect.isawaitable(result):
                    result = await result
                token.raise_if_cancelled()
                self._apply(result)
            except CommandCancelled:
                turn.cancelled = True
                self._log(LogLevel.INFO, f"cancelled: {name}")
                self.print(CANCEL_MARK)
            except TerminalError as e:
                self._log(LogLevel.WARNING, str(e))
                self.print(str(e))
            except Exception as e:  # noqa: BLE001
                if token.cancelled:
                    turn.cancelled = True
                    self.print(CANCEL_MARK)
                else:
                    self._log(LogLevel.ERROR, f"{name}: {type(e).__name__}: {e}")
                    self.print(str(e) or type(e).__name__)
            finally:
                self._token = None
                self._state = SessionState.IDLE
            return turn
        finally:
            self._turn = None

    def run(self, raw: str) -> Turn:
        """Run one line to completion on a fresh event loop.

        For callers without an event loop of their own (the web UI).
        """
        return asyncio.run(self.submit(raw))

    def execute(self, raw: str) -> list[str]:
        """Run one line to completion and return its output lines."""
        return self.run(raw).output

    def cancel(self) -> bool:
        """Cancel the in-flight command.

        Returns:
            True if a command was running, False otherwise.

        """
        if self._token is None:
            return False
        self._token.cancel()
        return True

    def interrupt(self, partial: str = "") -> None:
        """Handle Ctrl+C.

        While a command runs, this cancels it.  At the prompt, a
        half-typed line is recorded as ``<partial>^C`` and discarded.
        """
        if self.running:
            self.cancel()
            return
        if partial:
            self._append(self._snapshot(partial + CANCEL_MARK))
            self._cursor.reset()

    def _context(self, token: CancellationToken, history: list[str]) -> CommandContext:
        def emit(text: str) -> None:
            if not token.cancelled:
                self.print(text)

        return CommandContext(
            fs=FsFacade(self._fs, lambda: self._cwd),
            env=self._env,
            history=history,
            token=token,
            registry=self._registry,
            config=self._config,
            get_cwd=lambda: self._cwd,
            set_cwd=self.set_cwd,
            emit=emit,
            clear=self.clear,
            open_link=self._open_link,
            probe=self._probe,
            started_at=self._started_at,
        )

    def _apply(self, result: CommandResult | None) -> None:
        """Apply a handler's result: clear, then print, then move."""
        if result is None:
            return
        if result.clear:
            self.clear()
        for line in result.lines or []:
            self.print(line)
        if result.cwd is not None:
            self.set_cwd(result.cwd)

    # -- line editing ---------------------------------------------------------

    def history_up(self) -> str | None:
        """Return the older history entry for the input box, or None."""
        return self._cursor.up()

    def history_down(self) -> str | None:
        """Return the newer history entry (``""`` past the end), or None."""
        return self._cursor.down()

    def complete(self, line: str) -> str:
        """Tab-complete *line* and return the new input.

        Ambiguous matches are printed as one output line.  Nothing
        happens while a command is running.
        """
        if self.running:
            return line
        completion = self._completer.complete_line(line)
        if completion.matches:
            self.print("  ".join(completion.matches))
        return completion.line
