"""Interactive REPL (Read-Eval-Print Loop) for the terminal.

The REPL puts a ``Session`` on ``stdin``/``stdout``:

    1. **Read** — show the prompt and read a line.
    2. **Eval** — run it with ``session.submit()`` on one event loop
       that lives as long as the REPL.
    3. **Print** — output lines are written as the session appends them,
       so a running ``ping`` shows each reply as it arrives.
    4. **Loop** — until Ctrl+D or ``exit``.

Keys:
    - **Tab** completes via readline and the session's ``Completer``.
    - **Up/Down** walk readline's copy of the submitted lines.
    - **Ctrl+C** cancels a running command; at the prompt it abandons
      the half-typed line.
    - **Ctrl+L** clears the screen (readline's own binding).

The helpers (``build_prompt``, ``format_banner``, ``render_record``)
are pure and testable; ``run()`` is the I/O entrypoint.
"""

import asyncio
import readline
import signal

from stellar_term.net import browser_open
from stellar_term.session import InputLine, LineRecord, Session, Turn

_BANNER_WIDTH = 38
_CLEAR_SCREEN = "\033[2J\033[H"
EXIT_COMMANDS = frozenset({"exit", "logout"})


def format_banner() -> str:
    """Return the startup banner printed above the welcome line."""
    border = "=" * _BANNER_WIDTH
    return f"\n  {border}\n         Stellar Terminal v1.1\n  {border}\n"


def build_prompt(session: Session) -> str:
    """Return the live prompt with a trailing space, e.g. ``guest@stellar:/home/guest$ ``."""
    return f"{session.prompt()} "


def render_record(record: LineRecord) -> str:
    """Return how a scrollback record looks on a plain terminal."""
    if isinstance(record, InputLine):
        return f"{record.prompt()} {record.text}".rstrip()
    return record.text


def _echo_output(record: LineRecord) -> None:
    # The terminal already shows what the user typed.
    if not isinstance(record, InputLine):
        print(render_record(record))  # noqa: T201


def _clear_screen() -> None:
    print(_CLEAR_SCREEN, end="", flush=True)  # noqa: T201


async def run_turn(session: Session, line: str) -> Turn:
    """Submit *line*, routing SIGINT to ``session.cancel()`` while it runs."""
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, session.cancel)
    try:
        return await session.submit(line)
    finally:
        loop.remove_signal_handler(signal.SIGINT)


def run() -> None:
    """Start a session and run the interactive REPL.

    This is the ``stellar-term`` console entry point.
    """
    session = Session(open_link=browser_open, on_record=_echo_output, on_clear=_clear_screen)

    readline.set_completer(session.completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner())  # noqa: T201
    session.welcome()

    with asyncio.Runner() as runner:
        while True:
            try:
                line = input(build_prompt(session))
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break
            except KeyboardInterrupt:
                print("^C")  # noqa: T201
                session.interrupt(readline.get_line_buffer())
                continue

            if line.strip() in EXIT_COMMANDS:
                break
            runner.run(run_turn(session, line))

    print("logout")  # noqa: T201
