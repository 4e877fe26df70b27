"""Error taxonomy for command handlers and the session.

Handlers raise these when they prefer to bail out with an exception
instead of returning a result.  The session prints ``str(exc)`` as a
single output line, so the message should already read like terminal
output (``usage: cat <file>``, ``cat: x: No such file``).

``CommandCancelled`` is deliberately *not* a ``TerminalError``: it is
the cooperative-cancellation signal, rendered as ``^C`` and never as a
message.
"""


class TerminalError(Exception):
    """Base class for user-facing command failures."""


class UsageError(TerminalError):
    """Wrong or missing arguments."""

    def __init__(self, usage: str) -> None:
        """Build the ``usage: ...`` message from a usage string."""
        super().__init__(f"usage: {usage}")
        self.usage = usage


class NotFoundError(TerminalError):
    """A file, directory, or command does not exist."""


class TypeMismatchError(TerminalError):
    """A directory was given where a file was expected, or vice versa."""


class PreconditionError(TerminalError):
    """An operation's precondition does not hold (e.g. non-empty dir)."""


class CommandCancelled(Exception):  # noqa: N818
    """Raised inside a handler when its cancellation token fires."""


class SessionBusyError(RuntimeError):
    """A line was submitted while another command is still running."""
