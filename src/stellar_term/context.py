"""The context object handed to every command handler.

A handler never sees the session itself.  It gets a ``CommandContext``
exposing exactly what commands are allowed to touch: the working
directory, the environment, a restricted file system facade, output
emission, the history, and the cancellation token.

Paths given to ``ctx.fs`` are resolved against the *live* working
directory at call time, so a handler that changes directory and then
touches a relative path sees the new location.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from stellar_term.cancel import CancellationToken
from stellar_term.config import TerminalConfig
from stellar_term.env import Environment
from stellar_term.fs import FsStat, VirtualFS
from stellar_term.net import LinkOpener, Prober, discard_link, http_probe
from stellar_term.registry import CommandRegistry


class FsFacade:
    """File system operations bound to the session's working directory."""

    def __init__(self, vfs: VirtualFS, cwd: Callable[[], str]) -> None:
        """Wrap *vfs*, resolving relative paths against ``cwd()``."""
        self._vfs = vfs
        self._cwd = cwd

    def resolve(self, path: str) -> str:
        """Resolve *path* against the current working directory."""
        return self._vfs.resolve(self._cwd(), path)

    def read_file(self, path: str) -> str:
        """Return a file's content."""
        return self._vfs.read_file(self.resolve(path))

    def write_file(self, path: str, content: str) -> None:
        """Create or overwrite a file."""
        self._vfs.write_file(self.resolve(path), content)

    def append_file(self, path: str, content: str) -> None:
        """Append to a file, creating it when missing."""
        self._vfs.append_file(self.resolve(path), content)

    def exists(self, path: str) -> bool:
        """Return True if the path exists."""
        return self._vfs.exists(self.resolve(path))

    def is_dir(self, path: str) -> bool:
        """Return True if the path is a directory."""
        return self._vfs.is_dir(self.resolve(path))

    def list_dir(self, path: str = ".") -> list[str]:
        """Return sorted child names (empty for missing or file paths)."""
        return self._vfs.list_dir(self.resolve(path))

    def mkdir(self, path: str) -> None:
        """Create a directory and missing parents."""
        self._vfs.mkdir(self.resolve(path))

    def rm(self, path: str) -> None:
        """Delete a single entry."""
        self._vfs.rm(self.resolve(path))

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        self._vfs.rmdir(self.resolve(path))

    def tree(self, path: str = ".", depth: int = 2) -> str:
        """Render a directory tree."""
        resolved = self.resolve(path)
        return self._vfs.tree(resolved, depth)

    def stat(self, path: str) -> FsStat:
        """Return node metadata."""
        return self._vfs.stat(self.resolve(path))

    def touch(self, path: str) -> None:
        """Create an empty file or bump its timestamp."""
        self._vfs.touch(self.resolve(path))

    def rename(self, src: str, dest: str) -> None:
        """Move a file."""
        self._vfs.rename(self.resolve(src), self.resolve(dest))

    def copy_file(self, src: str, dest: str) -> None:
        """Copy a file."""
        self._vfs.copy_file(self.resolve(src), self.resolve(dest))


def _ignore_line(_text: str) -> None:
    """Discard output (the default sink)."""


@dataclass
class CommandContext:
    """Everything a handler may read or change during one turn.

    Attributes:
        fs: File system facade bound to the live working directory.
        env: The session environment (shared, not a copy).
        history: Lines submitted *before* this one, oldest first.
        token: Cancellation token for this turn.
        registry: The session's command table (for ``help``, ``which``).
        config: Session defaults (home directory, ping cadence).
        started_at: ``time.monotonic()`` when the session started.

    """

    fs: FsFacade
    env: Environment
    history: list[str]
    token: CancellationToken
    registry: CommandRegistry
    config: TerminalConfig
    get_cwd: Callable[[], str]
    set_cwd: Callable[[str], None]
    emit: Callable[[str], None] = _ignore_line
    clear: Callable[[], None] = field(default=lambda: None)
    open_link: LinkOpener = discard_link
    probe: Prober = http_probe
    started_at: float = 0.0

    @property
    def cwd(self) -> str:
        """Return the working directory as of now."""
        return self.get_cwd()

    def set_env(self, key: str, value: str) -> None:
        """Set an environment variable."""
        self.env.set(key, value)

    def print(self, text: str) -> None:
        """Append one output line immediately."""
        self.emit(text)

    def println(self, text: str = "") -> None:
        """Append one output line (an empty line by default)."""
        self.emit(text)
