"""Command registry — the table that maps names to handlers.

Each command is a ``CommandSpec``: a name, a one-line description, an
optional usage string, and a handler.  Handlers have one signature::

    handler(args: list[str], ctx: CommandContext) -> CommandResult | None

and may be plain functions or coroutine functions; the session awaits
the return value when it is awaitable, so it never needs to know in
advance which kind it is calling.

Design choices:
    - **Registry built per session.**  ``build_registry()`` in
      ``stellar_term.commands`` returns a fresh registry each time, so
      sessions (and tests) never share a module-level table.
    - **Frozen after startup.**  Once ``freeze()`` is called, ``add``
      and ``alias`` raise — the command set is fixed for the session.
    - **Aliases are copies.**  ``alias("dir", "ls")`` stores a full copy
      of the ``ls`` spec under the new name, with a derived description.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from stellar_term.context import CommandContext


@dataclass
class CommandResult:
    """What a command asks the session to do once it returns.

    Attributes:
        lines: Output lines to append, in order (None = print nothing).
        clear: Empty the scrollback before printing ``lines``.
        cwd: New working directory (None = unchanged).

    """

    lines: list[str] | None = None
    clear: bool = False
    cwd: str | None = None


HandlerReturn: TypeAlias = CommandResult | None
CommandHandler: TypeAlias = Callable[
    [list[str], "CommandContext"], HandlerReturn | Awaitable[HandlerReturn]
]


@dataclass(frozen=True)
class CommandSpec:
    """One registered command."""

    name: str
    description: str
    handler: CommandHandler
    usage: str | None = None

    def describe(self) -> list[str]:
        """Return the ``help <cmd>`` / ``man <cmd>`` lines for this command."""
        lines = [f"{self.name} - {self.description}"]
        if self.usage:
            lines.append(f"usage: {self.usage}")
        return lines


class CommandRegistry:
    """Name → ``CommandSpec`` table with alias support."""

    def __init__(self) -> None:
        """Create an empty, mutable registry."""
        self._specs: dict[str, CommandSpec] = {}
        self._frozen = False

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Command registry is frozen"
            raise RuntimeError(msg)

    def add(self, spec: CommandSpec) -> CommandSpec:
        """Register *spec* under its name (replacing any previous entry).

        Raises:
            RuntimeError: If the registry has been frozen.

        """
        self._check_mutable()
        self._specs[spec.name] = spec
        return spec

    def alias(self, new_name: str, existing: str, description: str | None = None) -> None:
        """Register *new_name* as a copy of the *existing* command.

        The copy's description defaults to ``"<description> (alias)"``.
        An unknown *existing* name is ignored.

        Raises:
            RuntimeError: If the registry has been frozen.

        """
        self._check_mutable()
        base = self._specs.get(existing)
        if base is None:
            return
        self._specs[new_name] = replace(
            base,
            name=new_name,
            description=description or f"{base.description} (alias)",
        )

    def freeze(self) -> CommandRegistry:
        """Make the registry read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Return True once the registry is read-only."""
        return self._frozen

    def get(self, name: str) -> CommandSpec | None:
        """Return the spec for *name*, or None."""
        return self._specs.get(name)

    def names(self) -> list[str]:
        """Return every command name (aliases included), sorted."""
        return sorted(self._specs)

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is registered."""
        return name in self._specs

    def __iter__(self) -> Iterator[CommandSpec]:
        """Iterate over specs in name order."""
        return (self._specs[name] for name in self.names())

    def __len__(self) -> int:
        """Return the number of registered names."""
        return len(self._specs)
