"""Context-aware tab completer for the terminal session.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline in the REPL, a JSON
endpoint in the web UI).

Two modes, chosen by where the cursor is:

1. **Command mode** — still typing the first word: match registered
   command names (aliases included) by prefix.
2. **Path mode** — any later word: treat the word as a partial path,
   resolve its directory part against the working directory, and match
   the entries of that directory by prefix.

``complete_line(line)`` applies the terminal's policy to a whole input
line: one match completes it (with a trailing space, or ``/`` for a
directory); several matches extend the line to their longest common
prefix, or, when that adds nothing, are returned for display.

``complete(text, state)`` is the readline callback; it delegates to
``completions(text, line)``.
"""

from __future__ import annotations

import os
import re
import readline
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stellar_term.session import Session

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Completion:
    """Result of completing a whole input line.

    Attributes:
        line: The input line after completion (unchanged if nothing fit).
        matches: Candidates to show the user when the completion was
            ambiguous; empty otherwise.

    """

    line: str
    matches: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]


@dataclass(frozen=True)
class _PathMatch:
    text: str
    is_dir: bool


class Completer:
    """Tab completer bound to one session."""

    def __init__(self, session: Session) -> None:
        """Create a completer attached to a session.

        Args:
            session: The session whose registry, file system, and
                working directory are used to generate candidates.

        """
        self._session = session

    # -- readline -----------------------------------------------------------

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        candidates = self.completions(text, readline.get_line_buffer())
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates for the word *text* in *line*.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)
        return [
            match.text + ("/" if match.is_dir else "") for match in self._complete_paths(text)
        ]

    # -- whole-line policy ----------------------------------------------------

    def complete_line(self, line: str) -> Completion:
        """Complete the last word of *line* according to the terminal policy."""
        ends_with_space = bool(line) and line[-1].isspace()
        tokens = line.lstrip().split()
        if len(tokens) <= 1 and not ends_with_space:
            return self._complete_first_word(line, tokens[0] if tokens else "")

        parts = _WHITESPACE.split(line)
        last = parts[-1]
        if not last:
            return Completion(line=line)
        matches = self._complete_paths(last)
        if not matches:
            return Completion(line=line)
        if len(matches) == 1:
            only = matches[0]
            parts[-1] = only.text + ("/" if only.is_dir else " ")
            return Completion(line=" ".join(parts))

        head, base = _split_partial(last)
        names = [match.text[len(head) :] for match in matches]
        prefix = os.path.commonprefix(names)
        if prefix and prefix != base:
            parts[-1] = head + prefix
            return Completion(line=" ".join(parts))
        return Completion(line=line, matches=names)

    def _complete_first_word(self, line: str, partial: str) -> Completion:
        if not partial:
            return Completion(line=line)
        matches = self._complete_commands(partial)
        if len(matches) == 1:
            return Completion(line=matches[0] + " ")
        if not matches:
            return Completion(line=line)
        prefix = os.path.commonprefix(matches)
        if prefix and prefix != partial:
            return Completion(line=prefix)
        return Completion(line=line, matches=matches)

    # -- candidate sources ----------------------------------------------------

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the session's registry."""
        return [name for name in self._session.registry.names() if name.startswith(text)]

    def _complete_paths(self, partial: str) -> list[_PathMatch]:
        """Complete a partial path against the virtual file system.

        ``"pro"`` lists the working directory; ``"/home/gu"`` lists
        ``/home``; ``"../"`` lists the parent.  Each match keeps the
        directory part exactly as the user typed it.
        """
        head, base = _split_partial(partial)
        vfs = self._session.fs
        lookup = head.rstrip("/") or ("/" if head else ".")
        directory = vfs.resolve(self._session.cwd, lookup)
        if not vfs.is_dir(directory):
            return []
        return [
            _PathMatch(text=head + name, is_dir=vfs.is_dir(vfs.resolve(directory, name)))
            for name in vfs.list_dir(directory)
            if name.startswith(base)
        ]


def _split_partial(partial: str) -> tuple[str, str]:
    """Split ``"/home/gu"`` into ``("/home/", "gu")``; ``"gu"`` into ``("", "gu")``."""
    slash = partial.rfind("/")
    return partial[: slash + 1], partial[slash + 1 :]
