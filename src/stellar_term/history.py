"""Up/down arrow navigation through submitted lines.

The cursor is either *idle* (``index is None``, the user is typing a
fresh line) or *navigating* (``index`` points into the history).

- **up** — from idle, jump to the most recent entry; otherwise step one
  entry older, stopping at the oldest.
- **down** — from idle, do nothing; otherwise step one entry newer.
  Stepping past the newest entry returns to idle with an empty line.

Whatever the user had typed before pressing up is not remembered:
coming back down past the newest entry yields ``""``, not the draft.
"""

from __future__ import annotations


class HistoryCursor:
    """Navigation state over a (live, growing) list of submitted lines."""

    def __init__(self, history: list[str]) -> None:
        """Navigate *history* (held by reference, so new submissions show up)."""
        self._history = history
        self._index: int | None = None

    @property
    def index(self) -> int | None:
        """Return the current position, or None when not navigating."""
        return self._index

    def reset(self) -> None:
        """Stop navigating (called after every submission)."""
        self._index = None

    def up(self) -> str | None:
        """Move toward older entries.

        Returns:
            The line to show in the input box, or None if nothing changes.

        """
        if not self._history:
            return None
        if self._index is None:
            self._index = len(self._history) - 1
        else:
            self._index = max(0, self._index - 1)
        return self._history[self._index]

    def down(self) -> str | None:
        """Move toward newer entries.

        Returns:
            The line to show, ``""`` when leaving navigation, or None if
            nothing changes.

        """
        if not self._history or self._index is None:
            return None
        next_index = self._index + 1
        if next_index >= len(self._history):
            self._index = None
            return ""
        self._index = next_index
        return self._history[next_index]
