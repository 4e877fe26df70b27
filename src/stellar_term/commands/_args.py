"""Argument helpers shared by the built-in commands.

The command language has no getopt: flags are dash-prefixed tokens
that may appear anywhere, and ``-n``/``-c`` style options take the
following token as their value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from stellar_term.errors import UsageError

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def leading_int(text: str) -> int | None:
    """Read the integer at the start of *text*, ignoring any trailing junk.

    ``"3x"`` reads as 3, ``"x3"`` as None.
    """
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def flag_letters(args: list[str]) -> set[str]:
    """Pool the letters of every dash token (``-la`` counts as ``l`` and ``a``)."""
    return {letter for arg in args if arg.startswith("-") for letter in arg.lstrip("-")}


def positional(args: list[str]) -> list[str]:
    """Return the tokens that are not flags."""
    return [arg for arg in args if not arg.startswith("-")]


@dataclass(frozen=True)
class CountOption:
    """The parsed value of a ``-n N`` / ``-c N`` style option."""

    count: int
    rest: list[str]


def count_option(args: list[str], flag: str, default: int, usage: str) -> CountOption:
    """Extract an integer option and its value from *args*.

    The value is read by ``leading_int``.  A non-numeric or zero value
    falls back to *default*; values below one are raised to one.

    Raises:
        UsageError: If *flag* is present without a value.

    """
    if flag not in args:
        return CountOption(count=default, rest=list(args))
    idx = args.index(flag)
    if idx + 1 >= len(args):
        raise UsageError(usage)
    count = leading_int(args[idx + 1]) or default
    rest = [arg for i, arg in enumerate(args) if i not in (idx, idx + 1)]
    return CountOption(count=max(1, count), rest=rest)


def pad_right(text: str, width: int) -> str:
    """Left-justify *text* in a field of *width* characters."""
    return text.ljust(width)


def human_date(timestamp: float) -> str:
    """Format an epoch timestamp in local time for listings."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")
