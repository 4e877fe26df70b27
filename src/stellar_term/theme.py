"""Terminal colour themes.

Three fixed palettes.  The session stores only the theme *name* (in
``env.THEME``); the presentation layer resolves it to a palette here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum


class ThemeName(StrEnum):
    """Names of the built-in themes, in cycle order."""

    CLASSIC = "classic"
    MONOKAI = "monokai"
    DRACULA = "dracula"


@dataclass(frozen=True)
class Theme:
    """A colour palette for the terminal surface."""

    name: ThemeName
    background: str
    foreground: str
    accent: str
    subtle: str
    cursor: str

    def to_dict(self) -> dict[str, str]:
        """Return the palette as plain strings (for JSON)."""
        return {key: str(value) for key, value in asdict(self).items()}


THEMES: dict[ThemeName, Theme] = {
    ThemeName.CLASSIC: Theme(
        name=ThemeName.CLASSIC,
        background="#0b0c0e",
        foreground="#e6edf3",
        accent="#58d68d",
        subtle="#8b949e",
        cursor="#2ecc71",
    ),
    ThemeName.MONOKAI: Theme(
        name=ThemeName.MONOKAI,
        background="#1f201c",
        foreground="#f8f8f2",
        accent="#a6e22e",
        subtle="#8a8a7e",
        cursor="#a6e22e",
    ),
    ThemeName.DRACULA: Theme(
        name=ThemeName.DRACULA,
        background="#1e1f29",
        foreground="#f8f8f2",
        accent="#50fa7b",
        subtle="#9aa3c0",
        cursor="#50fa7b",
    ),
}

THEME_NAMES: list[str] = [str(name) for name in ThemeName]


def resolve_theme(name: str | None) -> Theme:
    """Return the palette for *name*, falling back to classic."""
    try:
        return THEMES[ThemeName(name)]
    except ValueError:
        return THEMES[ThemeName.CLASSIC]


def next_theme(name: str | None) -> ThemeName:
    """Return the theme after *name* in the classic → monokai → dracula cycle.

    An unknown name restarts the cycle at monokai, as if the current
    theme were classic.
    """
    current = resolve_theme(name).name
    order = list(ThemeName)
    return order[(order.index(current) + 1) % len(order)]
