"""Tests for colour themes."""

from stellar_term.theme import THEME_NAMES, THEMES, ThemeName, next_theme, resolve_theme


class TestThemes:
    """Verify palettes and the theme cycle."""

    def test_names(self) -> None:
        """Three themes should be available, classic first."""
        assert THEME_NAMES == ["classic", "monokai", "dracula"]

    def test_resolve_known(self) -> None:
        """resolve_theme should return the named palette."""
        assert resolve_theme("monokai") is THEMES[ThemeName.MONOKAI]

    def test_resolve_unknown_falls_back(self) -> None:
        """Unknown or missing names should resolve to classic."""
        assert resolve_theme("neon").name is ThemeName.CLASSIC
        assert resolve_theme(None).name is ThemeName.CLASSIC

    def test_cycle(self) -> None:
        """next_theme should wrap around after dracula."""
        assert next_theme("classic") is ThemeName.MONOKAI
        assert next_theme("monokai") is ThemeName.DRACULA
        assert next_theme("dracula") is ThemeName.CLASSIC
        assert next_theme("neon") is ThemeName.MONOKAI

    def test_to_dict(self) -> None:
        """to_dict should give plain strings for every field."""
        palette = THEMES[ThemeName.CLASSIC].to_dict()
        assert palette["name"] == "classic"
        assert set(palette) == {"name", "background", "foreground", "accent", "subtle", "cursor"}
        assert all(value.startswith("#") for key, value in palette.items() if key != "name")
