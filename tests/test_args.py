"""Tests for the shared argument helpers."""

import pytest

from stellar_term.commands._args import count_option, flag_letters, leading_int, positional
from stellar_term.errors import UsageError


class TestFlags:
    """Verify flag pooling and positional filtering."""

    def test_flag_letters_pool(self) -> None:
        """Combined and separate flags should pool their letters."""
        assert flag_letters(["-la", "x", "-n"]) == {"l", "a", "n"}

    def test_positional(self) -> None:
        """Dash tokens should be dropped."""
        assert positional(["-l", "a", "-r", "b"]) == ["a", "b"]


class TestCountOption:
    """Verify -n/-c style options."""

    def test_absent(self) -> None:
        """Without the flag, the default applies and args pass through."""
        option = count_option(["f"], "-n", 10, "head")
        assert option.count == 10  # noqa: PLR2004
        assert option.rest == ["f"]

    def test_value(self) -> None:
        """The flag's value should be parsed and both tokens removed."""
        option = count_option(["-n", "3", "f"], "-n", 10, "head")
        assert option.count == 3  # noqa: PLR2004
        assert option.rest == ["f"]

    def test_non_numeric_and_zero(self) -> None:
        """Non-numeric and zero values fall back to the default."""
        assert count_option(["-n", "x"], "-n", 10, "h").count == 10  # noqa: PLR2004
        assert count_option(["-n", "0"], "-n", 10, "h").count == 10  # noqa: PLR2004

    def test_negative_clamped(self) -> None:
        """Negative values are raised to one."""
        assert count_option(["-n", "-5"], "-n", 10, "h").count == 1

    def test_missing_value(self) -> None:
        """A trailing flag should raise UsageError with the usage text."""
        with pytest.raises(UsageError, match="usage: head"):
            count_option(["-n"], "-n", 10, "head")

    def test_leading_digits(self) -> None:
        """A value with trailing junk should use its leading digits."""
        assert count_option(["-n", "3x", "f"], "-n", 10, "h").count == 3  # noqa: PLR2004


class TestLeadingInt:
    """Verify prefix integer parsing."""

    def test_prefix(self) -> None:
        """Digits at the start are read; the rest is ignored."""
        assert leading_int("42") == 42  # noqa: PLR2004
        assert leading_int("7lines") == 7  # noqa: PLR2004
        assert leading_int("-2") == -2  # noqa: PLR2004

    def test_no_digits(self) -> None:
        """Text that does not start with a number reads as None."""
        assert leading_int("x3") is None
        assert leading_int("") is None
