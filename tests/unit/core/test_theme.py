"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import dirpurge.core.theme as theme_module
import pytest
from dirpurge.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#69B9A1"
        assert colors.trashed == "#faf870"
        assert colors.removed == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts valid hex color codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc", dry_run="#123456")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"
        assert colors.dry_run == "#123456"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(preserved="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\ntrashed = "#aabbcc"\n')

        result = _load_toml_colors(theme_file)

        assert result == {"text": "#000000", "trashed": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None

    def test_ignores_non_string_values(self, tmp_path: Path) -> None:
        """Non-string entries are dropped."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = 5\nmuted = "#111111"\n')

        assert _load_toml_colors(theme_file) == {"muted": "#111111"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_defaults_without_user_file(self) -> None:
        """Without a user theme the defaults apply."""
        assert load_theme() == ThemeColors()

    def test_user_theme_overrides(self, tmp_path: Path) -> None:
        """User theme overrides individual values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "#ff0000"\n')

        colors = load_theme(user_theme)

        assert colors.header == "#ff0000"
        assert colors.success == "#03b971"

    def test_default_location(self, isolated_xdg: Path) -> None:
        """The theme is read from the XDG config directory."""
        user_theme = isolated_xdg / "config" / "dirpurge" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nremoved = "#010203"\n')

        assert load_theme().removed == "#010203"

    def test_invalid_color_falls_back(self, tmp_path: Path) -> None:
        """An invalid user color falls back to all defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        assert load_theme(user_theme) == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme(self) -> None:
        """Returns a Rich Theme instance."""
        assert isinstance(get_rich_theme(), Theme)

    def test_includes_action_styles(self) -> None:
        """Theme includes the styles used by result tables."""
        theme = get_rich_theme(ThemeColors())

        for name in ("trashed", "removed", "preserved", "dry_run", "bold_header", "dim"):
            assert name in theme.styles


class TestGetTheme:
    """Tests for the cached theme accessor."""

    def test_cached(self) -> None:
        """The theme is built once."""
        with patch.object(theme_module, "_cached_theme", None):
            first = get_theme()
            second = get_theme()
        assert first is second
