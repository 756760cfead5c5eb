"""Tests for reading MotiveWave stylesheets."""

from themestudio.color_codec import ColorValue
from themestudio.css_theme import read_theme_colors, read_theme_file, DEFAULT_FONT


DARK_CSS = """
.root {
    -theme-color-main: rgb(30, 30, 34);
    -theme-color-secondary: rgb(45,45,50);
    -theme-color-mw-status-bar-bg: rgb(12, 12, 12);
    -theme-color-unknown-thing: rgb(1, 2, 3);
    -fx-font-family: 'Menlo';
    -fx-accent: rgb(0, 120, 215);
    -fx-focus-color: rgb(300, 0, 0);
}
"""


class TestReadThemeColors:
    """Test stylesheet color extraction."""

    def test_known_variables(self):
        theme = read_theme_colors(DARK_CSS)
        assert theme.colors == {
            "main": ColorValue(30, 30, 34),
            "secondary": ColorValue(45, 45, 50),
            "statusBar": ColorValue(12, 12, 12),
        }

    def test_font_and_accents(self):
        theme = read_theme_colors(DARK_CSS)
        assert theme.font == "Menlo"
        assert theme.accent == ColorValue(0, 120, 215)
        assert theme.focus == ColorValue(255, 0, 0)

    def test_empty_stylesheet(self):
        theme = read_theme_colors("")
        assert theme.colors == {}
        assert theme.font == DEFAULT_FONT
        assert theme.accent is None

    def test_to_json(self):
        payload = read_theme_colors(DARK_CSS).to_json()
        assert payload["colors"]["main"] == "#1e1e22"
        assert payload["focus"] == "#ff0000"


class TestReadThemeFile:
    """Test stylesheet file access."""

    def test_missing_file(self, tmp_path):
        assert read_theme_file(str(tmp_path / "dark.css")) is None

    def test_reads_file(self, tmp_path):
        path = tmp_path / "dark.css"
        path.write_text(DARK_CSS, encoding="utf-8")
        assert read_theme_file(str(path)).colors["main"] == ColorValue(30, 30, 34)
