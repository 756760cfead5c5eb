"""Tests for identifier display names."""

from themestudio.identity import (
    display_name, is_drawing, readable, trailing_segment, STUDY_NAMES, DRAWING_NAMES
)


class TestDisplayName:
    """Test name resolution."""

    def test_known_study(self):
        assert display_name("VWAP") == "VWAP"
        assert display_name("BOLLINGER_BANDS") == "Bollinger Bands"

    def test_known_drawing(self):
        assert display_name("FIB_RETRACEMENT") == "Fibonacci Retracement"

    def test_namespaced_identifier(self):
        assert display_name("com.motivewave;RSI") == "Relative Strength Index"

    def test_unknown_identifier_fallback(self):
        assert display_name("custom_study_x") == "Custom Study X"

    def test_unknown_namespaced_identifier(self):
        assert display_name("acme.studies;my_delta_tool") == "My Delta Tool"

    def test_study_table_wins_over_drawing_table(self):
        shared = set(STUDY_NAMES) & set(DRAWING_NAMES)
        for ident in shared:
            assert display_name(ident) == STUDY_NAMES[ident]


class TestHelpers:
    """Test identifier helpers."""

    def test_trailing_segment(self):
        assert trailing_segment("a;b;c") == "c"
        assert trailing_segment("plain") == "plain"

    def test_readable(self):
        assert readable("one__two_three") == "One Two Three"

    def test_is_drawing(self):
        assert is_drawing("TREND_LINE")
        assert is_drawing("ns;TEXT")
        assert not is_drawing("VWAP")
        assert not is_drawing("unknown_tool")
