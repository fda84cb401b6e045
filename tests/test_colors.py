"""Tests for the colour table and colour helpers."""
import pytest

from core.colors import (
    ANSI_COLOR_TABLE, BLACK, ESC, RESET_ANSI, WHITE,
    B_BLACK, B_RED, B_WHITE, D_BLACK, D_BLUE, D_RED, D_WHITE,
    Color, adjust_brightness, ansi_to_color, brightness, color_distance,
    color_to_ansi, replace_all_ansi_with_hex, supported_ansi_colors,
)
from core.errors import MalformedEscape


def test_table_has_three_forms_per_colour_plus_reset():
    assert len(ANSI_COLOR_TABLE) == 25
    assert ANSI_COLOR_TABLE[RESET_ANSI] is None


def test_dim_and_bright_values():
    assert D_RED == Color(128, 0, 0)
    assert B_RED == Color(255, 0, 0)
    assert D_BLACK == BLACK
    assert B_WHITE == WHITE
    assert D_WHITE == Color(192, 192, 192)
    assert B_BLACK == Color(128, 128, 128)


def test_plain_and_zero_prefixed_forms_are_dim():
    assert ansi_to_color(f"{ESC}[31m") == D_RED
    assert ansi_to_color(f"{ESC}[0;31m") == D_RED
    assert ansi_to_color(f"{ESC}[1;31m") == B_RED
    assert ansi_to_color(f"{ESC}[34m") == D_BLUE


def test_reset_maps_to_none():
    assert ansi_to_color(RESET_ANSI) is None


def test_unknown_sequence_raises():
    with pytest.raises(MalformedEscape):
        ansi_to_color(f"{ESC}[38;5;1m")
    with pytest.raises(ValueError):
        ansi_to_color(f"{ESC}[4m")


def test_from_hex_accepts_three_spellings():
    expected = Color(255, 128, 0)
    assert Color.from_hex("0xFF8000") == expected
    assert Color.from_hex("#ff8000") == expected
    assert Color.from_hex("ff8000") == expected


def test_from_hex_rejects_bad_input():
    with pytest.raises(ValueError):
        Color.from_hex("0xFF80")
    with pytest.raises(ValueError):
        Color.from_hex("0xZZZZZZ")


def test_hex_and_css():
    c = Color(1, 2, 255)
    assert c.hex == "0x0102ff"
    assert c.css == "#0102ff"


def test_color_distance_is_zero_for_equal_colours():
    assert color_distance(D_RED, D_RED) == 0
    assert color_distance(BLACK, WHITE) > color_distance(BLACK, D_WHITE)


def test_color_to_ansi_picks_nearest():
    assert ansi_to_color(color_to_ansi(Color(250, 5, 5))) == B_RED
    assert ansi_to_color(color_to_ansi(Color(120, 0, 0))) == D_RED


def test_adjust_brightness_keeps_ratio_without_clipping():
    assert adjust_brightness(Color(100, 50, 0), 2.0) == Color(200, 100, 0)
    assert adjust_brightness(Color(200, 100, 0), 2.0) == Color(255, 128, 0)
    assert adjust_brightness(BLACK, 3.0) == BLACK


def test_brightness_range():
    assert brightness(BLACK) == 0
    assert brightness(WHITE) == pytest.approx(100, abs=0.01)
    assert 0 < brightness(D_RED) < brightness(B_RED)


def test_replace_all_ansi_with_hex():
    text = f"{ESC}[31mred{RESET_ANSI} plain {ESC}[9mdropped"
    assert replace_all_ansi_with_hex(text) == "0x800000red0xffffff plain dropped"
    assert replace_all_ansi_with_hex(RESET_ANSI, reset_color=Color(1, 1, 1)) == "0x010101"


def test_supported_ansi_colors_listing():
    listing = supported_ansi_colors(show_escape=True, delimiter=",")
    assert ESC not in listing
    assert "\\u001B[31m" in listing.split(",")
    assert len(supported_ansi_colors(show_escape=False).split("\n")) == 25
