"""Tests for the streaming ANSI / hex escape decoder."""
from core.colors import B_GREEN, D_RED, ESC, Color
from core.errors import DocError
from core.escape_decoder import EscapeDecoder, Run


def _text(runs):
    return "".join(r.text for r in runs)


def _decode_in_chunks(decoder, text, size):
    runs = []
    for i in range(0, len(text), size):
        runs.extend(decoder.feed(text[i:i + size]))
    return runs


def _flatten(runs):
    """Per-character colours; run boundaries are not significant."""
    return [(ch, r.color) for r in runs for ch in r.text]


def test_plain_text_is_one_default_run():
    assert EscapeDecoder().feed("hello") == [Run(None, "hello")]


def test_sgr_switches_colour_and_reset_returns_to_default():
    runs = EscapeDecoder().feed(f"{ESC}[31mHi{ESC}[0m!")
    assert runs == [Run(D_RED, "Hi"), Run(None, "!")]


def test_colour_carries_across_feeds():
    decoder = EscapeDecoder()
    decoder.feed(f"{ESC}[1;32mgo")
    assert decoder.current_color == B_GREEN
    assert decoder.feed("on") == [Run(B_GREEN, "on")]


def test_reset_after_each_message():
    decoder = EscapeDecoder(reset_color_after_each_msg=True)
    decoder.feed(f"{ESC}[31mred")
    assert decoder.feed("plain") == [Run(None, "plain")]


def test_split_sequence_is_buffered():
    decoder = EscapeDecoder()
    assert decoder.feed(f"ab{ESC}[3") == [Run(None, "ab")]
    assert decoder.pending == f"{ESC}[3"
    assert decoder.feed("1mX") == [Run(D_RED, "X")]
    assert decoder.pending == ""


def test_lone_trailing_escape_is_buffered():
    decoder = EscapeDecoder()
    assert decoder.feed(ESC) == []
    assert decoder.pending == ESC


def test_chunking_does_not_change_output():
    text = f"one {ESC}[31mtwo{ESC}[0m three {ESC}[1;34mfour 0x00ff00five{ESC}[0m"
    whole = _flatten(EscapeDecoder(hex_colors=True).feed(text))
    for size in range(1, 12):
        chunked = _flatten(_decode_in_chunks(EscapeDecoder(hex_colors=True), text, size))
        assert chunked == whole, f"chunk size {size}"


def test_non_sgr_csi_is_consumed_with_warning():
    warnings = []
    decoder = EscapeDecoder(on_warning=lambda err, seq: warnings.append((err, seq)))
    assert _text(decoder.feed(f"a{ESC}[2Jb")) == "ab"
    assert warnings == [(DocError.MALFORMED_ESCAPE, f"{ESC}[2J")]


def test_unsupported_sgr_resets_colour():
    warnings = []
    decoder = EscapeDecoder(on_warning=lambda err, seq: warnings.append(seq))
    runs = decoder.feed(f"{ESC}[31mred{ESC}[4munder")
    assert runs == [Run(D_RED, "red"), Run(None, "under")]
    assert warnings == [f"{ESC}[4m"]


def test_lone_escape_not_followed_by_bracket():
    warnings = []
    decoder = EscapeDecoder(on_warning=lambda err, seq: warnings.append(seq))
    assert _text(decoder.feed(f"a{ESC}Xb")) == "aXb"
    assert len(warnings) == 1


def test_malformed_parameter_byte_drops_sequence():
    warnings = []
    decoder = EscapeDecoder(on_warning=lambda err, seq: warnings.append(seq))
    assert _text(decoder.feed(f"a{ESC}[3\nb")) == "a\nb"
    assert warnings == [f"{ESC}[3"]


def test_ansi_disabled_keeps_escape_literal():
    decoder = EscapeDecoder(ansi=False)
    assert _text(decoder.feed(f"{ESC}[31mx")) == f"{ESC}[31mx"


def test_hex_directive_sets_colour():
    decoder = EscapeDecoder(hex_colors=True)
    runs = decoder.feed("a0xFF8000b")
    assert runs == [Run(None, "a"), Run(Color(255, 128, 0), "b")]


def test_hex_mode_off_leaves_directive_literal():
    assert _text(EscapeDecoder().feed("0xFF8000")) == "0xFF8000"


def test_hex_lookalike_is_literal_text():
    decoder = EscapeDecoder(hex_colors=True)
    assert _text(decoder.feed("10xZZ and 0x12345G")) == "10xZZ and 0x12345G"
    assert decoder.current_color is None


def test_partial_hex_directive_is_buffered():
    decoder = EscapeDecoder(hex_colors=True)
    assert _text(decoder.feed("x 0xff")) == "x "
    assert decoder.pending == "0xff"
    assert decoder.feed("0000!") == [Run(Color(255, 0, 0), "!")]


def test_explicit_start_colour_can_be_overridden_in_text():
    decoder = EscapeDecoder()
    runs = decoder.feed(f"a{ESC}[1;32mb", color=D_RED)
    assert runs == [Run(D_RED, "a"), Run(B_GREEN, "b")]


def test_flush_returns_pending_as_literal():
    decoder = EscapeDecoder()
    decoder.feed(f"{ESC}[3")
    assert decoder.flush() == [Run(None, f"{ESC}[3")]
    assert decoder.pending == ""


def test_reset_clears_state():
    decoder = EscapeDecoder()
    decoder.feed(f"{ESC}[31mx{ESC}[")
    decoder.reset()
    assert decoder.pending == ""
    assert decoder.current_color is None
