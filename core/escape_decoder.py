# core/escape_decoder.py

import logging
from string import hexdigits
from typing import Callable, List, NamedTuple, Optional

from core.colors import ANSI_COLOR_TABLE, ESC, HEX_DIRECTIVE_RE, Color
from core.errors import DocError

log = logging.getLogger(__name__)

HEX_DIRECTIVE_LEN = 8  # "0x" + RRGGBB


class Run(NamedTuple):
    """A stretch of text sharing one foreground colour (None = default)."""
    color: Optional[Color]
    text: str


class EscapeDecoder:
    """
    Streaming decoder that turns text with interleaved ANSI SGR sequences
    and 0xRRGGBB hex directives into colour runs.

    Writes may split a control sequence anywhere: an unterminated tail is kept
    in `pending` and prepended to the next `feed`. Malformed sequences are
    consumed and reported through `on_warning`; the decoder never raises.
    """

    def __init__(
        self,
        *,
        ansi: bool = True,
        hex_colors: bool = False,
        reset_color_after_each_msg: bool = False,
        on_warning: Optional[Callable[[DocError, str], None]] = None,
    ):
        self.ansi = ansi
        self.hex_colors = hex_colors
        self.reset_color_after_each_msg = reset_color_after_each_msg
        self.on_warning = on_warning

        self._color: Optional[Color] = None
        self._pending = ""

    # ─── State ────────────────────────────────────────────────────

    @property
    def current_color(self) -> Optional[Color]:
        return self._color

    @current_color.setter
    def current_color(self, color: Optional[Color]) -> None:
        self._color = color

    @property
    def pending(self) -> str:
        return self._pending

    def reset(self) -> None:
        """Drop any buffered partial sequence and return to the default colour."""
        self._pending = ""
        self._color = None

    # ─── Decoding ─────────────────────────────────────────────────

    def feed(self, text: str, color: Optional[Color] = None) -> List[Run]:
        """
        Decode one chunk. `color`, when given, is the colour decoding starts
        in (it overrides the carried-over colour but not later directives).
        """
        if self.reset_color_after_each_msg:
            self._color = None
        if color is not None:
            self._color = color

        data = self._pending + text
        self._pending = ""

        runs: List[Run] = []
        start = i = 0
        n = len(data)

        while i < n:
            ch = data[i]

            if ch == ESC and self.ansi:
                end = self._consume_escape(data, i)
                if end is None:
                    self._emit(runs, data[start:i])
                    self._pending = data[i:]
                    return runs
                self._emit(runs, data[start:i])
                i = start = end
                continue

            if ch == "0" and self.hex_colors:
                tail = data[i:i + HEX_DIRECTIVE_LEN]
                if len(tail) < HEX_DIRECTIVE_LEN and self._is_hex_prefix(tail):
                    self._emit(runs, data[start:i])
                    self._pending = tail
                    return runs
                if HEX_DIRECTIVE_RE.fullmatch(tail):
                    self._emit(runs, data[start:i])
                    self._color = Color.from_hex(tail)
                    i = start = i + HEX_DIRECTIVE_LEN
                    continue

            i += 1

        self._emit(runs, data[start:])
        return runs

    def flush(self) -> List[Run]:
        """Emit a buffered partial sequence as literal text."""
        runs: List[Run] = []
        self._emit(runs, self._pending)
        self._pending = ""
        return runs

    # ─── Internals ────────────────────────────────────────────────

    def _emit(self, runs: List[Run], text: str) -> None:
        if text:
            runs.append(Run(self._color, text))

    @staticmethod
    def _is_hex_prefix(tail: str) -> bool:
        if tail == "0":
            return True
        return tail[1] == "x" and all(c in hexdigits for c in tail[2:])

    def _consume_escape(self, data: str, i: int) -> Optional[int]:
        """
        Apply the control sequence starting at data[i] (an ESC).
        Returns the index just past it, or None if the sequence is unterminated.
        """
        n = len(data)
        if i + 1 >= n:
            return None

        if data[i + 1] != "[":
            self._warn("lone ESC not followed by '['", data[i:i + 2])
            return i + 1

        j = i + 2
        while j < n:
            c = data[j]
            if "\x20" <= c <= "\x3f":
                # parameter and intermediate bytes
                j += 1
                continue

            if "\x40" <= c <= "\x7e":
                seq = data[i:j + 1]
                if c != "m":
                    self._warn("ignoring non-SGR control sequence", seq)
                elif seq in ANSI_COLOR_TABLE:
                    self._color = ANSI_COLOR_TABLE[seq]
                else:
                    self._warn("unsupported SGR sequence, resetting colour", seq)
                    self._color = None
                return j + 1

            self._warn("malformed control sequence", data[i:j])
            return j

        return None

    def _warn(self, message: str, sequence: str) -> None:
        log.warning("[ANSI] %s: %r", message, sequence)
        if self.on_warning:
            self.on_warning(DocError.MALFORMED_ESCAPE, sequence)
