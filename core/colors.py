# core/colors.py

import colorsys
import logging
import math
import re
from typing import NamedTuple, Optional

from core.errors import MalformedEscape

log = logging.getLogger(__name__)

# --- ANSI Constants
ESC = '\x1b'
RESET_ANSI = f'{ESC}[0m'
ANSI_SGR_RE = re.compile(f'{re.escape(ESC)}\\[.{{1,4}}m')
HEX_DIRECTIVE_RE = re.compile(r'0x[0-9A-Fa-f]{6}')


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float) -> "Color":
        """Same rounding as java.awt.Color.getHSBColor (half up)."""
        rgb = colorsys.hsv_to_rgb(hue - math.floor(hue), saturation, brightness)
        return cls(*(int(c * 255.0 + 0.5) for c in rgb))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse '0xRRGGBB', '#RRGGBB' or a bare 'RRGGBB'.
        Raises ValueError for anything else.
        """
        digits = value.strip()
        if digits[:2].lower() == "0x":
            digits = digits[2:]
        elif digits.startswith("#"):
            digits = digits[1:]
        if len(digits) != 6:
            raise ValueError(f"not a six digit hex colour: {value!r}")
        n = int(digits, 16)
        return cls((n >> 16) & 0xFF, (n >> 8) & 0xFF, n & 0xFF)

    @property
    def hex(self) -> str:
        return f"0x{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def css(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)

D_BLACK   = Color.from_hsb(0.000, 0.000, 0.000)
D_RED     = Color.from_hsb(0.000, 1.000, 0.502)
D_GREEN   = Color.from_hsb(0.333, 1.000, 0.502)
D_YELLOW  = Color.from_hsb(0.167, 1.000, 0.502)
D_BLUE    = Color.from_hsb(0.667, 1.000, 0.502)
D_MAGENTA = Color.from_hsb(0.833, 1.000, 0.502)
D_CYAN    = Color.from_hsb(0.500, 1.000, 0.502)
D_WHITE   = Color.from_hsb(0.000, 0.000, 0.753)

B_BLACK   = Color.from_hsb(0.000, 0.000, 0.502)
B_RED     = Color.from_hsb(0.000, 1.000, 1.000)
B_GREEN   = Color.from_hsb(0.333, 1.000, 1.000)
B_YELLOW  = Color.from_hsb(0.167, 1.000, 1.000)
B_BLUE    = Color.from_hsb(0.667, 1.000, 1.000)
B_MAGENTA = Color.from_hsb(0.833, 1.000, 1.000)
B_CYAN    = Color.from_hsb(0.500, 1.000, 1.000)
B_WHITE   = Color.from_hsb(0.000, 0.000, 1.000)

_DIM    = (D_BLACK, D_RED, D_GREEN, D_YELLOW, D_BLUE, D_MAGENTA, D_CYAN, D_WHITE)
_BRIGHT = (B_BLACK, B_RED, B_GREEN, B_YELLOW, B_BLUE, B_MAGENTA, B_CYAN, B_WHITE)

# Every recognised SGR sequence. None is the reset colour; the controller
# turns it into the configured default foreground when rendering.
ANSI_COLOR_TABLE: dict[str, Optional[Color]] = {}
ANSI_COLOR_TABLE.update({f"{ESC}[{30 + i}m": c for i, c in enumerate(_DIM)})
ANSI_COLOR_TABLE.update({f"{ESC}[0;{30 + i}m": c for i, c in enumerate(_DIM)})
ANSI_COLOR_TABLE.update({f"{ESC}[1;{30 + i}m": c for i, c in enumerate(_BRIGHT)})
ANSI_COLOR_TABLE[RESET_ANSI] = None


def _printable(sequence: str) -> str:
    return sequence.replace(ESC, "\\u001B")


def supported_ansi_colors(show_escape: bool = True, delimiter: str = "\n") -> str:
    """All supported SGR sequences, optionally with ESC spelled out."""
    return delimiter.join(_printable(seq) if show_escape else seq for seq in ANSI_COLOR_TABLE)


def ansi_to_color(sequence: str) -> Optional[Color]:
    """
    Look up one SGR sequence. Returns None for the reset sequence.
    Raises MalformedEscape for sequences outside the table.
    """
    if sequence not in ANSI_COLOR_TABLE:
        raise MalformedEscape(sequence)
    return ANSI_COLOR_TABLE[sequence]


def color_distance(c1: Color, c2: Color) -> float:
    """Weighted ("redmean") RGB distance; 0 for equal colours."""
    rmean = (c1.r + c2.r) // 2
    r = c1.r - c2.r
    g = c1.g - c2.g
    b = c1.b - c2.b
    return math.sqrt((((512 + rmean) * r * r) >> 8) + 4 * g * g + (((767 - rmean) * b * b) >> 8))


def color_to_ansi(color: Color) -> str:
    """The SGR sequence whose colour is closest to `color`."""
    closest, closest_seq = D_BLUE, f"{ESC}[34m"
    for seq, candidate in ANSI_COLOR_TABLE.items():
        if candidate is None:
            continue
        if color_distance(color, candidate) < color_distance(color, closest):
            closest, closest_seq = candidate, seq
    return closest_seq


def adjust_brightness(color: Color, multiplier: float) -> Color:
    """
    Scale every channel by `multiplier`, constrained so the channels keep
    their ratio (nothing clips at 255, nothing non-zero drops to 0).
    """
    hi, lo = max(color), min(color)
    if hi == 0:
        return color
    max_multiplier = 255.0 / hi
    min_multiplier = 1.0 / lo if lo else 0.0
    multiplier = min(max_multiplier, max(multiplier, min_multiplier))
    return Color(*(min(255, int(round(c * multiplier))) for c in color))


def brightness(color: Color) -> float:
    """Perceived lightness, 0 for black and 100 for white."""
    channels = []
    for c in color:
        v = c / 255.0
        channels.append(v / 12.92 if v <= 0.04045 else ((v + 0.055) / 1.055) ** 2.4)

    luminance = 0.2126 * channels[0] + 0.7152 * channels[1] + 0.0722 * channels[2]
    if luminance <= 216.0 / 24389:
        return luminance * (24389.0 / 27)
    return luminance ** (1.0 / 3) * 116 - 16


def replace_all_ansi_with_hex(text: str, reset_color: Optional[Color] = None) -> str:
    """
    Rewrite every supported SGR sequence in `text` as a 0xRRGGBB directive.
    The reset sequence becomes `reset_color` (white when not given).
    Unsupported sequences are dropped.
    """
    def _repl(m: re.Match) -> str:
        seq = m.group(0)
        if seq not in ANSI_COLOR_TABLE:
            log.warning("Dropping unsupported ANSI escape sequence: %s", _printable(seq))
            return ""
        color = ANSI_COLOR_TABLE[seq]
        return (color or reset_color or WHITE).hex

    return ANSI_SGR_RE.sub(_repl, text)
