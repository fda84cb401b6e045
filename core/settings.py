# core/settings.py
# Settings are console customisation options (fonts, colours, prompt, colour decoding).  Paths and tuning
# constants belong in core/config.py and the .env file.

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from core.colors import BLACK, WHITE, Color

SETTINGS_FILE = "settings.yaml"


@dataclass
class FontSpec:
    family: str = "monospace"
    size: int = 14
    bold: bool = True
    italic: bool = False


@dataclass
class ConsoleSettings:
    enable_ansi: bool = True
    hex_colors: bool = False
    reset_color_after_each_msg: bool = False
    default_foreground: Color = WHITE
    background: Color = BLACK
    input_color: Optional[Color] = None     # None: follow default_foreground
    font: FontSpec = field(default_factory=FontSpec)
    prompt: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ConsoleSettings":
        """Build settings from a (possibly partial) YAML mapping; unknown keys are ignored."""
        defaults = cls()
        font = data.get("font") or {}
        return cls(
            enable_ansi=bool(data.get("enable_ansi", defaults.enable_ansi)),
            hex_colors=bool(data.get("hex_colors", defaults.hex_colors)),
            reset_color_after_each_msg=bool(
                data.get("reset_color_after_each_msg", defaults.reset_color_after_each_msg)
            ),
            default_foreground=_color(data.get("default_foreground"), defaults.default_foreground),
            background=_color(data.get("background"), defaults.background),
            input_color=_color(data.get("input_color"), None),
            font=FontSpec(**{k: v for k, v in font.items() if k in FontSpec.__dataclass_fields__}),
            prompt=str(data.get("prompt", defaults.prompt)),
        )

    def to_dict(self) -> dict:
        return {
            "enable_ansi": self.enable_ansi,
            "hex_colors": self.hex_colors,
            "reset_color_after_each_msg": self.reset_color_after_each_msg,
            "default_foreground": self.default_foreground.css,
            "background": self.background.css,
            "input_color": self.input_color.css if self.input_color else None,
            "font": {
                "family": self.font.family,
                "size": self.font.size,
                "bold": self.font.bold,
                "italic": self.font.italic,
            },
            "prompt": self.prompt,
        }


def _color(value, default: Optional[Color]) -> Optional[Color]:
    # YAML reads an unquoted 0xRRGGBB as an int
    if isinstance(value, int) and not isinstance(value, bool):
        return Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    return Color.from_hex(str(value)) if value else default


def load_settings(profile_path: Path) -> dict:
    settings_file = profile_path / SETTINGS_FILE
    if not settings_file.exists():
        return {}
    with open(settings_file, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def save_settings(profile_path: Path, settings: dict) -> None:
    settings_file = profile_path / SETTINGS_FILE
    with open(settings_file, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings, f)


def load_console_settings(profile_path: Path) -> ConsoleSettings:
    return ConsoleSettings.from_dict(load_settings(profile_path))
