# ui/style.py

from PySide6.QtGui import QFont, QFontInfo

from core.settings import FontSpec

_MONO_FALLBACKS = ["Consolas", "Courier New", "DejaVu Sans Mono", "Monaco", "monospace"]


def get_mono_font(spec: FontSpec = None) -> QFont:
    spec = spec or FontSpec()
    for name in [spec.family] + _MONO_FALLBACKS:
        font = QFont(name)
        font.setStyleHint(QFont.Monospace)
        font.setFixedPitch(True)
        font.setPointSize(spec.size)
        font.setBold(spec.bold)
        font.setItalic(spec.italic)
        if QFontInfo(font).fixedPitch():
            return font
    return QFont("monospace", spec.size)
