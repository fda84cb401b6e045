# ui/keymap.py

from typing import Optional, Tuple

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent

from core.controller import Key

_KEY_MAP = {int(k): v for k, v in {
    Qt.Key_Tab:       Key.TAB,
    Qt.Key_Up:        Key.UP,
    Qt.Key_Down:      Key.DOWN,
    Qt.Key_Left:      Key.LEFT,
    Qt.Key_Right:     Key.RIGHT,
    Qt.Key_Home:      Key.HOME,
    Qt.Key_End:       Key.END,
    Qt.Key_Return:    Key.ENTER,
    Qt.Key_Enter:     Key.ENTER,
    Qt.Key_Backspace: Key.BACKSPACE,
    Qt.Key_Delete:    Key.DELETE,
}.items()}

_NAVIGATION_MODIFIERS = Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier


def translate_key(event: QKeyEvent) -> Optional[Tuple[Key, str]]:
    """
    Map a Qt key event onto a console key. Returns None for anything the
    console doesn't handle (modifier-only presses, shortcuts).
    """
    key = event.key()
    mods = event.modifiers()

    mapped = _KEY_MAP.get(int(key))
    if mapped is not None:
        return mapped, ""

    if mods & _NAVIGATION_MODIFIERS:
        return None

    text = event.text()
    if text and text.isprintable():
        return Key.CHAR, text
    return None
