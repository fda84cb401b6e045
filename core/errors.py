# core/errors.py

from enum import Enum


class DocError(Enum):
    """Explicit result of a refused document edit or decoder step."""
    INVALID_OFFSET  = "invalid_offset"
    MALFORMED_ESCAPE = "malformed_escape"


class Notice(Enum):
    """User-facing signals, rendered as a bell and a visual no-op."""
    NO_COMPLETION    = "no_completion"
    NO_OLDER_HISTORY = "no_older_history"
    NO_NEWER_HISTORY = "no_newer_history"


class ConsoleError(Exception):
    pass


class InvalidOffset(ConsoleError, IndexError):
    def __init__(self, offset: int, length: int = 0):
        super().__init__(f"offset {offset} (length {length}) is outside the document")
        self.offset = offset
        self.length = length


class MalformedEscape(ConsoleError, ValueError):
    def __init__(self, sequence: str):
        super().__init__(f"unsupported escape sequence: {sequence.encode('unicode_escape').decode()}")
        self.sequence = sequence


class ParseFailure(ConsoleError, ValueError):
    pass
