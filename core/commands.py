# core/commands.py

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from core.controller import ConsoleController

log = logging.getLogger(__name__)

# handler(raw_line, argv, console)
CommandHandler = Callable[[str, List[str], "ConsoleController"], None]


def no_op(raw: str, argv: List[str], console: "ConsoleController") -> None:
    pass


def clear_screen(raw: str, argv: List[str], console: "ConsoleController") -> None:
    """Built-in handler for a `cls` style command."""
    console.clear_screen()


class CommandRegistry:
    """
    Maps case-folded command names to handlers and dispatches submitted lines.

    Every line first goes to the line processor (if any); then the handler
    registered for argv[0] runs, or the unrecognised handler when nothing
    matches.
    """

    def __init__(
        self,
        commands: Optional[Dict[str, CommandHandler]] = None,
        unrecognized: CommandHandler = no_op,
        line_processor: CommandHandler = no_op,
    ):
        self._commands: Dict[str, CommandHandler] = {}
        self._unrecognized = unrecognized
        self._line_processor = line_processor
        for name, handler in (commands or {}).items():
            self.register(name, handler)

    # ─── Registration ────────────────────────────────

    def register(self, name: str, handler: CommandHandler) -> None:
        self._commands[name.casefold()] = handler

    def unregister(self, name: str) -> None:
        self._commands.pop(name.casefold(), None)

    def set_unrecognized(self, handler: CommandHandler) -> None:
        self._unrecognized = handler

    def set_line_processor(self, handler: CommandHandler) -> None:
        self._line_processor = handler

    def names(self) -> List[str]:
        """Registered names, sorted; this is the default completion vocabulary."""
        return sorted(self._commands)

    def find(self, name: str) -> Optional[CommandHandler]:
        return self._commands.get(name.casefold())

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._commands

    # ─── Dispatch ────────────────────────────────────

    def dispatch(self, console: "ConsoleController", raw: str, argv: List[str]) -> bool:
        """
        Run the handlers for one submitted line. Returns True when a
        registered command matched.
        """
        self._call(self._line_processor, raw, argv, console)

        handler = self.find(argv[0]) if argv else None
        if handler is not None:
            self._call(handler, raw, argv, console)
            return True

        self._call(self._unrecognized, raw, argv, console)
        return False

    @staticmethod
    def _call(handler: CommandHandler, raw: str, argv: List[str], console: "ConsoleController") -> None:
        try:
            handler(raw, argv, console)
        except Exception as e:
            log.exception(f"Error in command handler for {raw!r}: {e}")
