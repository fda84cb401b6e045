# core/controller.py

import logging
from enum import Enum, auto
from typing import List, Optional, Protocol, Sequence

from core.colors import Color
from core.commands import CommandRegistry
from core.completion import CompletionSource, VocabularyCompletionSource
from core.config import HISTORY_MAX_ENTRIES
from core.document import ConsoleDocument
from core.errors import DocError, Notice
from core.escape_decoder import EscapeDecoder, Run
from core.event_bus import EventBus
from core.history import CommandHistory
from core.history_store import HistoryStore
from core.input_log import UserInputLog
from core.line_parser import parse_line
from core.settings import ConsoleSettings

log = logging.getLogger(__name__)


class Key(Enum):
    TAB = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    ENTER = auto()
    BACKSPACE = auto()
    DELETE = auto()
    CHAR = auto()


class ConsoleState(Enum):
    TYPING = auto()
    BROWSING = auto()


class RenderTarget(Protocol):
    """
    Whatever paints the document. Offsets are document offsets; run colours
    are already resolved (never None).
    """

    def insert(self, offset: int, runs: Sequence[Run]) -> None: ...

    def remove(self, offset: int, length: int) -> None: ...

    def set_caret(self, offset: int) -> None: ...

    def clear(self) -> None: ...


class NullRenderTarget:
    def insert(self, offset: int, runs: Sequence[Run]) -> None:
        pass

    def remove(self, offset: int, length: int) -> None:
        pass

    def set_caret(self, offset: int) -> None:
        pass

    def clear(self) -> None:
        pass


class ConsoleController:
    """
    Drives one console: turns key events and write requests into document
    edits, mirrors every edit onto the render target, keeps the command
    history and dispatches submitted lines to the command registry.

    Bus events: "bell" (Notice), "warning" (DocError, detail),
    "line_submitted" (line), "cleared".

    Not thread-safe; every call must come from the UI thread.
    """

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        target: Optional[RenderTarget] = None,
        commands: Optional[CommandRegistry] = None,
        completion: Optional[CompletionSource] = None,
        history: Optional[CommandHistory] = None,
        history_store: Optional[HistoryStore] = None,
        input_log: Optional[UserInputLog] = None,
    ):
        self.settings = settings if settings is not None else ConsoleSettings()
        self.target = target if target is not None else NullRenderTarget()
        self.bus = EventBus()

        self.document = ConsoleDocument()
        self.decoder = EscapeDecoder(
            ansi=self.settings.enable_ansi,
            hex_colors=self.settings.hex_colors,
            reset_color_after_each_msg=self.settings.reset_color_after_each_msg,
            on_warning=self._warn,
        )

        self.commands = commands if commands is not None else CommandRegistry()
        # Without an explicit source, complete over the registered command names
        self._auto_vocabulary = completion is None
        if completion is None:
            completion = VocabularyCompletionSource(self.commands.names())
        self.completion = completion

        self.history_store = history_store
        if history is None:
            seed = history_store.load(HISTORY_MAX_ENTRIES) if history_store is not None else ()
            history = CommandHistory(seed, max_entries=HISTORY_MAX_ENTRIES)
        self.history = history
        self.input_log = input_log if input_log is not None else UserInputLog()

        self._dispatching = False
        self._cleared_during_dispatch = False

        self._write_prompt()

    # ─── State ───────────────────────────────────────────────────────────

    @property
    def state(self) -> ConsoleState:
        return ConsoleState.BROWSING if self.history.browsing else ConsoleState.TYPING

    @property
    def prompt(self) -> str:
        return self.settings.prompt

    def user_input(self) -> str:
        return self.document.user_input()

    # ─── Output API ──────────────────────────────────────────────────────

    def write(
        self,
        text: str,
        color: Optional[Color] = None,
        newline: bool = False,
        bypass_ansi: bool = False,
    ) -> None:
        """
        Append text as committed output. ANSI / hex directives are decoded
        unless `bypass_ansi`; `color` is the colour the text starts in.
        The output lands after any in-progress input, which becomes
        committed along with it.
        """
        self.document.make_caret_valid()
        if newline:
            text += "\n"

        if bypass_ansi:
            # a held-back tail from an earlier write still comes first
            runs = self.decoder.flush()
            if text:
                runs.append(Run(color, text))
        else:
            runs = self.decoder.feed(text, color)

        start = self.document.length
        self.document.append_committed(runs)
        self._render(start)

    def print(self, text: str, color: Optional[Color] = None) -> None:
        self.write(text, color)

    def println(self, text: str = "", color: Optional[Color] = None) -> None:
        self.write(text, color, newline=True)

    def printf(self, fmt: str, *args) -> None:
        """
        printf-style output; Color arguments become 0xRRGGBB directives,
        which are decoded here even when hex mode is off.
        """
        args = tuple(a.hex if isinstance(a, Color) else a for a in args)
        hex_colors = self.decoder.hex_colors
        self.decoder.hex_colors = True
        try:
            self.write(fmt % args if args else fmt)
        finally:
            self.decoder.hex_colors = hex_colors

    def clear_screen(self) -> None:
        """Discard all output (history is kept) and start over with the prompt."""
        self.document.clear()
        self.decoder.reset()
        self.history.reset_navigation()
        self.target.clear()
        self.bus.fire("cleared")
        if self._dispatching:
            self._cleared_during_dispatch = True
        self._write_prompt()

    def remove(self, offset: int, length: int) -> Optional[DocError]:
        err = self.document.remove(offset, length)
        if err is not None:
            self._warn(err, f"remove({offset}, {length})")
            return err
        self.target.remove(offset, length)
        self.target.set_caret(self.document.caret)
        return None

    # ─── Settings ────────────────────────────────────────────────────────

    def set_prompt(self, prompt: str) -> None:
        self.settings.prompt = prompt

    def set_foreground(self, color: Color) -> None:
        self.settings.default_foreground = color
        self.decoder.current_color = None

    def apply_settings(self, settings: ConsoleSettings, commands: Optional[CommandRegistry] = None) -> None:
        """Switch to another preset without touching the document or history."""
        self.settings = settings
        self.decoder.ansi = settings.enable_ansi
        self.decoder.hex_colors = settings.hex_colors
        self.decoder.reset_color_after_each_msg = settings.reset_color_after_each_msg
        self.decoder.current_color = None
        if commands is not None:
            self.commands = commands
            self.refresh_vocabulary()

    def register_command(self, name: str, handler) -> None:
        self.commands.register(name, handler)
        self.refresh_vocabulary()

    def refresh_vocabulary(self) -> None:
        if self._auto_vocabulary and isinstance(self.completion, VocabularyCompletionSource):
            self.completion.set_terms(self.commands.names())

    # ─── Key Events ──────────────────────────────────────────────────────

    def key_pressed(self, key: Key, text: str = "") -> None:
        if not self.document.is_caret_valid():
            self.document.make_caret_valid()
            self.target.set_caret(self.document.caret)
        self._flush_pending()

        match key:
            case Key.TAB:
                self._complete()
            case Key.UP:
                self._history_older()
            case Key.DOWN:
                self._history_newer()
            case Key.BACKSPACE:
                self._delete(self.document.delete_before_caret)
            case Key.DELETE:
                self._delete(self.document.delete_after_caret)
            case Key.LEFT:
                self.move_caret(self.document.caret - 1)
            case Key.RIGHT:
                self.move_caret(self.document.caret + 1)
            case Key.HOME:
                self.move_caret(self.document.limit)
            case Key.END:
                self.move_caret(self.document.length)
            case Key.CHAR if text:
                self._insert(text)
            case _:
                pass

    def key_released(self, key: Key) -> None:
        # Enter acts on release so the host's own key-press handling runs first
        if key is Key.ENTER:
            self.submit()

    def type_text(self, text: str) -> None:
        self.key_pressed(Key.CHAR, text)

    def move_caret(self, offset: int) -> int:
        """Caret motion from the host; clamped into the input region."""
        pos = self.document.move_caret(offset)
        self.target.set_caret(pos)
        return pos

    def submit(self) -> None:
        """Commit the input line, record it and run the command handlers."""
        self.document.make_caret_valid()
        self._flush_pending()
        line = self.document.commit_input().strip()
        argv = parse_line(line)

        self.history.submit(line)
        if self.history_store is not None:
            self.history_store.append(line)
        self.input_log.append(line)

        self.write("\n", bypass_ansi=True)

        self._dispatching = True
        self._cleared_during_dispatch = False
        try:
            self.commands.dispatch(self, line, argv)
        finally:
            self._dispatching = False

        self.bus.fire("line_submitted", line)
        if not self._cleared_during_dispatch:
            self._write_prompt()

    # ─── Internals ───────────────────────────────────────────────────────

    def _write_prompt(self) -> None:
        self.write(self.settings.prompt)

    def _flush_pending(self) -> None:
        """
        Commit a tail the decoder is holding back (a trailing '0' in hex mode,
        an unfinished escape) ahead of the input line, once the user acts.
        """
        if not self.decoder.pending:
            return
        runs = self.decoder.flush()
        end = self.document.limit + sum(len(r.text) for r in runs)
        start = self.document.insert_committed(runs)
        self._render(start, end)

    def _complete(self) -> None:
        typed = self.document.user_input().strip()
        try:
            completions: List[str] = list(self.completion.complete(typed) or [])
        except Exception as e:
            log.exception(f"Completion failed for {typed!r}: {e}")
            completions = []

        if not completions:
            self._bell(Notice.NO_COMPLETION)
        elif len(completions) == 1:
            # don't submit: the user may not agree with the completion
            self._append_input(completions[0][len(typed):])
        else:
            # candidates are plain text, never colour directives
            self.write("\n" + " ".join(completions) + "\n", bypass_ansi=True)
            self._write_prompt()
            self._append_input(typed)

    def _history_older(self) -> None:
        entry = self.history.older(self.document.user_input())
        if entry is None:
            self._bell(Notice.NO_OLDER_HISTORY)
            return
        self._replace_input(entry)

    def _history_newer(self) -> None:
        entry = self.history.newer()
        if entry is None:
            self._bell(Notice.NO_NEWER_HISTORY)
            return
        self._replace_input(entry)

    def _insert(self, text: str) -> None:
        start = self.document.caret
        self.document.insert_at_caret(text, self.settings.input_color)
        self._render(start, start + len(text))

    def _append_input(self, text: str) -> None:
        start = self.document.length
        self.document.append_input(text, self.settings.input_color)
        self._render(start)

    def _replace_input(self, text: str) -> None:
        limit = self.document.limit
        old_len = self.document.length - limit
        self.document.replace_input(text, self.settings.input_color)
        if old_len:
            self.target.remove(limit, old_len)
        self._render(limit)

    def _delete(self, operation) -> None:
        before = self.document.length
        err = operation(1)
        if err is not None:
            self._warn(err, "delete")
            return
        removed = before - self.document.length
        if removed:
            self.target.remove(self.document.caret, removed)
            self.target.set_caret(self.document.caret)

    def _render(self, start: int, end: Optional[int] = None) -> None:
        runs = [Run(self._resolve(r.color), r.text) for r in self.document.runs(start, end)]
        if runs:
            self.target.insert(start, runs)
        self.target.set_caret(self.document.caret)

    def _resolve(self, color: Optional[Color]) -> Color:
        return color if color is not None else self.settings.default_foreground

    def _bell(self, notice: Notice) -> None:
        log.debug(f"Bell: {notice.name}")
        self.bus.fire("bell", notice)

    def _warn(self, err: DocError, detail: str) -> None:
        self.bus.fire("warning", err, detail)
