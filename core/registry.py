# core/registry.py

import logging
from typing import Dict, Hashable, List, Optional

from core.commands import CommandRegistry
from core.controller import ConsoleController, RenderTarget
from core.history_store import HistoryStore
from core.settings import ConsoleSettings

log = logging.getLogger(__name__)


class ConsoleRegistry:
    """
    One console controller per host (any hashable key: a window, a tab, a
    name). Owned by whoever embeds the consoles; there is no global instance.
    """

    def __init__(self):
        self._consoles: Dict[Hashable, ConsoleController] = {}

    def open(
        self,
        host: Hashable,
        settings: ConsoleSettings,
        target: Optional[RenderTarget] = None,
        commands: Optional[CommandRegistry] = None,
        history_store: Optional[HistoryStore] = None,
    ) -> ConsoleController:
        """
        Create the console for `host`, or re-apply settings and commands to
        the existing one (its document and history are kept).
        """
        console = self._consoles.get(host)
        if console is not None:
            log.debug(f"Reconfiguring console for {host!r}")
            console.apply_settings(settings, commands)
            return console

        log.debug(f"Opening console for {host!r}")
        console = ConsoleController(
            settings=settings,
            target=target,
            commands=commands,
            history_store=history_store,
        )
        self._consoles[host] = console
        return console

    def get(self, host: Hashable) -> Optional[ConsoleController]:
        return self._consoles.get(host)

    def close(self, host: Hashable) -> Optional[ConsoleController]:
        return self._consoles.pop(host, None)

    def hosts(self) -> List[Hashable]:
        return list(self._consoles)

    def __contains__(self, host: Hashable) -> bool:
        return host in self._consoles

    def __len__(self) -> int:
        return len(self._consoles)
