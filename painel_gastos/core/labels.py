"""
Sequenciador de exibição dos rótulos de valor.

Ao chegar dados novos ou trocar o modo, os rótulos somem e voltam
após um atraso fixo. Um novo gatilho antes do fim do atraso substitui
o timer pendente (nunca acumula timers).
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from painel_gastos.config import LABEL_REVEAL_DELAY_MS

logger = logging.getLogger(__name__)


class LabelVisibility(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class LabelRevealSequencer:
    def __init__(
        self,
        delay_ms: int = LABEL_REVEAL_DELAY_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.delay_ms = delay_ms
        self._loop = loop
        self._state = LabelVisibility.HIDDEN
        self._pending: Optional[asyncio.TimerHandle] = None
        self._listeners: list[Callable[[LabelVisibility], None]] = []

    @property
    def state(self) -> LabelVisibility:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state is LabelVisibility.VISIBLE

    def subscribe(self, listener: Callable[[LabelVisibility], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _set(self, state: LabelVisibility):
        if state is self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def trigger(self):
        """Esconde os rótulos já e agenda a exibição após o atraso."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._cancel_pending()
        self._set(LabelVisibility.HIDDEN)
        self._pending = self._loop.call_later(self.delay_ms / 1000, self._reveal)

    def _reveal(self):
        self._pending = None
        logger.debug("Rótulos visíveis")
        self._set(LabelVisibility.VISIBLE)

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def close(self):
        self._cancel_pending()
