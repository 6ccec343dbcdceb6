"""
Contagem regressiva até a próxima busca, recalculada a cada segundo.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

from painel_gastos.config import COUNTDOWN_TICK_MS
from painel_gastos.core.scheduler import RefreshScheduler


class Countdown:
    def __init__(
        self,
        scheduler: RefreshScheduler,
        tick_ms: int = COUNTDOWN_TICK_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.scheduler = scheduler
        self.tick_ms = tick_ms
        self._loop = loop
        self._clock = clock
        self._handle: Optional[asyncio.TimerHandle] = None
        self._listeners: list[Callable[[int], None]] = []

    @property
    def running(self) -> bool:
        return self._handle is not None

    def subscribe(self, listener: Callable[[int], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def start(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        if self._handle is None:
            self._schedule()

    def stop(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self):
        self._handle = self._loop.call_later(self.tick_ms / 1000, self._tick)

    def _tick(self):
        self._handle = None
        if not self.scheduler.running:
            return
        remaining = self.scheduler.update_remaining(self._clock())
        for listener in list(self._listeners):
            listener(remaining)
        self._schedule()
