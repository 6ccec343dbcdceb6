"""
Runtime do painel para o Streamlit.

O script do Streamlit é reexecutado a cada interação, então o
controlador vive em um event loop próprio, em uma thread daemon.
Toda leitura/escrita é encaminhada para esse loop.
"""

import asyncio
import logging
import threading
from typing import Callable

from painel_gastos.core.controller import DashboardController
from painel_gastos.models.spend_models import DashboardSnapshot, ViewMode

logger = logging.getLogger(__name__)

CALL_TIMEOUT = 5.0  # segundos


class DashboardRuntime:
    def __init__(self, factory: Callable[[], DashboardController] = DashboardController):
        self._factory = factory
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, name="painel-gastos-loop", daemon=True
        )
        self._controller: DashboardController | None = None
        self._started = False

    def _run_loop(self):
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    # ─── Ciclo de vida ───

    def start(self):
        """Sobe o loop e inicia o controlador (idempotente)."""
        if self._started:
            return
        self._started = True
        self._thread.start()
        asyncio.run_coroutine_threadsafe(self._boot(), self._loop).result(CALL_TIMEOUT)

    async def _boot(self):
        self._controller = self._factory()
        # Combos podem demorar; o início do ciclo não bloqueia a página
        task = asyncio.get_running_loop().create_task(self._controller.start())
        task.add_done_callback(self._log_boot_failure)

    @staticmethod
    def _log_boot_failure(task: asyncio.Task):
        if not task.cancelled() and task.exception() is not None:
            logger.error("Falha ao iniciar o painel", exc_info=task.exception())

    def shutdown(self):
        if not self._started:
            return
        self._call(lambda c: c.stop())
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(CALL_TIMEOUT)
        self._started = False

    # ─── Acesso thread-safe ───

    def _call(self, func: Callable[[DashboardController], object]):
        if not self._started:
            raise RuntimeError("Runtime não iniciado. Chame start() primeiro.")

        async def run():
            return func(self._controller)

        return asyncio.run_coroutine_threadsafe(run(), self._loop).result(CALL_TIMEOUT)

    def snapshot(self) -> DashboardSnapshot:
        return self._call(lambda c: c.snapshot())

    def select_category(self, category: str):
        self._call(lambda c: c.select_category(category))

    def select_month_year(self, month_year: str):
        self._call(lambda c: c.select_month_year(month_year))

    def set_mode(self, mode: ViewMode):
        self._call(lambda c: c.set_mode(mode))
