"""
Controlador do painel: contêiner único de estado.

Liga filtros, combos, agendador, rótulos e contagem regressiva no mesmo
event loop e publica um DashboardSnapshot para a camada de apresentação.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from painel_gastos.api.financeiro_client import FinanceiroClient
from painel_gastos.core.combos import ComboLoader
from painel_gastos.core.countdown import Countdown
from painel_gastos.core.filters import FilterState
from painel_gastos.core.labels import LabelRevealSequencer
from painel_gastos.core.scheduler import Fetcher, RefreshScheduler
from painel_gastos.config import (
    COUNTDOWN_TICK_MS,
    LABEL_REVEAL_DELAY_MS,
    REFRESH_INTERVAL_MS,
)
from painel_gastos.models.spend_models import (
    DashboardSnapshot,
    FilterSelection,
    RefreshState,
    ViewMode,
)
from painel_gastos.services.kpi_service import compute_kpis
from painel_gastos.services.series_service import aggregate

logger = logging.getLogger(__name__)


def client_fetcher(client: FinanceiroClient) -> Fetcher:
    """Adapta o cliente HTTP (bloqueante) para uma busca assíncrona."""

    async def fetch(filters: FilterSelection) -> list[dict]:
        return await asyncio.to_thread(client.fetch_dashboard, filters.category, filters.month_year)

    return fetch


class DashboardController:
    def __init__(
        self,
        client: Optional[FinanceiroClient] = None,
        fetch: Optional[Fetcher] = None,
        combos: Optional[ComboLoader] = None,
        filters: Optional[FilterState] = None,
        mode: ViewMode = ViewMode.DAILY,
        interval_ms: int = REFRESH_INTERVAL_MS,
        label_delay_ms: int = LABEL_REVEAL_DELAY_MS,
        tick_ms: int = COUNTDOWN_TICK_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if fetch is None:
            client = client or FinanceiroClient()
            fetch = client_fetcher(client)
        if combos is None and client is not None:
            combos = ComboLoader(client)

        self.combos = combos
        self.filters = filters or FilterState()
        self.scheduler = RefreshScheduler(fetch, interval_ms=interval_ms, loop=loop, clock=clock)
        self.labels = LabelRevealSequencer(delay_ms=label_delay_ms, loop=loop)
        self.countdown = Countdown(self.scheduler, tick_ms=tick_ms, loop=loop, clock=clock)
        self._mode = ViewMode(mode)
        self._last_error: Optional[str] = None
        self._combo_error: Optional[str] = None
        self._listeners: list[Callable[[], None]] = []

        self.filters.subscribe(self._on_filters_changed)
        self.scheduler.subscribe(self._on_data)
        self.scheduler.add_error_observer(self._on_error)
        if self.combos is not None:
            self.combos.add_error_observer(self._on_combo_error)
        self.labels.subscribe(lambda _: self._notify())
        self.countdown.subscribe(lambda _: self._notify())

    @property
    def mode(self) -> ViewMode:
        return self._mode

    # ─── Assinatura ───

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Ouvinte chamado a cada mudança de estado visível."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _notify(self):
        for listener in list(self._listeners):
            listener()

    # ─── Ciclo de vida ───

    async def start(self):
        """Carrega os combos e inicia o ciclo de atualização."""
        if self.combos is not None:
            options = await self.combos.load()
            self.filters.load_options(options)
        logger.info(f"Iniciando painel: {self.filters.selection.category} / {self.filters.selection.month_year}")
        self.scheduler.start(self.filters.selection)
        self.countdown.start()

    def stop(self):
        self.scheduler.stop()
        self.countdown.stop()
        self.labels.close()

    # ─── Transições ───

    def select_category(self, category: str):
        self.filters.select_category(category)

    def select_month_year(self, month_year: str):
        self.filters.select_month_year(month_year)

    def set_mode(self, mode: ViewMode):
        mode = ViewMode(mode)
        if mode is self._mode:
            return
        self._mode = mode
        self.labels.trigger()
        self._notify()

    # ─── Eventos internos ───

    def _on_filters_changed(self, selection: FilterSelection):
        self._last_error = None
        # Antes do start() os filtros só ajustam a seleção inicial
        if self.scheduler.running:
            self.scheduler.change_filters(selection)
        self._notify()

    def _on_data(self, records: list):
        self._last_error = None
        self.labels.trigger()
        self._notify()

    def _on_error(self, error: Exception):
        self._last_error = str(error)
        self._notify()

    def _on_combo_error(self, error: Exception):
        # Combos carregam uma vez só; o aviso vale para a sessão inteira
        self._combo_error = f"Filtros indisponíveis: {error}"
        self._notify()

    # ─── Visão ───

    def snapshot(self) -> DashboardSnapshot:
        records = self.scheduler.records
        state = self.scheduler.state
        return DashboardSnapshot(
            filters=self.filters.selection,
            mode=self._mode,
            records=tuple(records),
            series=aggregate(records, self._mode),
            kpis=compute_kpis(records, self._mode),
            refresh=RefreshState(
                last_fetch_at=state.last_fetch_at,
                next_fetch_at=state.next_fetch_at,
                remaining_ms=state.remaining_ms,
            ),
            labels_visible=self.labels.visible,
            loaded=self.scheduler.loaded,
            options=self.filters.options,
            last_error=self._last_error or self._combo_error,
        )
