"""
Agendador de atualização do painel.

Ciclo:
1. Busca imediata para os filtros atuais
2. Nova busca a cada intervalo, contado a partir do início da busca anterior
3. Troca de filtros cancela o timer pendente e reinicia o ciclo

Cada busca recebe um número de sequência crescente; uma resposta só é
aplicada se for a mais recente já vista, então uma resposta atrasada
de filtros antigos nunca sobrescreve dados mais novos.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from painel_gastos.config import REFRESH_INTERVAL_MS
from painel_gastos.models.spend_models import FilterSelection, RefreshState

logger = logging.getLogger(__name__)

Fetcher = Callable[[FilterSelection], Awaitable[list]]
DataListener = Callable[[list], None]
ErrorObserver = Callable[[Exception], None]


def remaining_ms(next_fetch_at: Optional[datetime], now: datetime) -> int:
    """Milissegundos até next_fetch_at, nunca negativo."""
    if next_fetch_at is None:
        return 0
    diff = (next_fetch_at - now).total_seconds() * 1000
    return max(int(diff), 0)


class RefreshScheduler:
    def __init__(
        self,
        fetch: Fetcher,
        interval_ms: int = REFRESH_INTERVAL_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._fetch = fetch
        self.interval_ms = interval_ms
        self._loop = loop
        self._clock = clock

        self._filters: Optional[FilterSelection] = None
        self._records: list = []
        self._loaded = False
        self._state = RefreshState()
        self._running = False

        self._issued_seq = 0
        self._applied_seq = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()

        self._listeners: list[DataListener] = []
        self._error_observers: list[ErrorObserver] = []

    # ─── Leitura ───

    @property
    def records(self) -> list:
        return list(self._records)

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def filters(self) -> Optional[FilterSelection]:
        return self._filters

    @property
    def running(self) -> bool:
        return self._running

    @property
    def loaded(self) -> bool:
        """Já aplicou ao menos uma resposta para os filtros atuais."""
        return self._loaded

    def update_remaining(self, now: datetime = None) -> int:
        """Recalcula a contagem regressiva até a próxima busca."""
        now = now or self._clock()
        self._state.remaining_ms = remaining_ms(self._state.next_fetch_at, now)
        return self._state.remaining_ms

    # ─── Observadores ───

    def subscribe(self, listener: DataListener) -> Callable[[], None]:
        """Ouvinte de "dados chegaram"; recebe a nova lista de registros."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def add_error_observer(self, observer: ErrorObserver) -> Callable[[], None]:
        self._error_observers.append(observer)
        return lambda: self._error_observers.remove(observer) if observer in self._error_observers else None

    # ─── Ciclo ───

    def start(self, filters: FilterSelection, interval_ms: int = None):
        """Inicia (ou reinicia) o ciclo de buscas para os filtros."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        if interval_ms is not None:
            self.interval_ms = interval_ms

        self._cancel_timer()
        if filters != self._filters:
            self._records = []
            self._loaded = False
        self._filters = filters
        self._running = True
        self._cycle()

    def change_filters(self, filters: FilterSelection):
        """Troca os filtros: descarta os dados atuais e busca imediatamente."""
        if filters == self._filters and self._running:
            return
        logger.info(f"Filtros alterados: {filters.category} / {filters.month_year}")
        self.start(filters)

    def stop(self):
        """Cancela o timer e ignora respostas em andamento."""
        if not self._running and self._timer is None:
            return
        self._running = False
        self._cancel_timer()
        logger.debug("Agendador parado")

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _cycle(self):
        if not self._running:
            return
        self._issued_seq += 1
        seq = self._issued_seq
        filters = self._filters
        issued_at = self._clock()

        task = self._loop.create_task(self._run_fetch(seq, filters, issued_at))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        # Cadência a partir do início da busca, independente da resposta
        self._timer = self._loop.call_later(self.interval_ms / 1000, self._cycle)

    async def _run_fetch(self, seq: int, filters: FilterSelection, issued_at: datetime):
        try:
            records = await self._fetch(filters)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._fail(seq, filters, e)
            return
        self._apply(seq, filters, records, issued_at)

    def _is_current(self, seq: int, filters: FilterSelection) -> bool:
        return self._running and seq > self._applied_seq and filters == self._filters

    def _apply(self, seq: int, filters: FilterSelection, records, issued_at: datetime) -> bool:
        if not self._is_current(seq, filters):
            logger.debug(f"Resposta #{seq} descartada (obsoleta)")
            return False

        self._applied_seq = seq
        self._records = list(records or [])
        self._loaded = True

        # Próxima busca conta a partir do início desta, como o timer do _cycle
        self._state.last_fetch_at = issued_at
        self._state.next_fetch_at = issued_at + timedelta(milliseconds=self.interval_ms)
        self.update_remaining()

        logger.info(f"Busca #{seq}: {len(self._records)} registros ({filters.category} / {filters.month_year})")
        for listener in list(self._listeners):
            listener(self.records)
        return True

    def _fail(self, seq: int, filters: FilterSelection, error: Exception):
        if not self._is_current(seq, filters):
            logger.debug(f"Falha da busca #{seq} ignorada (obsoleta): {error}")
            return
        logger.error(f"Busca #{seq} falhou ({filters.category} / {filters.month_year}): {error}")
        for observer in list(self._error_observers):
            observer(error)
