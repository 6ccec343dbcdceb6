"""
Carga inicial dos combos de filtro (categorias e meses/anos).
"""

import asyncio
import logging
from datetime import date
from typing import Callable

from painel_gastos.api.financeiro_client import FetchFailure, FinanceiroClient
from painel_gastos.config import START_YEAR
from painel_gastos.models.spend_models import ComboOptions

logger = logging.getLogger(__name__)


class ComboLoader:
    """Busca uma única vez as listas de valores válidos dos filtros."""

    def __init__(
        self,
        client: FinanceiroClient,
        start_year: int = START_YEAR,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.start_year = start_year
        self._today = today
        self._error_observers: list[Callable[[Exception], None]] = []

    def add_error_observer(self, observer: Callable[[Exception], None]) -> Callable[[], None]:
        self._error_observers.append(observer)
        return lambda: self._error_observers.remove(observer) if observer in self._error_observers else None

    async def _fetch(self, name: str, func, *args) -> list[str]:
        try:
            return await asyncio.to_thread(func, *args)
        except FetchFailure as e:
            logger.error(f"Falha ao carregar {name}: {e}")
            for observer in list(self._error_observers):
                observer(e)
            return []

    async def load(self) -> ComboOptions:
        """Busca categorias e meses/anos em paralelo; falha vira lista vazia."""
        end_year = self._today().year
        categories, month_years = await asyncio.gather(
            self._fetch("categorias", self.client.list_categories),
            self._fetch("meses/anos", self.client.list_month_years, self.start_year, end_year),
        )
        logger.info(f"Combos carregados: {len(categories)} categorias, {len(month_years)} meses/anos")
        return ComboOptions(categories=categories, month_years=month_years)
