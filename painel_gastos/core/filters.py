"""
Estado dos filtros (categoria, mês/ano).

Fonte única dos parâmetros de busca. Só muda por seleção explícita
ou ao receber os valores válidos dos combos.
"""

import logging
from typing import Callable

from painel_gastos.config import DEFAULT_CATEGORY, DEFAULT_MONTH_YEAR
from painel_gastos.models.spend_models import ComboOptions, FilterSelection

logger = logging.getLogger(__name__)

FilterListener = Callable[[FilterSelection], None]


class FilterState:
    def __init__(
        self,
        category: str = DEFAULT_CATEGORY,
        month_year: str = DEFAULT_MONTH_YEAR,
    ):
        self._selection = FilterSelection(category=category, month_year=month_year)
        self._options = ComboOptions()
        self._listeners: list[FilterListener] = []

    @property
    def selection(self) -> FilterSelection:
        return self._selection

    @property
    def options(self) -> ComboOptions:
        return self._options

    # ─── Assinatura ───

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Registra um ouvinte de mudança; retorna a função de cancelamento."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, selection: FilterSelection):
        if selection == self._selection:
            return
        self._selection = selection
        for listener in list(self._listeners):
            listener(selection)

    # ─── Transições ───

    def load_options(self, options: ComboOptions):
        """Aplica os valores válidos; seleção fora da lista cai no primeiro item."""
        self._options = ComboOptions(
            categories=list(options.categories),
            month_years=list(options.month_years),
        )

        category = self._selection.category
        if options.categories and category not in options.categories:
            logger.warning(f"Categoria '{category}' indisponível, usando '{options.categories[0]}'")
            category = options.categories[0]

        month_year = self._selection.month_year
        if options.month_years and month_year not in options.month_years:
            logger.warning(f"Mês/ano '{month_year}' indisponível, usando '{options.month_years[0]}'")
            month_year = options.month_years[0]

        self._set(FilterSelection(category=category, month_year=month_year))

    def select_category(self, category: str):
        if self._options.categories and category not in self._options.categories:
            raise ValueError(f"Categoria inválida: {category}")
        self._set(FilterSelection(category=category, month_year=self._selection.month_year))

    def select_month_year(self, month_year: str):
        if self._options.month_years and month_year not in self._options.month_years:
            raise ValueError(f"Mês/ano inválido: {month_year}")
        self._set(FilterSelection(category=self._selection.category, month_year=month_year))
