"""
Modelos de dados do painel de gastos.
Dataclasses tipadas para séries, KPIs e estado de atualização.

Os registros brutos (SpendRecord) continuam como dicts no formato da API:
    {date, monthYear, weekName, valueSpent, targetValue, currentWeek}
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


# ─── Modo de visualização ───

class ViewMode(str, Enum):
    """Agrupamento da série: por dia ou por semana."""
    DAILY = "diario"
    WEEKLY = "semanal"


# ─── Séries ───

@dataclass
class SeriesPoint:
    """Um ponto do gráfico (dia ou semana)."""
    label: str
    sort_key: Union[date, int]
    value: float = 0.0
    goal: float = 0.0
    is_current_period: bool = False


# monthYear -> pontos ordenados por sort_key
MonthSeries = dict[str, list[SeriesPoint]]


# ─── KPIs ───

@dataclass
class KPISnapshot:
    """Indicadores resumidos do período filtrado."""
    total: float = 0.0
    average: float = 0.0
    projection: float = 0.0
    goal_total: float = 0.0


# ─── Atualização ───

@dataclass
class RefreshState:
    """Última/próxima busca e contagem regressiva."""
    last_fetch_at: Optional[datetime] = None
    next_fetch_at: Optional[datetime] = None
    remaining_ms: int = 0


# ─── Filtros ───

@dataclass(frozen=True)
class FilterSelection:
    """Parâmetros de toda busca do painel."""
    category: str
    month_year: str


@dataclass
class ComboOptions:
    """Valores válidos para os combos de filtro."""
    categories: list[str] = field(default_factory=list)
    month_years: list[str] = field(default_factory=list)


# ─── Visão para a camada de apresentação ───

@dataclass(frozen=True)
class DashboardSnapshot:
    """Estado completo do painel em um instante, somente leitura."""
    filters: FilterSelection
    mode: ViewMode
    records: tuple = ()
    series: MonthSeries = field(default_factory=dict)
    kpis: KPISnapshot = field(default_factory=KPISnapshot)
    refresh: RefreshState = field(default_factory=RefreshState)
    labels_visible: bool = False
    loaded: bool = False
    options: ComboOptions = field(default_factory=ComboOptions)
    last_error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Busca concluída com sucesso, mas sem registros."""
        return self.loaded and not self.records
