"""
Serviço de KPIs do painel.

Responsabilidades:
- Total gasto
- Média diária / semanal
- Projeção linear para o mês
- Meta total
"""

from painel_gastos.config import DAYS_PER_MONTH, DAYS_PER_WEEK, WEEKS_PER_MONTH
from painel_gastos.models.spend_models import KPISnapshot, ViewMode
from painel_gastos.services.series_service import to_number


def compute_kpis(records: list[dict], mode: ViewMode) -> KPISnapshot:
    """
    Calcula os KPIs a partir dos registros brutos.

    media    = total / divisor
      diário:  divisor = nº de registros
      semanal: divisor = nº de registros / 7 (mínimo 1)
    projecao = media * 30 (diário) ou media * 4 (semanal)
    """
    if not records:
        return KPISnapshot()

    total = sum(to_number(item.get("valueSpent")) for item in records)
    goal_total = sum(to_number(item.get("targetValue")) for item in records)

    if ViewMode(mode) is ViewMode.DAILY:
        divisor = len(records)
        multiplier = DAYS_PER_MONTH
    else:
        divisor = max(len(records) / DAYS_PER_WEEK, 1)
        multiplier = WEEKS_PER_MONTH

    average = total / divisor

    return KPISnapshot(
        total=total,
        average=average,
        projection=average * multiplier,
        goal_total=goal_total,
    )
