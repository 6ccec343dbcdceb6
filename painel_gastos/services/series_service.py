"""
Serviço de Séries de Gastos.

Responsabilidades:
- Coerção numérica dos registros brutos
- Agrupamento por mês (monthYear)
- Série diária e série semanal (merge por número da semana)
- Conversão para DataFrame (gráficos)
"""

import math
import re
from datetime import date, datetime
from typing import Optional

import pandas as pd

from painel_gastos.models.spend_models import MonthSeries, SeriesPoint, ViewMode
from painel_gastos.utils.formatting import format_day_label


_WEEK_NUMBER_RE = re.compile(r"\d+")


# ─── Helpers de registro ───

def to_number(value) -> float:
    """Converte valueSpent/targetValue para float; inválido vira 0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def extract_week_number(week_name) -> int:
    """Primeiro inteiro contido no nome da semana ("Semana 3" -> 3)."""
    if not isinstance(week_name, str):
        return 0
    match = _WEEK_NUMBER_RE.search(week_name)
    return int(match.group()) if match else 0


def parse_record_date(value) -> Optional[date]:
    """Lê a data do registro (ISO, com ou sem horário)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


# ─── Agregação ───

def _daily_points(items: list[dict]) -> list[SeriesPoint]:
    points = []
    for item in items:
        day = parse_record_date(item.get("date"))
        points.append(SeriesPoint(
            label=format_day_label(day) if day else "",
            sort_key=day or date.min,
            value=to_number(item.get("valueSpent")),
            goal=to_number(item.get("targetValue")),
            is_current_period=bool(item.get("currentWeek")),
        ))
    return points


def _weekly_points(items: list[dict]) -> list[SeriesPoint]:
    weeks: dict[int, SeriesPoint] = {}
    for item in items:
        week_name = item.get("weekName")
        number = extract_week_number(week_name)

        week = weeks.get(number)
        if week is None:
            week = SeriesPoint(label=week_name or "", sort_key=number)
            weeks[number] = week

        week.value += to_number(item.get("valueSpent"))
        week.goal += to_number(item.get("targetValue"))
        if item.get("currentWeek"):
            week.is_current_period = True
    return list(weeks.values())


def aggregate(records: list[dict], mode: ViewMode) -> MonthSeries:
    """
    Agrupa os registros por mês e monta a série ordenada de cada um.

    Diário: um ponto por registro, ordenado pela data.
    Semanal: registros da mesma semana somados em um ponto,
    ordenados pelo número da semana.
    """
    by_month: dict[str, list[dict]] = {}
    for item in records or []:
        by_month.setdefault(item.get("monthYear") or "", []).append(item)

    build = _daily_points if ViewMode(mode) is ViewMode.DAILY else _weekly_points

    series: MonthSeries = {}
    for month_year, items in by_month.items():
        points = build(items)
        points.sort(key=lambda p: p.sort_key)
        series[month_year] = points
    return series


def series_to_frame(points: list[SeriesPoint]) -> pd.DataFrame:
    """Série de um mês como DataFrame (label, value, goal, is_current_period)."""
    rows = [
        {
            "label": p.label,
            "value": p.value,
            "goal": p.goal,
            "is_current_period": p.is_current_period,
        }
        for p in points
    ]
    return pd.DataFrame(rows, columns=["label", "value", "goal", "is_current_period"])
