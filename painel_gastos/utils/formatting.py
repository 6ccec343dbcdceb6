"""
Utilitários de formatação para valores e horários do painel.
"""

from datetime import date, datetime
from typing import Optional


def format_brl(value: float) -> str:
    """Formata um número como Real brasileiro (R$ 150.000,50)."""
    if value >= 0:
        return f"R$ {value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"-R$ {abs(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def format_point_label(value: float) -> str:
    """Rótulo de um ponto do gráfico; zero ou negativo não é exibido."""
    if value > 0:
        return f"R$ {value:.2f}".replace(".", ",")
    return ""


def format_day_label(day: date) -> str:
    """Dia do mês no formato dd/mm."""
    return day.strftime("%d/%m")


def format_clock(moment: Optional[datetime]) -> str:
    """Horário da última atualização (HH:MM:SS)."""
    if moment is None:
        return "--:--:--"
    return moment.strftime("%H:%M:%S")


def format_countdown(ms: int) -> str:
    """Tempo restante até a próxima busca (MM:SS)."""
    seconds = max(int(ms), 0) // 1000
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
