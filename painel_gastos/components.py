"""
Componentes HTML reutilizáveis para o painel.
Retornam strings HTML para uso com st.markdown(html, unsafe_allow_html=True).
"""

from html import escape

from painel_gastos.config import REFRESH_INTERVAL_MS
from painel_gastos.models.spend_models import RefreshState, ViewMode
from painel_gastos.utils.formatting import format_clock, format_countdown

EMPTY_MESSAGE = "Nenhum dado encontrado para os filtros selecionados."


def dashboard_header(refresh: RefreshState) -> str:
    """Título e painel de última/próxima atualização."""
    return f"""
    <div class="dash-header">
        <h1>📊 Controle Financeiro</h1>
        <div class="refresh-panel">
            <div>🕒 Última atualização: <span class="clock">{format_clock(refresh.last_fetch_at)}</span></div>
            <div>⏭️ Próxima em: <span class="next">{format_countdown(refresh.remaining_ms)}</span></div>
        </div>
    </div>
    """


def chart_title(mode: ViewMode, month_year: str) -> str:
    """Título do gráfico de um mês ("Gastos Diários de Janeiro/2026")."""
    kind = "Diários" if mode is ViewMode.DAILY else "Semanais"
    return f"Gastos {kind} de {month_year}"


def average_label(mode: ViewMode) -> str:
    return "Média Diária" if mode is ViewMode.DAILY else "Média Semanal"


def section_header(title: str) -> str:
    return f'<div class="section-hdr"><h2>{escape(title)}</h2></div>'


def warning_banner(message: str) -> str:
    """Banner de alerta amber."""
    return f'<div class="warn-banner">{escape(message)}</div>'


def empty_state(message: str = EMPTY_MESSAGE) -> str:
    return f'<div class="empty-state">{escape(message)}</div>'


def footer() -> str:
    seconds = REFRESH_INTERVAL_MS // 1000
    return f"""
    <div class="dash-footer">
        Controle Financeiro &middot; Atualizacao automatica a cada {seconds}s
    </div>
    """
