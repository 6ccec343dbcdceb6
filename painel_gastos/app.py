"""
Painel de Gastos: Controle Financeiro
Gastos diários/semanais por categoria com atualização automática.

Executar:
    streamlit run painel_gastos/app.py
"""

import sys
from pathlib import Path

# Garante que o diretório raiz do projeto está no sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import streamlit as st
import plotly.graph_objects as go

from painel_gastos.components import (
    average_label,
    chart_title,
    dashboard_header,
    empty_state,
    footer,
    section_header,
    warning_banner,
)
from painel_gastos.config import configure_logging
from painel_gastos.core.runtime import DashboardRuntime
from painel_gastos.models.spend_models import DashboardSnapshot, SeriesPoint, ViewMode
from painel_gastos.services.series_service import series_to_frame
from painel_gastos.styles import CUSTOM_CSS, PLOTLY_TEMPLATE, SERIES_COLORS
from painel_gastos.utils.formatting import format_brl, format_point_label


# ═══════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════

st.set_page_config(
    page_title="Controle Financeiro",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


# ═══════════════════════════════════════════════════════
# RUNTIME (um por processo do servidor)
# ═══════════════════════════════════════════════════════

@st.cache_resource(show_spinner=False)
def get_runtime() -> DashboardRuntime:
    configure_logging()
    runtime = DashboardRuntime()
    runtime.start()
    return runtime


runtime = get_runtime()


# ═══════════════════════════════════════════════════════
# CHART
# ═══════════════════════════════════════════════════════

def build_month_chart(points: list[SeriesPoint], show_labels: bool) -> go.Figure:
    """Linha de gasto com destaque do período atual e linha de meta."""
    df = series_to_frame(points)
    current = df["is_current_period"].astype(bool)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["label"],
        y=df["goal"],
        mode="lines",
        name="Meta",
        line=dict(color=SERIES_COLORS["goal"], width=2, dash="dot"),
        hovertemplate="Meta: R$ %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=df["label"],
        y=df["value"],
        mode="lines+markers+text" if show_labels else "lines+markers",
        name="Gasto",
        line=dict(color=SERIES_COLORS["value"], width=4, shape="spline"),
        marker=dict(
            size=[14 if c else 8 for c in current],
            color=[SERIES_COLORS["current"] if c else SERIES_COLORS["value"] for c in current],
            line=dict(color=SERIES_COLORS["value"], width=[2 if c else 0 for c in current]),
        ),
        text=[format_point_label(v) for v in df["value"]],
        textposition="middle right",
        customdata=["Período atual" if c else "" for c in current],
        hovertemplate="R$ %{y:,.2f} %{customdata}<extra></extra>",
    ))
    fig.update_layout(template=PLOTLY_TEMPLATE, height=400)
    return fig


# ═══════════════════════════════════════════════════════
# FILTROS
# ═══════════════════════════════════════════════════════

def _select_category():
    runtime.select_category(st.session_state["categoria"])


def _select_month_year():
    runtime.select_month_year(st.session_state["mes_ano"])


def _select_mode():
    runtime.set_mode(ViewMode(st.session_state["modo"]))


def render_filters(snap: DashboardSnapshot):
    categories = snap.options.categories or [snap.filters.category]
    month_years = snap.options.month_years or [snap.filters.month_year]

    c1, c2, c3 = st.columns([2, 1.5, 1])
    with c1:
        st.selectbox(
            "Categoria",
            categories,
            index=categories.index(snap.filters.category) if snap.filters.category in categories else 0,
            key="categoria",
            on_change=_select_category,
        )
    with c2:
        st.selectbox(
            "Mês/Ano",
            month_years,
            index=month_years.index(snap.filters.month_year) if snap.filters.month_year in month_years else 0,
            key="mes_ano",
            on_change=_select_month_year,
        )
    with c3:
        st.radio(
            "Modo",
            [ViewMode.WEEKLY.value, ViewMode.DAILY.value],
            index=0 if snap.mode is ViewMode.WEEKLY else 1,
            format_func=lambda m: "Semanal" if m == ViewMode.WEEKLY.value else "Diário",
            horizontal=True,
            key="modo",
            on_change=_select_mode,
        )


# ═══════════════════════════════════════════════════════
# CONTEÚDO (reexecutado a cada segundo)
# ═══════════════════════════════════════════════════════

@st.fragment(run_every=1)
def render_live():
    snap = runtime.snapshot()

    st.markdown(dashboard_header(snap.refresh), unsafe_allow_html=True)

    if snap.last_error:
        st.markdown(
            warning_banner(f"Falha na última atualização, exibindo os dados anteriores: {snap.last_error}"),
            unsafe_allow_html=True,
        )

    if not snap.loaded:
        st.info("Carregando dados...")
        return

    if snap.is_empty:
        st.markdown(empty_state(), unsafe_allow_html=True)
        return

    for month_year, points in snap.series.items():
        st.markdown(section_header(chart_title(snap.mode, month_year)), unsafe_allow_html=True)
        st.plotly_chart(
            build_month_chart(points, snap.labels_visible),
            use_container_width=True,
            key=f"chart-{month_year}",
        )

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric(label="Total Gasto", value=format_brl(snap.kpis.total))
    with k2:
        st.metric(label=average_label(snap.mode), value=format_brl(snap.kpis.average))
    with k3:
        st.metric(
            label="Projeção do Mês",
            value=format_brl(snap.kpis.projection),
            help="Média x 30 dias (diário) ou x 4 semanas (semanal)",
        )
    with k4:
        st.metric(
            label="Meta",
            value=format_brl(snap.kpis.goal_total),
            delta=format_brl(snap.kpis.goal_total - snap.kpis.total),
            help="Soma das metas do período; delta = meta - gasto",
        )


render_filters(runtime.snapshot())
render_live()
st.markdown(footer(), unsafe_allow_html=True)
