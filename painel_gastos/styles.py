"""
Design system: tema escuro do painel de gastos.
Tokens de cor, CSS customizado e template Plotly.
"""

# ─── Color Tokens ───

COLORS = {
    # Backgrounds
    "bg_base": "#09090b",
    "bg_surface": "#18181b",
    "bg_elevated": "#27272a",
    "border": "#27272a",
    "border_light": "#3f3f46",
    # Text
    "text_primary": "#fafafa",
    "text_secondary": "#a1a1aa",
    "text_muted": "#71717a",
    # Accent
    "primary": "#16a34a",
    "primary_light": "#22c55e",
    "primary_dim": "rgba(22,163,74,0.12)",
    # Semantic
    "danger": "#ef4444",
    "danger_dim": "rgba(239,68,68,0.12)",
    "warning": "#f59e0b",
    "warning_dim": "rgba(245,158,11,0.12)",
    "highlight": "#fbff00",
}

# Linha de gasto, linha de meta e destaque do período atual
SERIES_COLORS = {
    "value": COLORS["danger"],
    "goal": COLORS["text_muted"],
    "current": COLORS["highlight"],
}


# ─── Plotly Template ───

PLOTLY_TEMPLATE = {
    "layout": {
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "font": {
            "family": "Plus Jakarta Sans, sans-serif",
            "color": COLORS["text_secondary"],
            "size": 12,
        },
        "title": {"font": {"color": COLORS["text_primary"], "size": 16}},
        "xaxis": {
            "gridcolor": COLORS["border"],
            "linecolor": COLORS["border"],
            "zerolinecolor": COLORS["border"],
            "tickfont": {"color": COLORS["text_muted"], "size": 12},
            "showgrid": False,
        },
        "yaxis": {
            "gridcolor": COLORS["border"],
            "gridwidth": 1,
            "griddash": "dash",
            "linecolor": COLORS["border"],
            "zerolinecolor": COLORS["border"],
            "tickfont": {"color": COLORS["text_muted"], "size": 13},
        },
        "legend": {
            "font": {"color": COLORS["text_secondary"]},
            "bgcolor": "rgba(0,0,0,0)",
            "orientation": "h",
        },
        "hoverlabel": {
            "bgcolor": COLORS["bg_elevated"],
            "bordercolor": COLORS["border_light"],
            "font": {"color": COLORS["text_primary"], "family": "Plus Jakarta Sans"},
        },
        "margin": {"l": 20, "r": 80, "t": 60, "b": 40},
    }
}


# ─── Custom CSS ───

CUSTOM_CSS = """
<style>
/* ── Fonts ── */
@import url('https://fonts.googleapis.com/css2?family=Plus+Jakarta+Sans:wght@400;500;600;700;800&family=JetBrains+Mono:wght@400;500;600&display=swap');

html, body, [data-testid="stAppViewContainer"] {
    font-family: 'Plus Jakarta Sans', sans-serif !important;
    background: """ + COLORS["bg_base"] + """;
}

.block-container {
    padding-top: 1.5rem !important;
    max-width: 1200px !important;
}

/* ── KPI Cards ── */
[data-testid="stMetric"] {
    background: """ + COLORS["bg_surface"] + """;
    border: 1px solid """ + COLORS["border"] + """;
    border-radius: 24px;
    padding: 24px 16px;
    text-align: center;
}
[data-testid="stMetricLabel"] {
    font-size: 0.75rem !important;
    font-weight: 700 !important;
    color: """ + COLORS["text_secondary"] + """ !important;
    text-transform: uppercase !important;
    letter-spacing: 0.06em !important;
}
[data-testid="stMetricValue"] {
    font-family: 'JetBrains Mono', monospace !important;
    font-size: 1.6rem !important;
    font-weight: 800 !important;
    color: """ + COLORS["text_primary"] + """ !important;
}

/* ── Header ── */
.dash-header {
    display: flex;
    justify-content: space-between;
    align-items: flex-start;
    margin-bottom: 1.5rem;
}
.dash-header h1 {
    font-weight: 800 !important;
    font-size: 2rem !important;
    color: """ + COLORS["text_primary"] + """ !important;
    margin: 0 !important;
}
.refresh-panel {
    background: """ + COLORS["bg_surface"] + """;
    border: 1px solid """ + COLORS["border"] + """;
    border-radius: 16px;
    padding: 12px 16px;
    font-size: 0.85rem;
    color: """ + COLORS["text_secondary"] + """;
}
.refresh-panel .clock { color: """ + COLORS["text_primary"] + """; font-family: 'JetBrains Mono', monospace; }
.refresh-panel .next  { color: """ + COLORS["primary_light"] + """; font-family: 'JetBrains Mono', monospace; }

/* ── Section Header ── */
.section-hdr {
    margin-top: 1rem;
    margin-bottom: 0.5rem;
    text-align: center;
}
.section-hdr h2 {
    font-weight: 700 !important;
    font-size: 1.2rem !important;
    color: """ + COLORS["text_primary"] + """ !important;
    margin: 0 !important;
}

/* ── Banners ── */
.warn-banner {
    background: """ + COLORS["warning_dim"] + """;
    border-left: 3px solid """ + COLORS["warning"] + """;
    border-radius: 8px;
    padding: 12px 16px;
    margin-bottom: 12px;
    font-size: 0.88rem;
    color: """ + COLORS["text_primary"] + """;
}
.empty-state {
    text-align: center;
    padding: 5rem 1rem;
    border: 1px dashed """ + COLORS["border_light"] + """;
    border-radius: 24px;
    color: """ + COLORS["text_muted"] + """;
}

/* ── Footer ── */
.dash-footer {
    text-align: center;
    padding: 1.5rem 0 0.5rem 0;
    font-size: 0.75rem;
    color: """ + COLORS["text_muted"] + """;
    border-top: 1px solid """ + COLORS["border"] + """;
    margin-top: 1rem;
}
</style>
"""
