"""
Configuração centralizada do painel de gastos.
Carrega variáveis de ambiente (.env local) ou st.secrets (Streamlit Cloud).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Carrega .env a partir da raiz do projeto (apenas local)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _get_secret(key: str, default: str = None) -> str | None:
    """Busca config em st.secrets (Cloud) ou os.environ (.env local)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and key in st.secrets:
            return st.secrets[key]
    except Exception:
        # Sem secrets.toml o Streamlit levanta ao acessar st.secrets
        pass
    return os.getenv(key, default)


def _get_int(key: str, default: int) -> int:
    value = _get_secret(key)
    return int(value) if value not in (None, "") else default


def _get_float(key: str, default: float | None) -> float | None:
    value = _get_secret(key)
    return float(value) if value not in (None, "") else default


# ─── API ───

API_BASE_URL = _get_secret(
    "FINANCEIRO_API_BASE_URL",
    "http://api.financeiro.arielgiacomini.com.br/v1",
)
MAX_RETRIES = _get_int("FINANCEIRO_MAX_RETRIES", 3)
RETRY_BACKOFF = _get_float("FINANCEIRO_RETRY_BACKOFF", 1.0)  # segundos
REQUEST_TIMEOUT = _get_float("FINANCEIRO_REQUEST_TIMEOUT", None)  # sem timeout

# ─── Atualização automática ───

REFRESH_INTERVAL_MS = _get_int("REFRESH_INTERVAL_MS", 60_000)
LABEL_REVEAL_DELAY_MS = _get_int("LABEL_REVEAL_DELAY_MS", 1_600)
COUNTDOWN_TICK_MS = _get_int("COUNTDOWN_TICK_MS", 1_000)

# ─── Filtros ───

DEFAULT_CATEGORY = _get_secret("DEFAULT_CATEGORY", "Alimentação:Café da Manhã")
DEFAULT_MONTH_YEAR = _get_secret("DEFAULT_MONTH_YEAR", "Janeiro/2026")
START_YEAR = _get_int("START_YEAR", 2025)

# ─── KPIs ───

DAYS_PER_MONTH = 30
WEEKS_PER_MONTH = 4
DAYS_PER_WEEK = 7

# ─── Logging ───

LOG_LEVEL = _get_secret("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = None):
    """Configura o logging raiz do processo (idempotente)."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
