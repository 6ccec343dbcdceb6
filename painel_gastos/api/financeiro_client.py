"""
Cliente HTTP para a API Financeiro.

Responsabilidades:
- Retry com backoff exponencial
- Validação do formato das respostas
- Endpoints tipados (categorias, meses/anos, dashboard)

Toda falha definitiva vira FetchFailure.
"""

import logging
import time

import requests

from painel_gastos.config import (
    API_BASE_URL,
    MAX_RETRIES,
    RETRY_BACKOFF,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)

RETRY_STATUS = (429, 500, 502, 503, 504)


class FetchFailure(Exception):
    """Falha de rede, HTTP ou de parse ao buscar dados da API."""


class FinanceiroClient:
    """Cliente de baixo nível para a API REST."""

    def __init__(
        self,
        base_url: str = None,
        session: requests.Session = None,
        max_retries: int = MAX_RETRIES,
        retry_backoff: float = RETRY_BACKOFF,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.max_retries = max(max_retries, 1)
        self.retry_backoff = retry_backoff
        self.timeout = timeout

    # ─── HTTP primitivos ───

    def _request(self, method: str, path: str, **kwargs) -> dict | list | None:
        url = f"{self.base_url}{path}"
        last_error = None
        for attempt in range(self.max_retries):
            try:
                resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
                resp.raise_for_status()
                if resp.status_code == 204 or not resp.content:
                    return None
                return resp.json()
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else 0
                # 429 / 5xx → retry com backoff
                if status in RETRY_STATUS:
                    last_error = e
                    logger.warning(f"{method} {path}: HTTP {status} (tentativa {attempt + 1})")
                    self._backoff(attempt)
                    continue
                raise FetchFailure(f"{method} {path}: HTTP {status}") from e
            except requests.exceptions.ConnectionError as e:
                last_error = e
                logger.warning(f"{method} {path}: falha de conexão (tentativa {attempt + 1})")
                self._backoff(attempt)
                continue
            except ValueError as e:
                # JSON inválido (requests.JSONDecodeError herda de ValueError)
                raise FetchFailure(f"{method} {path}: resposta inválida") from e
            except requests.exceptions.RequestException as e:
                raise FetchFailure(f"{method} {path}: {e}") from e

        raise FetchFailure(f"{method} {path}: esgotadas {self.max_retries} tentativas") from last_error

    def _backoff(self, attempt: int):
        if attempt < self.max_retries - 1:
            time.sleep(self.retry_backoff * (2 ** attempt))

    def get(self, path: str, params: dict = None, headers: dict = None):
        return self._request("GET", path, params=params, headers=headers)

    # ─── Endpoints ───

    def list_categories(self) -> list[str]:
        """Retorna as categorias habilitadas (ex: "Alimentação:Café da Manhã")."""
        result = self.get("/category/search", params={"enable": "true"})
        if result is None:
            return []
        if not isinstance(result, list):
            raise FetchFailure("/category/search: esperado uma lista de categorias")
        return [str(c) for c in result]

    def list_month_years(self, from_year: int, to_year: int) -> list[str]:
        """Retorna os rótulos mês/ano entre from_year e to_year ("Janeiro/2026")."""
        result = self.get(
            "/date/month-year-all",
            params={"endYear": to_year},
            headers={"startYear": str(from_year), "Content-Type": "application/json"},
        )
        if result is None:
            return []
        if not isinstance(result, dict):
            raise FetchFailure("/date/month-year-all: esperado um objeto com monthYears")
        return [str(m) for m in result.get("monthYears") or []]

    def fetch_dashboard(self, category: str, month_year: str) -> list[dict]:
        """Retorna os registros diários de gasto da categoria no mês/ano."""
        result = self.get(
            "/dashboard/billToPay-day-week-category",
            params={"categoria": category},
            headers={"mesAno": month_year, "Cache-Control": "no-cache"},
        )
        if result is None:
            return []
        if not isinstance(result, list):
            raise FetchFailure("/dashboard/billToPay-day-week-category: esperado uma lista")
        return [item for item in result if isinstance(item, dict)]
