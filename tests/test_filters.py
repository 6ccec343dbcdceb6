import pytest

from painel_gastos.core.filters import FilterState
from painel_gastos.models.spend_models import ComboOptions, FilterSelection


def test_defaults_and_selection_notifies():
    state = FilterState("Mercado", "Janeiro/2026")
    seen = []
    state.subscribe(seen.append)

    state.select_month_year("Fevereiro/2026")

    assert state.selection == FilterSelection("Mercado", "Fevereiro/2026")
    assert seen == [FilterSelection("Mercado", "Fevereiro/2026")]


def test_selecting_current_value_is_noop():
    state = FilterState("Mercado", "Janeiro/2026")
    seen = []
    state.subscribe(seen.append)

    state.select_category("Mercado")

    assert seen == []


def test_load_options_falls_back_to_first_allowed_value():
    state = FilterState("Inexistente", "Janeiro/2026")
    seen = []
    state.subscribe(seen.append)

    state.load_options(ComboOptions(
        categories=["Alimentação:Almoço", "Transporte"],
        month_years=["Dezembro/2025", "Janeiro/2026"],
    ))

    assert state.selection == FilterSelection("Alimentação:Almoço", "Janeiro/2026")
    assert len(seen) == 1


def test_empty_options_keep_selection_and_allow_anything():
    state = FilterState("Mercado", "Janeiro/2026")
    state.load_options(ComboOptions())

    state.select_category("Qualquer")

    assert state.selection.category == "Qualquer"


def test_rejects_values_outside_loaded_options():
    state = FilterState("Mercado", "Janeiro/2026")
    state.load_options(ComboOptions(categories=["Mercado"], month_years=["Janeiro/2026"]))

    with pytest.raises(ValueError):
        state.select_category("Transporte")
    with pytest.raises(ValueError):
        state.select_month_year("Março/2026")


def test_unsubscribe():
    state = FilterState("Mercado", "Janeiro/2026")
    seen = []
    unsubscribe = state.subscribe(seen.append)
    unsubscribe()

    state.select_category("Transporte")

    assert seen == []
