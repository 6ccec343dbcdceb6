import asyncio
from datetime import datetime, timedelta

from painel_gastos.api.financeiro_client import FetchFailure
from painel_gastos.core.scheduler import RefreshScheduler
from painel_gastos.models.spend_models import FilterSelection

CAFE = FilterSelection("Alimentação:Café da Manhã", "Janeiro/2026")
ALMOCO = FilterSelection("Alimentação:Almoço", "Janeiro/2026")

HOUR_MS = 3_600_000


class ControlledFetch:
    """Busca cujas respostas o teste resolve na ordem que quiser."""

    def __init__(self):
        self.calls: list[tuple[FilterSelection, asyncio.Future]] = []

    async def __call__(self, filters):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((filters, future))
        return await future

    def resolve(self, index, records):
        self.calls[index][1].set_result(records)

    def fail(self, index, error):
        self.calls[index][1].set_exception(error)


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


def test_fetches_immediately_and_applies_records():
    async def scenario():
        now = datetime(2026, 1, 6, 12, 0, 0)
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=60_000, clock=lambda: now)
        landed = []
        scheduler.subscribe(landed.append)

        scheduler.start(CAFE)
        await settle()
        assert [f for f, _ in fetch.calls] == [CAFE]
        assert not scheduler.loaded

        fetch.resolve(0, [{"valueSpent": 5}])
        await settle()
        scheduler.stop()
        return scheduler, landed, now

    scheduler, landed, now = asyncio.run(scenario())

    assert scheduler.loaded
    assert scheduler.records == [{"valueSpent": 5}]
    assert landed == [[{"valueSpent": 5}]]
    assert scheduler.state.last_fetch_at == now
    assert scheduler.state.next_fetch_at == now + timedelta(seconds=60)
    assert scheduler.state.remaining_ms == 60_000


def test_late_response_for_old_filters_is_discarded():
    async def scenario():
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=HOUR_MS)

        scheduler.start(CAFE)
        await settle()
        scheduler.change_filters(ALMOCO)
        await settle()

        # B responde primeiro, A chega atrasada
        fetch.resolve(1, [{"valueSpent": 2, "categoria": "almoco"}])
        await settle()
        fetch.resolve(0, [{"valueSpent": 1, "categoria": "cafe"}])
        await settle()
        scheduler.stop()
        return scheduler

    scheduler = asyncio.run(scenario())

    assert scheduler.filters == ALMOCO
    assert scheduler.records == [{"valueSpent": 2, "categoria": "almoco"}]


def test_late_response_for_same_filters_is_discarded():
    async def scenario():
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=HOUR_MS)

        scheduler.start(CAFE)
        await settle()
        # reinício manual: segunda busca para os mesmos filtros
        scheduler.start(CAFE)
        await settle()

        fetch.resolve(1, [{"valueSpent": "novo"}])
        await settle()
        fetch.resolve(0, [{"valueSpent": "velho"}])
        await settle()
        scheduler.stop()
        return scheduler

    scheduler = asyncio.run(scenario())

    assert scheduler.records == [{"valueSpent": "novo"}]


def test_filter_change_invalidates_records_until_new_data():
    async def scenario():
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=HOUR_MS)

        scheduler.start(CAFE)
        await settle()
        fetch.resolve(0, [{"valueSpent": 1}])
        await settle()
        assert scheduler.records

        scheduler.change_filters(ALMOCO)
        await settle()
        state = (scheduler.records, scheduler.loaded, len(fetch.calls))
        scheduler.stop()
        return state

    records, loaded, calls = asyncio.run(scenario())

    assert records == []
    assert not loaded
    assert calls == 2


def test_failure_keeps_previous_records_and_reports_error():
    async def scenario():
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=HOUR_MS)
        errors = []
        scheduler.add_error_observer(errors.append)

        scheduler.start(CAFE)
        await settle()
        fetch.resolve(0, [{"valueSpent": 1}])
        await settle()
        last_fetch_at = scheduler.state.last_fetch_at

        scheduler.start(CAFE)
        await settle()
        fetch.fail(1, FetchFailure("HTTP 503"))
        await settle()
        scheduler.stop()
        return scheduler, errors, last_fetch_at

    scheduler, errors, last_fetch_at = asyncio.run(scenario())

    assert scheduler.records == [{"valueSpent": 1}]
    assert scheduler.state.last_fetch_at == last_fetch_at
    assert len(errors) == 1
    assert isinstance(errors[0], FetchFailure)


def test_keeps_polling_after_failures():
    async def scenario():
        calls = []

        async def fetch(filters):
            calls.append(filters)
            if len(calls) < 3:
                raise FetchFailure("fora do ar")
            return [{"valueSpent": 9}]

        scheduler = RefreshScheduler(fetch, interval_ms=10)
        scheduler.start(CAFE)
        await asyncio.sleep(0.2)
        scheduler.stop()
        return scheduler, calls

    scheduler, calls = asyncio.run(scenario())

    assert len(calls) >= 3
    assert scheduler.records == [{"valueSpent": 9}]


def test_hung_fetch_does_not_block_next_cycle():
    async def scenario():
        calls = []

        async def fetch(filters):
            calls.append(filters)
            if len(calls) == 1:
                await asyncio.Event().wait()
            return [{"valueSpent": len(calls)}]

        scheduler = RefreshScheduler(fetch, interval_ms=20)
        scheduler.start(CAFE)
        await asyncio.sleep(0.1)
        scheduler.stop()
        return scheduler, calls

    scheduler, calls = asyncio.run(scenario())

    assert len(calls) >= 2
    assert scheduler.loaded


def test_stop_is_idempotent_and_suppresses_in_flight_response():
    async def scenario():
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=10)

        scheduler.start(CAFE)
        await settle()
        scheduler.stop()
        scheduler.stop()

        fetch.resolve(0, [{"valueSpent": 1}])
        await asyncio.sleep(0.05)
        return scheduler, len(fetch.calls)

    scheduler, calls = asyncio.run(scenario())

    assert not scheduler.running
    assert scheduler.records == []
    assert calls == 1


def test_update_remaining_uses_next_fetch(base_time):
    scheduler = RefreshScheduler(lambda f: None, interval_ms=HOUR_MS)

    assert scheduler.update_remaining(base_time) == 0

    scheduler.state.next_fetch_at = base_time + timedelta(seconds=30)
    assert scheduler.update_remaining(base_time) == 30_000


def test_next_fetch_counts_from_issue_time_after_slow_response():
    async def scenario():
        clock = {"now": datetime(2026, 1, 6, 12, 0, 0)}
        issued_at = clock["now"]
        fetch = ControlledFetch()
        scheduler = RefreshScheduler(fetch, interval_ms=60_000, clock=lambda: clock["now"])

        scheduler.start(CAFE)
        await settle()

        # resposta chega 3 s depois da emissão
        clock["now"] = issued_at + timedelta(seconds=3)
        fetch.resolve(0, [{"valueSpent": 5}])
        await settle()
        scheduler.stop()
        return scheduler, issued_at

    scheduler, issued_at = asyncio.run(scenario())

    assert scheduler.state.last_fetch_at == issued_at
    assert scheduler.state.next_fetch_at == issued_at + timedelta(seconds=60)
    assert scheduler.state.remaining_ms == 57_000


def test_countdown_matches_real_next_fetch_with_latency():
    async def scenario():
        loop = asyncio.get_running_loop()
        issue_times = []

        async def fetch(filters):
            issue_times.append(datetime.now())
            if len(issue_times) == 1:
                await asyncio.sleep(0.15)
            return [{"valueSpent": 1}]

        scheduler = RefreshScheduler(fetch, interval_ms=250, loop=loop)
        landed = []
        scheduler.subscribe(lambda records: landed.append(scheduler.state.next_fetch_at))
        scheduler.start(CAFE)
        await asyncio.sleep(0.4)
        scheduler.stop()
        return issue_times, landed

    issue_times, landed = asyncio.run(scenario())

    assert len(issue_times) >= 2
    drift_ms = abs((landed[0] - issue_times[1]).total_seconds() * 1000)
    assert drift_ms < 100
