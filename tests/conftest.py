from datetime import datetime, timedelta

import pytest


class ManualHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualLoop:
    """Loop falso: timers só disparam quando o teste avança o relógio."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[ManualHandle] = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = ManualHandle(self.now + delay, callback, args)
        self.timers.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.timers if not h.cancelled]

    def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.timers.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = target


@pytest.fixture
def manual_loop():
    return ManualLoop()


@pytest.fixture
def base_time():
    return datetime(2026, 1, 6, 12, 0, 0)


@pytest.fixture
def manual_clock(manual_loop, base_time):
    return lambda: base_time + timedelta(seconds=manual_loop.now)


@pytest.fixture
def january_records():
    return [
        {
            "date": "2026-01-05",
            "monthYear": "Janeiro/2026",
            "weekName": "Semana 1",
            "valueSpent": "50",
            "targetValue": "40",
            "currentWeek": False,
        },
        {
            "date": "2026-01-06",
            "monthYear": "Janeiro/2026",
            "weekName": "Semana 1",
            "valueSpent": "30",
            "targetValue": "40",
            "currentWeek": True,
        },
    ]
