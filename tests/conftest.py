import random

import pytest

from cadquote.config.settings import Settings
from cadquote.processor.models import ProgressEvent
from cadquote.processor.progress import ProgressObserver, ProgressReporter

MIB = 1024 * 1024


class RecordingSleep:
    """Async stand-in for asyncio.sleep that returns immediately."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class EventLog:
    """Collects everything a ProgressObserver receives."""

    def __init__(self) -> None:
        self.started = 0
        self.events: list[ProgressEvent] = []
        self.completed: list[object] = []
        self.errors: list[str] = []

    def observer(self) -> ProgressObserver:
        return ProgressObserver(
            on_start=self._start,
            on_progress=self.events.append,
            on_complete=self.completed.append,
            on_error=self.errors.append,
        )

    def _start(self) -> None:
        self.started += 1

    def stage(self, name: str) -> list[ProgressEvent]:
        return [e for e in self.events if e.stage.value == name]


@pytest.fixture()
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture()
def reporter(event_log: EventLog) -> ProgressReporter:
    return ProgressReporter(event_log.observer())


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)
