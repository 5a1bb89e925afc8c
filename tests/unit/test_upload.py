import random

import pytest

from cadquote.processor.models import Stage
from cadquote.processor.progress import ProgressReporter
from cadquote.processor.upload import UploadSimulator
from cadquote.validation.models import CandidateFile

MIB = 1024 * 1024


@pytest.mark.asyncio
async def test_emits_one_event_per_chunk(reporter: ProgressReporter, event_log, sleep) -> None:
    simulator = UploadSimulator(reporter, random.Random(1), sleep=sleep)

    await simulator.simulate([CandidateFile("bracket.step", 2 * MIB)])

    progress = [e.progress for e in event_log.events]
    assert progress == [50, 100]
    assert all(e.stage is Stage.UPLOAD for e in event_log.events)
    assert all(e.current_file == "bracket.step" for e in event_log.events)
    assert event_log.events[0].message == "Uploading... bracket.step"


@pytest.mark.asyncio
async def test_partial_last_chunk(reporter: ProgressReporter, event_log, sleep) -> None:
    simulator = UploadSimulator(reporter, random.Random(1), sleep=sleep)

    await simulator.simulate([CandidateFile("a.stl", MIB // 2), CandidateFile("b.stl", 3 * MIB // 2)])

    progress = [e.progress for e in event_log.events]
    assert len(progress) == 3
    assert progress == sorted(set(progress))
    assert progress[0] == pytest.approx(25)
    assert progress[1] == pytest.approx(75)
    assert progress[-1] == pytest.approx(100)
    assert [e.current_file for e in event_log.events] == ["a.stl", "b.stl", "b.stl"]


@pytest.mark.asyncio
async def test_delays_fall_in_configured_range(reporter: ProgressReporter, sleep) -> None:
    simulator = UploadSimulator(reporter, random.Random(7), sleep=sleep)

    await simulator.simulate([CandidateFile("big.stl", 10 * MIB)])

    assert len(sleep.calls) == 10
    assert all(0.1 <= s < 0.3 for s in sleep.calls)


@pytest.mark.asyncio
async def test_empty_file_emits_nothing(reporter: ProgressReporter, event_log, sleep) -> None:
    simulator = UploadSimulator(reporter, random.Random(1), sleep=sleep)

    await simulator.simulate([CandidateFile("empty.stl", 0)])

    assert event_log.events == []
    assert sleep.calls == []
