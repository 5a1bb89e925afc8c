import asyncio
import random
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from cadquote.processor.models import (
    CostEstimation,
    GeometryFeatures,
    ManufacturingData,
    MaterialRecommendation,
)
from cadquote.validation.models import CandidateFile

Sleep = Callable[[float], Awaitable[object]]


async def random_pause(
    sleep: Sleep, rng: random.Random, min_ms: int, max_ms: int
) -> None:
    """Suspend for a uniform duration in [min_ms, max_ms) milliseconds."""
    delay_ms = min_ms + rng.random() * (max_ms - min_ms)
    await sleep(delay_ms / 1000)


def default_sleep() -> Sleep:
    return asyncio.sleep


@dataclass(slots=True)
class AnalysisContext:
    file: CandidateFile
    features: GeometryFeatures | None = None
    manufacturing_data: ManufacturingData | None = None
    materials: list[MaterialRecommendation] = field(default_factory=list)
    cost_estimation: CostEstimation | None = None


class AnalysisStep(ABC):
    name: str
    weight: float

    @abstractmethod
    def run(self, context: AnalysisContext) -> AnalysisContext:
        raise NotImplementedError
