import math
import random
from collections.abc import Sequence

from cadquote.logging.logger import Log
from cadquote.processor.exceptions import StepOrderError
from cadquote.processor.models import AnalysisStepDescriptor, FileAnalysis, ProgressEvent, Stage
from cadquote.processor.pipeline import (
    AnalysisContext,
    AnalysisStep,
    Sleep,
    default_sleep,
    random_pause,
)
from cadquote.processor.progress import ProgressReporter
from cadquote.validation.models import CandidateFile


class FileAnalyzer:
    """Runs the weighted analysis steps over each file, one file at a time."""

    def __init__(
        self,
        steps: Sequence[AnalysisStep],
        reporter: ProgressReporter,
        rng: random.Random,
        sleep: Sleep | None = None,
        delay_min_ms: int = 500,
        delay_max_ms: int = 1500,
    ) -> None:
        total_weight = sum(step.weight for step in steps)
        if not math.isclose(total_weight, 1.0):
            raise ValueError(f"Analysis step weights must sum to 1.0, got {total_weight}")
        self._steps = list(steps)
        self._reporter = reporter
        self._rng = rng
        self._sleep = sleep if sleep is not None else default_sleep()
        self._delay_min_ms = delay_min_ms
        self._delay_max_ms = delay_max_ms

    @property
    def descriptors(self) -> list[AnalysisStepDescriptor]:
        return [AnalysisStepDescriptor(name=s.name, weight=s.weight) for s in self._steps]

    async def analyze_all(self, files: Sequence[CandidateFile]) -> list[FileAnalysis]:
        """Analyze files strictly in order; the first failure aborts the batch."""
        results: list[FileAnalysis] = []
        for index, file in enumerate(files):
            Log.info(f"Analyzing file {index + 1}/{len(files)}: {file.name}")
            results.append(await self.analyze(file, index=index, batch_size=len(files)))
        return results

    async def analyze(
        self, file: CandidateFile, index: int = 0, batch_size: int = 1
    ) -> FileAnalysis:
        """Run every step for one file and freeze the outcome.

        Each step is preceded by a random pause and a progress event whose
        value is the cumulative step weight as a percentage.
        """
        context = AnalysisContext(file=file)
        cumulative = 0.0

        for step in self._steps:
            await random_pause(self._sleep, self._rng, self._delay_min_ms, self._delay_max_ms)
            cumulative += step.weight
            progress = round(cumulative * 100, 2)
            self._reporter.progress(
                ProgressEvent(
                    stage=Stage.ANALYSIS,
                    progress=progress,
                    message=step.name,
                    current_file=file.name,
                    current_step=step.name,
                    overall_progress=round((index + cumulative) / batch_size * 100, 2),
                )
            )
            context = step.run(context)

        return _finalize(context)


def _finalize(context: AnalysisContext) -> FileAnalysis:
    if (
        context.features is None
        or context.manufacturing_data is None
        or context.cost_estimation is None
    ):
        raise StepOrderError(f"Analysis of {context.file.name} did not complete every step")
    return FileAnalysis(
        name=context.file.name,
        size=context.file.size,
        extension=context.file.extension,
        features=context.features,
        manufacturing_data=context.manufacturing_data,
        materials=list(context.materials),
        cost_estimation=context.cost_estimation,
    )
