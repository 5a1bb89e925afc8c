import math
import random
from collections.abc import Sequence

from cadquote.logging.logger import Log
from cadquote.processor.models import ProgressEvent, Stage
from cadquote.processor.pipeline import Sleep, default_sleep, random_pause
from cadquote.processor.progress import ProgressReporter
from cadquote.validation.models import CandidateFile


class UploadSimulator:
    """Paces the UI with chunked upload progress; no bytes are transferred."""

    def __init__(
        self,
        reporter: ProgressReporter,
        rng: random.Random,
        sleep: Sleep | None = None,
        chunk_bytes: int = 1024 * 1024,
        delay_min_ms: int = 100,
        delay_max_ms: int = 300,
    ) -> None:
        self._reporter = reporter
        self._rng = rng
        self._sleep = sleep if sleep is not None else default_sleep()
        self._chunk_bytes = chunk_bytes
        self._delay_min_ms = delay_min_ms
        self._delay_max_ms = delay_max_ms

    async def simulate(self, files: Sequence[CandidateFile]) -> None:
        """Emit one upload event per chunk, in batch order.

        Progress is measured against the size of the whole batch.
        """
        total_size = sum(file.size for file in files)
        uploaded = 0

        for file in files:
            chunks = math.ceil(file.size / self._chunk_bytes)
            Log.debug(f"Uploading {file.name} in {chunks} chunks")
            for index in range(chunks):
                await random_pause(
                    self._sleep, self._rng, self._delay_min_ms, self._delay_max_ms
                )
                remaining = file.size - index * self._chunk_bytes
                uploaded += min(self._chunk_bytes, remaining)
                self._reporter.progress(
                    ProgressEvent(
                        stage=Stage.UPLOAD,
                        progress=min(uploaded / total_size * 100, 100),
                        message=f"Uploading... {file.name}",
                        current_file=file.name,
                    )
                )
