import random
from collections.abc import Sequence

from cadquote.config.settings import Settings
from cadquote.logging.logger import Log
from cadquote.processor.analyzer import FileAnalyzer
from cadquote.processor.costing import CostRates
from cadquote.processor.models import ProcessingResult, Quote
from cadquote.processor.pipeline import Sleep
from cadquote.processor.progress import ProgressObserver, ProgressReporter
from cadquote.processor.quote import QuoteAssembler
from cadquote.processor.steps import default_steps
from cadquote.processor.upload import UploadSimulator
from cadquote.validation.file_validator import FileValidator, limits_from_settings
from cadquote.validation.models import CandidateFile


class QuotePipeline:
    """Orchestrates one quote run.

    Pipeline: validate -> upload -> analyze (per file) -> assemble quote.
    Validation failures are reported before ``on_start``; any exception
    after that is reported once through ``on_error`` and no quote is returned.
    """

    def __init__(
        self,
        settings: Settings,
        validator: FileValidator,
        rng: random.Random,
        sleep: Sleep | None = None,
        rates: CostRates | None = None,
    ) -> None:
        self._settings = settings
        self._validator = validator
        self._rng = rng
        self._sleep = sleep
        self._rates = rates or CostRates.from_settings(settings)

    async def process(
        self,
        files: Sequence[CandidateFile],
        observer: ProgressObserver | None = None,
    ) -> Quote | None:
        """Run the full pipeline for a batch and return the quote, if any."""
        reporter = ProgressReporter(observer)

        validation = self._validator.validate_batch(files)
        for warning in validation.warnings:
            Log.warning(warning)
        if not validation.is_valid:
            message = self._settings.error_delimiter.join(validation.errors)
            Log.warning(f"Batch rejected: {message}")
            reporter.error(message)
            return None

        accepted = validation.valid_files
        Log.info(f"Processing batch of {len(accepted)} files")

        try:
            reporter.start()
            await self._uploader(reporter).simulate(accepted)
            records = await self._analyzer(reporter).analyze_all(accepted)
            quote = await self._assembler(reporter).assemble(records)
            reporter.complete(ProcessingResult(files=list(accepted), quote=quote))
            return quote
        except Exception as exc:
            Log.exception(f"Quote pipeline failed: {exc}")
            reporter.error(str(exc))
            return None

    def _uploader(self, reporter: ProgressReporter) -> UploadSimulator:
        return UploadSimulator(
            reporter,
            self._rng,
            sleep=self._sleep,
            chunk_bytes=self._settings.upload_chunk_bytes,
            delay_min_ms=self._settings.upload_delay_min_ms,
            delay_max_ms=self._settings.upload_delay_max_ms,
        )

    def _analyzer(self, reporter: ProgressReporter) -> FileAnalyzer:
        return FileAnalyzer(
            default_steps(self._rng, self._rates),
            reporter,
            self._rng,
            sleep=self._sleep,
            delay_min_ms=self._settings.step_delay_min_ms,
            delay_max_ms=self._settings.step_delay_max_ms,
        )

    def _assembler(self, reporter: ProgressReporter) -> QuoteAssembler:
        return QuoteAssembler(
            reporter,
            sleep=self._sleep,
            delay_ms=self._settings.quote_delay_ms,
        )


def build_pipeline(
    settings: Settings,
    rng: random.Random | None = None,
    sleep: Sleep | None = None,
) -> QuotePipeline:
    """Build a QuotePipeline; the random source is seeded from settings unless given."""
    return QuotePipeline(
        settings=settings,
        validator=FileValidator(limits_from_settings(settings)),
        rng=rng if rng is not None else random.Random(settings.random_seed),
        sleep=sleep,
    )
