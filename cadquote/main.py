import asyncio
import json
import sys
from dataclasses import asdict

from cadquote.config.settings import Settings
from cadquote.logging.logger import Log
from cadquote.processor.exceptions import FileReadError
from cadquote.processor.file_loader import FileLoader
from cadquote.processor.models import ProgressEvent
from cadquote.processor.processor import build_pipeline
from cadquote.processor.progress import ProgressObserver


def _log_progress(event: ProgressEvent) -> None:
    Log.debug(f"[{event.stage.value}] {event.progress:.0f}% {event.message}")


def _logging_observer() -> ProgressObserver:
    return ProgressObserver(
        on_start=lambda: Log.info("Quote pipeline started"),
        on_progress=_log_progress,
        on_complete=lambda result: Log.info(f"Quote {result.quote.id} ready"),
        on_error=lambda message: Log.error(f"Quote pipeline error: {message}"),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> describe files -> run pipeline -> print quote."""
    settings = Settings()
    Log.configure(settings.log_level)

    paths = sys.argv[1:] if argv is None else argv
    try:
        files = FileLoader().load_all(paths)
    except FileReadError as exc:
        Log.error(str(exc))
        return 1

    pipeline = build_pipeline(settings)
    quote = asyncio.run(pipeline.process(files, _logging_observer()))
    if quote is None:
        return 1

    print(json.dumps(asdict(quote), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
