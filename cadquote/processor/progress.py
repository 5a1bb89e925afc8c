from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cadquote.processor.models import ProgressEvent


@dataclass(frozen=True)
class ProgressObserver:
    """Optional hooks a caller registers for one pipeline run."""

    on_start: Callable[[], Any] | None = None
    on_progress: Callable[[ProgressEvent], Any] | None = None
    on_complete: Callable[[Any], Any] | None = None
    on_error: Callable[[str], Any] | None = None


class ProgressReporter:
    """Delivers pipeline events to an observer.

    Missing hooks are skipped. ``start``, ``complete`` and ``error`` reach
    the observer at most once; ``progress`` may fire any number of times.
    """

    def __init__(self, observer: ProgressObserver | None = None) -> None:
        self._observer = observer if observer is not None else ProgressObserver()
        self._fired: set[str] = set()

    def start(self) -> None:
        if self._claim("start") and self._observer.on_start:
            self._observer.on_start()

    def progress(self, event: ProgressEvent) -> None:
        if self._observer.on_progress:
            self._observer.on_progress(event)

    def complete(self, result: Any) -> None:
        if self._claim("complete") and self._observer.on_complete:
            self._observer.on_complete(result)

    def error(self, message: str) -> None:
        if self._claim("error") and self._observer.on_error:
            self._observer.on_error(message)

    def _claim(self, hook: str) -> bool:
        if hook in self._fired:
            return False
        self._fired.add(hook)
        return True
