from pathlib import Path

from cadquote.processor.exceptions import FileReadError
from cadquote.validation.models import CandidateFile


class FileLoader:
    """Reads candidate file metadata (name and size) from disk."""

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root

    def load(self, path: str | Path) -> CandidateFile:
        """Describe a file on disk; its bytes are never read.

        Raises:
            FileReadError: if the path does not point to a regular file.
        """
        resolved = self._resolve_path(Path(path))
        if not resolved.is_file():
            raise FileReadError(f"File not found: {resolved}")
        return CandidateFile(name=resolved.name, size=resolved.stat().st_size)

    def load_all(self, paths: list[str] | list[Path]) -> list[CandidateFile]:
        return [self.load(path) for path in paths]

    def _resolve_path(self, path: Path) -> Path:
        if self._files_root is None or path.is_absolute():
            return path
        return self._files_root / path
