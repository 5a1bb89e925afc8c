from dataclasses import dataclass, field


def file_extension(name: str) -> str:
    """Lowercased text after the last '.'; the whole name when there is no dot."""
    return name.rsplit(".", 1)[-1].lower()


@dataclass(frozen=True)
class CandidateFile:
    """A user-selected file: only its metadata takes part in the quote."""

    name: str
    size: int

    @property
    def extension(self) -> str:
        return file_extension(self.name)


@dataclass(frozen=True)
class ValidationLimits:
    max_file_size_bytes: int = 50 * 1024 * 1024
    max_files: int = 10
    max_name_length: int = 100
    allowed_extensions: frozenset[str] = frozenset(
        {"step", "stp", "stl", "iges", "igs", "dwg", "dxf", "obj", "ply", "3mf"}
    )
    large_batch_warning_bytes: int = 100 * 1024 * 1024


@dataclass(frozen=True)
class FileValidation:
    """Outcome of checking a single file."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RejectedFile:
    file: CandidateFile
    errors: list[str]


@dataclass
class BatchValidation:
    """Outcome of checking a whole batch.

    The batch may proceed only when ``errors`` is empty; one rejected file
    blocks every file in the batch.
    """

    valid_files: list[CandidateFile] = field(default_factory=list)
    invalid_files: list[RejectedFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
