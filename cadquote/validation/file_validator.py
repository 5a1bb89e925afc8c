import re
from collections.abc import Sequence

from cadquote.config.settings import Settings
from cadquote.validation.models import (
    BatchValidation,
    CandidateFile,
    FileValidation,
    RejectedFile,
    ValidationLimits,
)

_SAFE_NAME = re.compile(r"^[\w\-. ]+$", re.ASCII)
_MIB = 1024 * 1024


def limits_from_settings(settings: Settings) -> ValidationLimits:
    """Build validation limits from application settings."""
    return ValidationLimits(
        max_file_size_bytes=settings.max_file_size_bytes,
        max_files=settings.max_files,
        max_name_length=settings.max_name_length,
        allowed_extensions=frozenset(ext.lower() for ext in settings.allowed_extensions),
        large_batch_warning_bytes=settings.large_batch_warning_bytes,
    )


class FileValidator:
    """Checks a batch of candidate files against count, size, format and name limits."""

    def __init__(self, limits: ValidationLimits | None = None) -> None:
        self._limits = limits if limits is not None else ValidationLimits()

    def validate_file(self, file: CandidateFile) -> FileValidation:
        """Evaluate every per-file rule; all violations are reported."""
        errors: list[str] = []

        if file.size > self._limits.max_file_size_bytes:
            errors.append(
                f"File {file.name} exceeds the "
                f"{self._limits.max_file_size_bytes // _MIB}MB limit"
            )

        if file.extension not in self._limits.allowed_extensions:
            errors.append(f"Unsupported file format: {file.extension}")

        if len(file.name) > self._limits.max_name_length:
            errors.append(f"File name too long: {file.name}")

        return FileValidation(is_valid=not errors, errors=errors)

    def validate_batch(self, files: Sequence[CandidateFile]) -> BatchValidation:
        """Partition a batch into accepted and rejected files.

        A batch larger than ``max_files`` fails with a single error and no
        file is inspected.
        """
        result = BatchValidation()

        if not files:
            result.errors.append("At least one file is required")
            return result

        if len(files) > self._limits.max_files:
            result.errors.append(
                f"A maximum of {self._limits.max_files} files can be uploaded"
            )
            return result

        for file in files:
            validation = self.validate_file(file)
            if validation.is_valid:
                result.valid_files.append(file)
            else:
                result.invalid_files.append(RejectedFile(file=file, errors=validation.errors))
                result.errors.extend(validation.errors)

            if not _SAFE_NAME.match(file.name):
                result.warnings.append(
                    f"File name {file.name} contains special characters "
                    "that may affect processing"
                )

        total_size = sum(file.size for file in files)
        if total_size > self._limits.large_batch_warning_bytes:
            result.warnings.append(
                f"Total upload size {total_size / _MIB:.1f}MB is large, "
                "uploading may take a while"
            )
        return result
