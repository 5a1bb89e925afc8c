class ProcessorError(Exception):
    """Base exception for all quote pipeline errors."""


class StepOrderError(ProcessorError):
    """Raised when an analysis step runs before the step whose output it needs."""


class FileReadError(ProcessorError):
    """Raised when a candidate file cannot be read from disk."""
