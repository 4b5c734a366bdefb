"""
Domain exceptions for the workout aggregate.

Validation errors (bad index, unknown metric, missing owner) signal a caller
bug and always propagate. Storage errors are raised by repository adapters
and carry enough context (table, operation, row id) to diagnose a failure
from a single log line.
"""
from typing import Optional


class IndexOutOfBoundsError(IndexError):
    """Raised when an index-based mutator receives an index outside the list."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of bounds for collection of length {length}")
        self.index = index
        self.length = length


class UnknownMetricError(ValueError):
    """Raised when a metric lookup receives a key that is not a WorkoutMetric."""

    def __init__(self, key: object):
        super().__init__(f"Unknown metric: {key!r}")
        self.key = key


class AttachmentTimeoutError(TimeoutError):
    """Raised when a set is never attached to an exercise within the allowed time."""

    pass


class BrokenReferenceError(RuntimeError):
    """Raised when a child entity cannot find itself in its parent's list."""

    pass


class DefinitionInUseError(ValueError):
    """Raised when deleting an exercise definition that logged sets still reference."""

    def __init__(self, exercise_id: str, set_count: int):
        super().__init__(f"Exercise {exercise_id} is referenced by {set_count} set(s)")
        self.exercise_id = exercise_id
        self.set_count = set_count


class StorageError(Exception):
    """
    Raised when the persistence gateway rejects an operation.

    Args:
        table: Row collection the operation targeted (e.g. "sets")
        operation: select / insert / update / delete
        row_id: Affected row identifier, when known
        message: Underlying error text (kept out of user-facing responses)
    """

    def __init__(
        self,
        table: str,
        operation: str,
        row_id: Optional[str] = None,
        message: str = "",
    ):
        target = f"{table}[{row_id}]" if row_id else table
        super().__init__(f"Failed to {operation} {target}: {message}")
        self.table = table
        self.operation = operation
        self.row_id = row_id
        self.message = message


class TranscriptionError(Exception):
    """Raised when the vision model returns no usable workout."""

    pass
