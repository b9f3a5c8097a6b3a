"""
Error types raised while executing map and reduce tasks.
"""

from typing import List, Optional


class MapReduceError(Exception):
    """Base class for all worker errors"""


class TaskError(MapReduceError):
    """A task invocation failed and was rolled back.

    Attributes:
        message: What went wrong
        phase: Phase that failed ('read', 'transform', 'encode' or 'write')
        task: Human readable task coordinates, e.g. "map task 3 of job wc"
        rollback_errors: Errors hit while removing this invocation's outputs
    """

    def __init__(self, message: str, phase: Optional[str] = None,
                 task: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.task = task
        self.rollback_errors: List[OSError] = []

    def __str__(self):
        parts = []
        if self.task:
            parts.append(self.task)
        if self.phase:
            parts.append(f"{self.phase} phase")
        if not parts:
            return self.message
        return f"{', '.join(parts)}: {self.message}"


class TaskIOError(TaskError):
    """Reading, creating, writing or removing a file failed"""


class EncodingError(TaskError):
    """A record could not be encoded, or a record stream is malformed or truncated"""


class TransformError(TaskError):
    """The user map or reduce function failed"""


class ReduceFailure(MapReduceError):
    """Raised by a reduce function to signal failure for a key"""
