"""
Worker-side map/reduce task execution.
Runs single map and reduce tasks against intermediate shard files
kept in a local work directory.
"""

from mrworker.codec import KeyValue
from mrworker.errors import (
    EncodingError,
    MapReduceError,
    ReduceFailure,
    TaskError,
    TaskIOError,
    TransformError,
)
from mrworker.map_executor import MapExecutor
from mrworker.reduce_executor import ReduceExecutor

__version__ = "0.1.0"

__all__ = [
    "KeyValue",
    "MapExecutor",
    "ReduceExecutor",
    "MapReduceError",
    "TaskError",
    "TaskIOError",
    "EncodingError",
    "TransformError",
    "ReduceFailure",
]
