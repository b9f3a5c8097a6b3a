"""
Reduce Task Executor
Executes reduce tasks by reading the shard files for one reduce index,
grouping values by key, applying the reduce function and writing the
merge file
"""

import logging
import os
import time
from collections import defaultdict
from typing import Callable, Dict, List, Tuple

import psutil

from mrworker import codec
from mrworker.errors import EncodingError, TaskError, TaskIOError, TransformError
from mrworker.naming import merge_name, shard_name
from mrworker.output import OutputSet

logger = logging.getLogger(__name__)

ReduceFunction = Callable[[str, List[str]], str]


class ReduceExecutor:
    """Executes a single reduce task"""

    def __init__(self, job_name: str, reduce_index: int, n_map: int,
                 reduce_function: ReduceFunction, work_dir: str):
        """
        Initialize the reduce executor

        Args:
            job_name: Name of the map/reduce job
            reduce_index: Index of this reduce task within the job
            n_map: Number of map tasks that produced shards for this job
            reduce_function: User reduce function, (key, values) -> result.
                It signals failure for a key by raising.
            work_dir: Directory holding shard and merge files

        Raises:
            ValueError: If n_map is negative or the task coordinates are invalid
        """
        if isinstance(n_map, bool) or not isinstance(n_map, int) or n_map < 0:
            raise ValueError(f"n_map must be a non-negative integer, got {n_map!r}")
        merge_name(job_name, reduce_index)

        self.job_name = job_name
        self.reduce_index = reduce_index
        self.n_map = n_map
        self.reduce_function = reduce_function
        self.work_dir = work_dir

    @property
    def task(self) -> str:
        """Human readable task coordinates for log and error messages"""
        return f"reduce task {self.reduce_index} of job {self.job_name}"

    @property
    def output_path(self) -> str:
        return os.path.join(self.work_dir, merge_name(self.job_name, self.reduce_index))

    def execute(self) -> dict:
        """
        Execute the reduce task

        Returns:
            Dictionary with 'success', 'execution_time_ms', 'error_message',
            'phase', 'output_files' and 'memory_rss_bytes' fields
        """
        start_time = time.time()
        output_files = []
        error_message = ''
        phase = None

        try:
            output_files = [self.run()]
        except TaskError as e:
            error_message = str(e)
            phase = e.phase

        return {
            'success': not error_message,
            'execution_time_ms': int((time.time() - start_time) * 1000),
            'error_message': error_message,
            'phase': phase,
            'output_files': output_files,
            'memory_rss_bytes': psutil.Process().memory_info().rss,
        }

    def run(self) -> str:
        """
        Run the reduce task, leaving no merge file behind on failure

        Returns:
            Path of the merge file

        Raises:
            TaskIOError: Reading a shard or writing the merge file failed
            EncodingError: A shard is malformed or a result could not be encoded
            TransformError: The reduce function failed for some key
        """
        try:
            key_groups = self._read_and_group_intermediate()
            results = self._apply_reduce_function(key_groups)
            path = self._write_output(results)
        except TaskError as e:
            logger.error(f"Reduce task failed - {e}")
            raise

        logger.info(f"Reduce task {self.reduce_index} of job {self.job_name}: "
                    f"wrote {len(results)} keys to {path}")
        return path

    def _read_and_group_intermediate(self) -> Dict[str, List[str]]:
        """
        Read the shard of every map task and group values by key

        Shards are read in ascending map index and records in stored order,
        which fixes the order of each key's value list. A missing shard
        contributes nothing.

        Returns:
            Dictionary mapping key to its list of values
        """
        key_groups = defaultdict(list)
        files_read = 0
        records_read = 0

        for map_index in range(self.n_map):
            path = os.path.join(self.work_dir, shard_name(self.job_name, map_index, self.reduce_index))
            try:
                with open(path, 'rb') as f:
                    for key, value in codec.iter_records(f):
                        key_groups[key].append(value)
                        records_read += 1
            except FileNotFoundError:
                logger.debug(f"Reduce task {self.reduce_index}: no shard from map task {map_index}")
                continue
            except EncodingError as e:
                raise EncodingError(f"shard {path}: {e.message}",
                                    phase='read', task=self.task) from e
            except OSError as e:
                raise TaskIOError(f"cannot read shard {path}: {e}",
                                  phase='read', task=self.task) from e
            files_read += 1

        logger.info(f"Reduce task {self.reduce_index}: Read {files_read} of {self.n_map} shards, "
                    f"{records_read} records, {len(key_groups)} unique keys")
        return key_groups

    def _apply_reduce_function(self, key_groups: Dict[str, List[str]]) -> List[Tuple[str, str]]:
        """
        Reduce each key in sorted order, stopping at the first failure
        """
        results = []
        for key in sorted(key_groups):  # Sort by key for deterministic output
            try:
                result = self.reduce_function(key, key_groups[key])
            except Exception as e:
                raise TransformError(f"reduce function failed for key {key!r}: {e}",
                                     phase='transform', task=self.task) from e
            results.append((key, result))
        return results

    def _write_output(self, results: List[Tuple[str, str]]) -> str:
        """Encode the results and write the merge file"""
        name = merge_name(self.job_name, self.reduce_index)
        try:
            data = codec.encode(results)
        except EncodingError as e:
            raise EncodingError(e.message, phase='encode', task=self.task) from e

        with OutputSet(self.work_dir) as outputs:
            try:
                path = outputs.write(name, data)
            except OSError as e:
                raise TaskIOError(f"cannot write merge file {name}: {e}",
                                  phase='write', task=self.task) from e
        return path
