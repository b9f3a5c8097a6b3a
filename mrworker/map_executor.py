"""
Map Task Executor
Executes map tasks by reading an input file, applying the map function,
partitioning its output and writing one shard file per reduce task
"""

import logging
import time
from typing import Callable, Iterable, List, Tuple

import psutil

from mrworker import codec
from mrworker.errors import EncodingError, TaskError, TaskIOError, TransformError
from mrworker.naming import shard_name
from mrworker.output import OutputSet
from mrworker.partitioner import partition

logger = logging.getLogger(__name__)

MapFunction = Callable[[str, str], Iterable[Tuple[str, str]]]


class MapExecutor:
    """Executes a single map task"""

    def __init__(self, job_name: str, map_index: int, input_path: str,
                 n_reduce: int, map_function: MapFunction, work_dir: str):
        """
        Initialize the map executor

        Args:
            job_name: Name of the map/reduce job
            map_index: Index of this map task within the job
            input_path: Path of the input file this task processes
            n_reduce: Number of reduce tasks (shards to partition into)
            map_function: User map function, (source, content) -> (key, value) pairs
            work_dir: Directory holding shard and merge files

        Raises:
            ValueError: If n_reduce is not positive or the task coordinates are invalid
        """
        if isinstance(n_reduce, bool) or not isinstance(n_reduce, int) or n_reduce <= 0:
            raise ValueError(f"n_reduce must be a positive integer, got {n_reduce!r}")
        # Validates job name and index up front
        shard_name(job_name, map_index, 0)

        self.job_name = job_name
        self.map_index = map_index
        self.input_path = input_path
        self.n_reduce = n_reduce
        self.map_function = map_function
        self.work_dir = work_dir

    @property
    def task(self) -> str:
        """Human readable task coordinates for log and error messages"""
        return f"map task {self.map_index} of job {self.job_name}"

    def execute(self) -> dict:
        """
        Execute the map task

        Returns:
            Dictionary with 'success', 'execution_time_ms', 'error_message',
            'phase', 'output_files' and 'memory_rss_bytes' fields
        """
        start_time = time.time()
        output_files = []
        error_message = ''
        phase = None

        try:
            output_files = self.run()
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

    def run(self) -> List[str]:
        """
        Run the map task, leaving no shard files behind on failure

        Returns:
            Paths of the n_reduce shard files, in reduce index order

        Raises:
            TaskIOError: Reading the input or writing a shard failed
            EncodingError: The input is not UTF-8 or a pair could not be encoded
            TransformError: The map function failed or emitted a bad pair
        """
        try:
            content = self._read_input()
            pairs = self._apply_map_function(content)
            shards = self._partition(pairs)
            paths = self._write_shards(shards)
        except TaskError as e:
            logger.error(f"Map task failed - {e}")
            raise

        logger.info(f"Map task {self.map_index} of job {self.job_name}: "
                    f"wrote {len(pairs)} pairs to {len(paths)} shard files")
        return paths

    def _read_input(self) -> str:
        logger.info(f"Map task {self.map_index}: Reading input {self.input_path}")
        try:
            with open(self.input_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise TaskIOError(f"cannot read input {self.input_path}: {e}",
                              phase='read', task=self.task) from e
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(f"input {self.input_path} is not valid UTF-8: {e}",
                                phase='read', task=self.task) from e

    def _apply_map_function(self, content: str) -> List[Tuple[str, str]]:
        """
        Call the map function once and materialise its output

        Generators are drained here so that exceptions they raise are
        reported as map function failures.
        """
        try:
            output = list(self.map_function(self.input_path, content))
        except Exception as e:
            raise TransformError(f"map function raised {type(e).__name__}: {e}",
                                 phase='transform', task=self.task) from e

        pairs = []
        for item in output:
            # A two-character string would otherwise unpack into a pair
            if isinstance(item, (str, bytes)):
                raise TransformError(f"map function emitted {item!r}, expected a (key, value) pair",
                                     phase='transform', task=self.task)
            try:
                key, value = item
            except (TypeError, ValueError) as e:
                raise TransformError(f"map function emitted {item!r}, expected a (key, value) pair",
                                     phase='transform', task=self.task) from e
            if not isinstance(key, str):
                raise TransformError(f"map function emitted non-text key {key!r}",
                                     phase='transform', task=self.task)
            try:
                key.encode('utf-8')
            except UnicodeEncodeError as e:
                raise TransformError(f"map function emitted key {key!r} that is not valid UTF-8",
                                     phase='transform', task=self.task) from e
            pairs.append((key, value))

        logger.debug(f"Map task {self.map_index}: map function emitted {len(pairs)} pairs")
        return pairs

    def _partition(self, pairs: List[Tuple[str, str]]) -> List[List[Tuple[str, str]]]:
        """Split pairs into n_reduce buffers, keeping encounter order in each"""
        shards = [[] for _ in range(self.n_reduce)]
        for key, value in pairs:
            shards[partition(key, self.n_reduce)].append((key, value))
        return shards

    def _write_shards(self, shards: List[List[Tuple[str, str]]]) -> List[str]:
        """
        Encode and write every shard, empty ones included

        All shards written by this call are removed again if any of them
        fails to encode or write.
        """
        with OutputSet(self.work_dir) as outputs:
            for reduce_index, kv_pairs in enumerate(shards):
                name = shard_name(self.job_name, self.map_index, reduce_index)
                try:
                    data = codec.encode(kv_pairs)
                except EncodingError as e:
                    raise EncodingError(f"shard {reduce_index}: {e.message}",
                                        phase='encode', task=self.task) from e
                try:
                    outputs.write(name, data)
                except OSError as e:
                    raise TaskIOError(f"cannot write shard {name}: {e}",
                                      phase='write', task=self.task) from e
                logger.debug(f"Map task {self.map_index}: wrote {len(kv_pairs)} pairs to {name}")
        return outputs.paths
