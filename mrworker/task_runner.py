"""
TaskRunner, runs map and reduce tasks of one job file against a worker's
work directory.
"""

import logging

from mrworker.config import WorkerConfig
from mrworker.function_loader import FunctionLoader
from mrworker.map_executor import MapExecutor
from mrworker.reduce_executor import ReduceExecutor

logger = logging.getLogger(__name__)


class TaskRunner:
    def __init__(self, config: WorkerConfig, job_file: str):
        """Bind a worker config to the user functions in job_file."""
        self.config = config
        self.loader = FunctionLoader(job_file)

    def run_map(self, job_name: str, map_index: int, input_path: str, n_reduce: int) -> dict:
        """Execute a map task and return its result dictionary."""
        executor = MapExecutor(
            job_name=job_name,
            map_index=map_index,
            input_path=input_path,
            n_reduce=n_reduce,
            map_function=self.loader.get_map_function(),
            work_dir=self.config.work_dir,
        )
        logger.info(f"Starting map task - Job: {job_name}, Task: {map_index}")
        return executor.execute()

    def run_reduce(self, job_name: str, reduce_index: int, n_map: int) -> dict:
        """Execute a reduce task and return its result dictionary."""
        executor = ReduceExecutor(
            job_name=job_name,
            reduce_index=reduce_index,
            n_map=n_map,
            reduce_function=self.loader.get_reduce_function(),
            work_dir=self.config.work_dir,
        )
        logger.info(f"Starting reduce task - Job: {job_name}, Task: {reduce_index}")
        return executor.execute()
