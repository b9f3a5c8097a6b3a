"""
Worker configuration and logging setup
"""

import logging
import os
from dataclasses import dataclass

DEFAULT_WORK_DIR = '/mapreduce-data/intermediate'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class WorkerConfig:
    """Settings shared by every task a worker runs"""
    work_dir: str = DEFAULT_WORK_DIR
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls) -> 'WorkerConfig':
        """Build a config from MAPREDUCE_WORK_DIR and MAPREDUCE_LOG_LEVEL"""
        return cls(
            work_dir=os.environ.get('MAPREDUCE_WORK_DIR', DEFAULT_WORK_DIR),
            log_level=os.environ.get('MAPREDUCE_LOG_LEVEL', 'INFO').upper(),
        )


def configure_logging(level='INFO'):
    """Configure root logging in the worker's format"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
