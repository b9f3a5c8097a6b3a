"""
Unit tests for WorkerConfig and TaskRunner
"""

import logging
import os
from unittest.mock import patch

from mrworker import codec
from mrworker.config import DEFAULT_WORK_DIR, LOG_FORMAT, WorkerConfig, configure_logging
from mrworker.naming import merge_name
from mrworker.task_runner import TaskRunner


class TestWorkerConfig:

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = WorkerConfig.from_env()
        assert config.work_dir == DEFAULT_WORK_DIR
        assert config.log_level == 'INFO'

    def test_reads_environment(self, temp_dir):
        env = {'MAPREDUCE_WORK_DIR': temp_dir, 'MAPREDUCE_LOG_LEVEL': 'debug'}
        with patch.dict(os.environ, env, clear=True):
            config = WorkerConfig.from_env()
        assert config.work_dir == temp_dir
        assert config.log_level == 'DEBUG'

    def test_configure_logging_uses_worker_format(self):
        with patch('mrworker.config.logging.basicConfig') as basic_config:
            configure_logging(logging.DEBUG)
        basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)


class TestTaskRunner:

    def test_runs_wordcount_job(self, temp_dir, work_dir, wordcount_job_file):
        input_path = os.path.join(temp_dir, 'words.txt')
        with open(input_path, 'w') as f:
            f.write("to be or not to be")

        runner = TaskRunner(WorkerConfig(work_dir=work_dir), wordcount_job_file)
        map_result = runner.run_map('wc', 0, input_path, n_reduce=1)
        reduce_result = runner.run_reduce('wc', 0, n_map=1)

        assert map_result['success'] is True
        assert reduce_result['success'] is True
        records = codec.read_records(os.path.join(work_dir, merge_name('wc', 0)))
        assert records == [("be", "2"), ("not", "1"), ("or", "1"), ("to", "2")]

    def test_reports_map_failure(self, temp_dir, work_dir, wordcount_job_file):
        runner = TaskRunner(WorkerConfig(work_dir=work_dir), wordcount_job_file)
        result = runner.run_map('wc', 0, os.path.join(temp_dir, 'nope.txt'), n_reduce=2)

        assert result['success'] is False
        assert result['phase'] == 'read'
        assert os.listdir(work_dir) == []
