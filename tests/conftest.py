"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import sys
import tempfile
import shutil

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, ROOT_DIR)

from mrworker import codec
from mrworker.naming import shard_name


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def work_dir(temp_dir):
    """Directory for shard and merge files"""
    path = os.path.join(temp_dir, 'work')
    os.makedirs(path)
    return path


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown.
Quick brown foxes are amazing animals.
Lazy dogs sleep all day."""


@pytest.fixture
def sample_input_file(temp_dir, sample_text):
    """Create a sample input file for testing"""
    filepath = os.path.join(temp_dir, 'input.txt')
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(sample_text)
    return filepath


@pytest.fixture
def write_shard(work_dir):
    """Write a shard file for (job, map_index, reduce_index) directly"""
    def _write(job_name, map_index, reduce_index, pairs):
        path = os.path.join(work_dir, shard_name(job_name, map_index, reduce_index))
        with open(path, 'wb') as f:
            f.write(codec.encode(pairs))
        return path
    return _write


@pytest.fixture
def wordcount_job_file():
    """Path to word count example job file"""
    return os.path.join(ROOT_DIR, 'examples', 'wordcount.py')


@pytest.fixture
def inverted_index_job_file():
    """Path to inverted index example job file"""
    return os.path.join(ROOT_DIR, 'examples', 'inverted_index.py')
