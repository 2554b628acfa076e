"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import json
import tempfile
import shutil

from partition_reduce.config import ReduceConfig
from partition_reduce.naming import shard_path

EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'examples')


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def intermediate_dir(temp_dir):
    """Directory holding shard files"""
    dirpath = os.path.join(temp_dir, 'intermediate')
    os.makedirs(dirpath)
    return dirpath


@pytest.fixture
def config(intermediate_dir, temp_dir):
    """Reduce config pointing at the temporary directories"""
    return ReduceConfig(intermediate_dir=intermediate_dir,
                        output_dir=os.path.join(temp_dir, 'output'))


@pytest.fixture
def write_shard(intermediate_dir):
    """Write a shard the way a map task would: one JSON object per line"""
    def _write(job_name, map_task, reduce_task, pairs):
        path = shard_path(intermediate_dir, job_name, map_task, reduce_task)
        with open(path, 'w', encoding='utf-8') as f:
            for key, value in pairs:
                f.write(json.dumps({'Key': key, 'Value': value}) + '\n')
        return path
    return _write


@pytest.fixture
def wordcount_job_file():
    """Path to word count example job file"""
    return os.path.join(EXAMPLES_DIR, 'wordcount.py')


@pytest.fixture
def inverted_index_job_file():
    """Path to inverted index example job file"""
    return os.path.join(EXAMPLES_DIR, 'inverted_index.py')


@pytest.fixture
def read_output():
    """Read an output file back as a list of (key, value) tuples"""
    def _read(path):
        with open(path, 'r', encoding='utf-8') as f:
            return [(record['Key'], record['Value']) for record in map(json.loads, f)]
    return _read
