"""
Unit tests for ReduceConfig
"""

import pytest

from partition_reduce.config import ReduceConfig


class TestReduceConfig:

    def test_defaults(self):
        config = ReduceConfig.from_env({})
        assert config.intermediate_dir == '.'
        assert config.output_dir == '.'
        assert config.merge_strategy == 'memory'
        assert config.debug_verbose is False

    def test_reads_environment(self):
        config = ReduceConfig.from_env({
            'MAPREDUCE_INTERMEDIATE_DIR': '/data/intermediate',
            'MAPREDUCE_OUTPUT_DIR': '/data/output',
            'MAPREDUCE_MERGE_STRATEGY': ' Sorted ',
            'MAPREDUCE_DEBUG_VERBOSE': 'yes',
        })
        assert config.intermediate_dir == '/data/intermediate'
        assert config.output_dir == '/data/output'
        assert config.merge_strategy == 'sorted'
        assert config.debug_verbose is True

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv('MAPREDUCE_INTERMEDIATE_DIR', '/tmp/shards')
        assert ReduceConfig.from_env().intermediate_dir == '/tmp/shards'

    def test_rejects_unknown_strategy(self):
        with pytest.raises(ValueError, match='Unknown merge strategy'):
            ReduceConfig(merge_strategy='external')
