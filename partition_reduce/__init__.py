"""
Reduce-side merge for partitioned MapReduce jobs.
"""

from .codec import KeyValue, decode_records, encode_record, read_records, write_records
from .config import ReduceConfig
from .errors import MalformedRecordError, MissingShardError, OutputWriteError, ReduceTaskError
from .naming import merge_name, reduce_name, shard_path
from .reduce_executor import ReduceExecutor, run_reduce

__all__ = [
    'KeyValue',
    'MalformedRecordError',
    'MissingShardError',
    'OutputWriteError',
    'ReduceConfig',
    'ReduceExecutor',
    'ReduceTaskError',
    'decode_records',
    'encode_record',
    'merge_name',
    'read_records',
    'reduce_name',
    'run_reduce',
    'shard_path',
    'write_records',
]
