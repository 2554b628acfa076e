"""
Reduce Task Executor
Merges every map task's shard for one reduce partition, groups values by
key, applies the reduce function once per key in ascending key order, and
writes the final output for the partition.
"""

import heapq
import itertools
import logging
import os
import time
from collections import defaultdict
from contextlib import ExitStack
from operator import attrgetter
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .codec import KeyValue, encode_record, enumerate_records
from .config import ReduceConfig
from .errors import MalformedRecordError, MissingShardError, OutputWriteError
from .function_loader import FunctionLoader
from .metrics import ReduceTaskMetrics
from .naming import merge_name, shard_path

logger = logging.getLogger(__name__)

ReduceFunction = Callable[[str, List[str]], str]


def run_reduce(job_name: str, reduce_partition: int, output_path: str, map_count: int,
               reduce_fn: ReduceFunction, config: Optional[ReduceConfig] = None) -> ReduceTaskMetrics:
    """
    Run one reduce task.

    Reads the shard written by each of the `map_count` map tasks for
    `reduce_partition`, then appends one (key, reduce_fn(key, values)) record
    per distinct key to `output_path`, in ascending key order. The output is
    fsynced before this returns.

    Raises:
        MissingShardError: A shard is absent or unreadable
        MalformedRecordError: A shard holds a record that does not decode
        OutputWriteError: The output file cannot be written
        TypeError: reduce_fn returned something other than a str

    Anything reduce_fn raises propagates unchanged.
    """
    if map_count < 0:
        raise ValueError(f"map_count must be non-negative, got {map_count}")
    config = config or ReduceConfig.from_env()

    metrics = ReduceTaskMetrics(
        job_name=job_name,
        reduce_partition=reduce_partition,
        map_count=map_count,
        start_time=time.time(),
    )
    logger.info(f"Reduce {job_name}/{reduce_partition}: merging {map_count} shards "
                f"into {output_path} ({config.merge_strategy} merge)")
    if map_count == 0:
        logger.warning(f"Reduce {job_name}/{reduce_partition}: no map tasks, output will be empty")

    if config.merge_strategy == 'sorted':
        with ExitStack() as stack:
            shards = _open_shards(stack, job_name, reduce_partition, map_count, config, metrics)
            groups = _merge_sorted_shards(shards)
            metrics.output_size_bytes = _write_output(
                output_path, _reduce_groups(groups, reduce_fn, metrics))
    else:
        key_groups = _read_and_group(job_name, reduce_partition, map_count, config, metrics)
        metrics.sample_memory()
        logger.info(f"Reduce {job_name}/{reduce_partition}: grouped {len(key_groups)} unique keys")
        groups = ((key, key_groups[key]) for key in sorted(key_groups))
        metrics.output_size_bytes = _write_output(
            output_path, _reduce_groups(groups, reduce_fn, metrics))

    metrics.sample_memory()
    metrics.end_time = time.time()
    logger.info(f"Reduce {job_name}/{reduce_partition}: wrote {metrics.keys_reduced} keys "
                f"from {metrics.records_read} records in {metrics.total_time_seconds:.3f}s")
    return metrics


def _open_shard(path: str, map_task: int):
    try:
        return open(path, 'rb')
    except OSError as e:
        raise MissingShardError(path, map_task, e.strerror or str(e)) from e


def _shard_records(f, path: str, map_task: int, config: ReduceConfig,
                   metrics: ReduceTaskMetrics, require_sorted: bool = False) -> Iterator[KeyValue]:
    """Decode one open shard, turning read failures into MissingShardError"""
    records = enumerate_records(f, path)
    previous_key = None
    while True:
        try:
            line_number, record = next(records)
        except StopIteration:
            break
        except OSError as e:
            raise MissingShardError(path, map_task, str(e)) from e

        if require_sorted and previous_key is not None and record.key < previous_key:
            raise MalformedRecordError(
                path, line_number, f"key {record.key!r} out of order after {previous_key!r}")
        previous_key = record.key

        if config.debug_verbose:
            logger.debug(f"Reduce: {record.key}, {record.value}")
        metrics.records_read += 1
        yield record

    metrics.shards_read += 1
    logger.debug(f"Finished shard {path}")


def _read_and_group(job_name: str, reduce_partition: int, map_count: int,
                    config: ReduceConfig, metrics: ReduceTaskMetrics) -> Dict[str, List[str]]:
    """
    Read every shard, in map task order, into a key -> values mapping

    Values for a key keep shard order, then file order within a shard.
    """
    key_groups = defaultdict(list)
    for map_task in range(map_count):
        path = shard_path(config.intermediate_dir, job_name, map_task, reduce_partition)
        with _open_shard(path, map_task) as f:
            for record in _shard_records(f, path, map_task, config, metrics):
                key_groups[record.key].append(record.value)
    return key_groups


def _open_shards(stack: ExitStack, job_name: str, reduce_partition: int, map_count: int,
                 config: ReduceConfig, metrics: ReduceTaskMetrics) -> List[Iterator[KeyValue]]:
    """Open every shard up front so a missing one fails before any output is written"""
    shards = []
    for map_task in range(map_count):
        path = shard_path(config.intermediate_dir, job_name, map_task, reduce_partition)
        f = stack.enter_context(_open_shard(path, map_task))
        shards.append(_shard_records(f, path, map_task, config, metrics, require_sorted=True))
    return shards


def _merge_sorted_shards(shards: List[Iterator[KeyValue]]) -> Iterator[Tuple[str, List[str]]]:
    """
    k-way merge of shards that are each sorted by key

    heapq.merge breaks ties by input position, so values for a key come out
    in the same shard order as the in-memory grouping produces.
    """
    merged = heapq.merge(*shards, key=attrgetter('key'))
    for key, records in itertools.groupby(merged, key=attrgetter('key')):
        yield key, [record.value for record in records]


def _reduce_groups(groups: Iterable[Tuple[str, List[str]]], reduce_fn: ReduceFunction,
                   metrics: ReduceTaskMetrics) -> Iterator[KeyValue]:
    for key, values in groups:
        result = reduce_fn(key, values)
        if not isinstance(result, str):
            raise TypeError(
                f"reduce function returned {type(result).__name__} for key {key!r}, expected str")
        metrics.keys_reduced += 1
        yield KeyValue(key, result)


def _write_output(output_path: str, records: Iterable[KeyValue]) -> int:
    """
    Append records to the output file and fsync it

    Returns the number of bytes this call appended.

    Only failures of the output file itself become OutputWriteError; errors
    raised while producing records propagate as they are.
    """
    try:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        f = open(output_path, 'a', encoding='utf-8')
    except OSError as e:
        raise OutputWriteError(output_path, str(e)) from e

    written = 0
    with f:
        for record in records:
            line = encode_record(record)
            try:
                f.write(line)
            except (OSError, UnicodeEncodeError) as e:
                raise OutputWriteError(output_path, str(e)) from e
            written += len(line.encode('utf-8'))
        try:
            f.flush()
            os.fsync(f.fileno())
        except OSError as e:
            raise OutputWriteError(output_path, str(e)) from e
    return written


class ReduceExecutor:
    """Executes a single reduce task on behalf of a worker"""

    def __init__(self, task_id: int, job_name: str, reduce_partition: int, map_count: int,
                 job_file: str, output_path: Optional[str] = None,
                 config: Optional[ReduceConfig] = None):
        """
        Initialize the reduce executor

        Args:
            task_id: Unique ID for this reduce task
            job_name: Name of the job, used to locate shards
            reduce_partition: Partition this reduce task is responsible for
            map_count: Number of map tasks that wrote shards for the partition
            job_file: Path to user's Python file defining reduce_function
            output_path: Output file; defaults to merge_name() inside config.output_dir
            config: Worker configuration; defaults to ReduceConfig.from_env(),
                read when the task executes
        """
        self.task_id = task_id
        self.job_name = job_name
        self.reduce_partition = reduce_partition
        self.map_count = map_count
        self.job_file = job_file
        self.config = config
        self.output_path = output_path
        self.loader = FunctionLoader(job_file)

    def execute(self) -> dict:
        """
        Execute the reduce task

        Returns:
            Dictionary with 'success', 'execution_time_ms', 'error_message'
            and 'metrics' fields
        """
        start_time = time.time()

        try:
            if self.config is None:
                self.config = ReduceConfig.from_env()
            if not self.output_path:
                self.output_path = os.path.join(
                    self.config.output_dir, merge_name(self.job_name, self.reduce_partition))

            logger.info(f"Reduce task {self.task_id}: Loading reduce function")
            reduce_fn = self.loader.get_reduce_function()

            metrics = run_reduce(self.job_name, self.reduce_partition, self.output_path,
                                 self.map_count, reduce_fn, self.config)

            execution_time = int((time.time() - start_time) * 1000)
            logger.info(f"Reduce task {self.task_id}: Completed in {execution_time}ms")

            return {
                'success': True,
                'execution_time_ms': execution_time,
                'error_message': '',
                'metrics': metrics.to_dict(),
            }

        except Exception as e:
            execution_time = int((time.time() - start_time) * 1000)
            logger.error(f"Reduce task {self.task_id} failed: {e}")
            return {
                'success': False,
                'execution_time_ms': execution_time,
                'error_message': str(e),
                'metrics': None,
            }
