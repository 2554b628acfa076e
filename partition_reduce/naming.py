"""
File naming shared by map tasks, reduce tasks and the output merger.

Every participant in a job must resolve the same (job, map task, reduce task)
triple to the same file name, so these stay pure functions of their arguments.
"""

import os


def reduce_name(job_name: str, map_task: int, reduce_task: int) -> str:
    """Name of the shard map task `map_task` writes for reduce task `reduce_task`"""
    return f"mrtmp.{job_name}-{map_task}-{reduce_task}"


def merge_name(job_name: str, reduce_task: int) -> str:
    """Name of the output file produced by reduce task `reduce_task`"""
    return f"mrtmp.{job_name}-res-{reduce_task}"


def shard_path(intermediate_dir: str, job_name: str, map_task: int, reduce_task: int) -> str:
    """Full path of a shard inside the intermediate directory"""
    return os.path.join(intermediate_dir, reduce_name(job_name, map_task, reduce_task))
