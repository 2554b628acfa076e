#!/usr/bin/env python3
"""
Quick utility script to check that every shard a reduce task needs is present
and decodes cleanly.

Usage:
    python3 scripts/check_shards.py --job-name wc --map-count 3 --reduce-count 2 [--intermediate-dir DIR]
"""

import argparse
import os
import sys

from partition_reduce.codec import read_records
from partition_reduce.errors import MalformedRecordError
from partition_reduce.naming import shard_path


def check_shards(intermediate_dir: str, job_name: str, map_count: int, reduce_count: int) -> bool:
    """Check and display the shards written for a job."""
    ok = True
    for reduce_task in range(reduce_count):
        print(f"Reduce partition {reduce_task}:")
        total_records = 0
        for map_task in range(map_count):
            path = shard_path(intermediate_dir, job_name, map_task, reduce_task)
            if not os.path.exists(path):
                print(f"  ❌ map {map_task}: missing {path}")
                ok = False
                continue

            try:
                records = read_records(path)
            except (OSError, MalformedRecordError) as e:
                print(f"  ❌ map {map_task}: {e}")
                ok = False
                continue

            total_records += len(records)
            keys = [record.key for record in records]
            order = "sorted" if keys == sorted(keys) else "unsorted"
            print(f"  ✅ map {map_task}: {len(records)} records, "
                  f"{os.path.getsize(path)} bytes, {order}")
            if records:
                print(f"     Sample: {records[:3]}")

        print(f"  Total records: {total_records}\n")
    return ok


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description='Check the intermediate shards written by map tasks'
    )
    parser.add_argument('--job-name', required=True, help='Job name used in shard names')
    parser.add_argument('--map-count', type=int, required=True, help='Number of map tasks')
    parser.add_argument('--reduce-count', type=int, required=True, help='Number of reduce partitions')
    parser.add_argument(
        '--intermediate-dir',
        default=os.environ.get('MAPREDUCE_INTERMEDIATE_DIR', '.'),
        help='Directory holding the shards (default: $MAPREDUCE_INTERMEDIATE_DIR or .)'
    )

    args = parser.parse_args()
    intermediate_dir = os.path.abspath(args.intermediate_dir)

    print(f"Checking shards for job {args.job_name} in: {intermediate_dir}")
    print(f"{'='*60}\n")

    success = check_shards(intermediate_dir, args.job_name, args.map_count, args.reduce_count)
    if success:
        print("✅ All shards present and readable.")
    else:
        print("❌ Some shards are missing or malformed; reduce tasks will fail.")
    sys.exit(0 if success else 1)
