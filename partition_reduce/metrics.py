"""
Performance metrics collection for reduce tasks.
"""

import json
from dataclasses import dataclass, asdict

import psutil


@dataclass
class ReduceTaskMetrics:
    """Metrics for a single reduce task execution."""

    job_name: str
    reduce_partition: int
    map_count: int
    start_time: float
    end_time: float = 0.0
    shards_read: int = 0
    records_read: int = 0
    keys_reduced: int = 0
    output_size_bytes: int = 0
    peak_memory_bytes: int = 0

    @property
    def total_time_seconds(self) -> float:
        """Total task execution time in seconds."""
        return self.end_time - self.start_time

    def sample_memory(self):
        """Record current process RSS if it exceeds the previous peak."""
        rss = psutil.Process().memory_info().rss
        if rss > self.peak_memory_bytes:
            self.peak_memory_bytes = rss

    def to_dict(self) -> dict:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
