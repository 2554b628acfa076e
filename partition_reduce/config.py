"""
Reduce task configuration, read from the worker environment.
"""

import os
from dataclasses import dataclass

MERGE_STRATEGIES = ('memory', 'sorted')

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass
class ReduceConfig:
    """Settings shared by every reduce task a worker runs"""

    intermediate_dir: str = '.'
    output_dir: str = '.'
    merge_strategy: str = 'memory'
    debug_verbose: bool = False

    def __post_init__(self):
        if self.merge_strategy not in MERGE_STRATEGIES:
            raise ValueError(
                f"Unknown merge strategy {self.merge_strategy!r}, "
                f"expected one of {', '.join(MERGE_STRATEGIES)}"
            )

    @classmethod
    def from_env(cls, environ=None) -> 'ReduceConfig':
        """Build a config from MAPREDUCE_* environment variables"""
        environ = os.environ if environ is None else environ
        return cls(
            intermediate_dir=environ.get('MAPREDUCE_INTERMEDIATE_DIR', '.'),
            output_dir=environ.get('MAPREDUCE_OUTPUT_DIR', '.'),
            merge_strategy=environ.get('MAPREDUCE_MERGE_STRATEGY', 'memory').strip().lower(),
            debug_verbose=environ.get('MAPREDUCE_DEBUG_VERBOSE', '').strip().lower() in _TRUE_VALUES,
        )
