"""
Loads the user's reduce function from a job file.

A job file is a plain Python module defining

    def reduce_function(key: str, values: list) -> str
"""

import importlib.util
import os
import sys


class FunctionLoader:
    """Dynamically loads a user-provided reduce function from a Python file"""

    def __init__(self, job_file: str):
        """
        Args:
            job_file: Path to user's Python file containing reduce_function
        """
        self.job_file = job_file
        self.module = None

    def load_module(self):
        """
        Import the job file as a module

        Returns:
            The loaded module object

        Raises:
            FileNotFoundError: If the job file doesn't exist
            ImportError: If the file cannot be loaded as a module
        """
        if not os.path.exists(self.job_file):
            raise FileNotFoundError(f"Job file not found: {self.job_file}")

        module_name = f"reduce_job_{os.path.splitext(os.path.basename(self.job_file))[0]}"
        spec = importlib.util.spec_from_file_location(module_name, self.job_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Failed to load job file: {self.job_file}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
        self.module = module
        return module

    def get_reduce_function(self):
        """
        Get reduce function from the job module, loading it on first use

        Raises:
            AttributeError: If the module doesn't define a callable 'reduce_function'
        """
        if not self.module:
            self.load_module()

        reduce_function = getattr(self.module, 'reduce_function', None)
        if not callable(reduce_function):
            raise AttributeError("Job file must define a callable 'reduce_function'")
        return reduce_function
