"""
Dynamic Function Loader for user job files
Loads a user-provided Python file defining map_function and reduce_function
"""

import importlib.util
import os
import uuid


class FunctionLoader:
    """Dynamically loads user-provided map/reduce functions from a Python file"""

    def __init__(self, job_file: str):
        """
        Args:
            job_file: Path to the user's Python file containing map/reduce functions
        """
        self.job_file = job_file
        self.module = None

    def load_module(self):
        """
        Import the job file as a fresh module

        Returns:
            The loaded module object

        Raises:
            FileNotFoundError: If the job file doesn't exist
            ImportError: If the file cannot be loaded as a Python module
        """
        if not os.path.exists(self.job_file):
            raise FileNotFoundError(f"Job file not found: {self.job_file}")

        # Unique module name so two job files never replace each other
        module_name = f"mrworker_job_{uuid.uuid4().hex}"
        spec = importlib.util.spec_from_file_location(module_name, self.job_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Failed to load job file: {self.job_file}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        self.module = module
        return module

    def _get(self, name: str):
        if self.module is None:
            self.load_module()
        func = getattr(self.module, name, None)
        if not callable(func):
            raise AttributeError(f"Job file {self.job_file} must define '{name}'")
        return func

    def get_map_function(self):
        """
        Returns:
            The map_function callable, (source, content) -> (key, value) pairs

        Raises:
            AttributeError: If the job file doesn't define 'map_function'
        """
        return self._get('map_function')

    def get_reduce_function(self):
        """
        Returns:
            The reduce_function callable, (key, values) -> result

        Raises:
            AttributeError: If the job file doesn't define 'reduce_function'
        """
        return self._get('reduce_function')
