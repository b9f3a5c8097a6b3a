"""
All-or-nothing output files for a single task invocation
"""

import logging
import os
from typing import List

logger = logging.getLogger(__name__)


class OutputSet:
    """
    Tracks the files one task invocation creates so they can be removed
    together if the invocation fails.

    Used as a context manager, leaving the block with an exception rolls
    back every file created inside it:

        with OutputSet(work_dir) as outputs:
            outputs.write("wc-0-1.shard", data)
    """

    def __init__(self, directory: str):
        """
        Args:
            directory: Directory the output files live in, created on demand
        """
        self.directory = directory
        self.paths: List[str] = []
        self.rollback_errors: List[OSError] = []

    def path_for(self, name: str) -> str:
        """Full path of the output file `name`"""
        return os.path.join(self.directory, name)

    def write(self, name: str, data: bytes) -> str:
        """
        Replace the file `name` with `data`

        Any file already at the path is removed first, so re-running a
        completed task overwrites its output instead of appending to it.

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be removed, created or written
        """
        os.makedirs(self.directory, exist_ok=True)
        path = self.path_for(name)

        if os.path.lexists(path):
            logger.debug(f"Removing previous output {path}")
            os.remove(path)

        with open(path, 'xb') as f:
            # Recorded before writing so a failed write is rolled back too
            self.paths.append(path)
            f.write(data)
        return path

    def rollback(self) -> List[OSError]:
        """
        Delete every file created through this set, newest first

        Returns:
            Errors from removals that failed; files already gone are ignored
        """
        errors = []
        while self.paths:
            path = self.paths.pop()
            try:
                os.remove(path)
                logger.info(f"Rolled back output {path}")
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error(f"Could not roll back output {path}: {e}")
                errors.append(e)
        self.rollback_errors.extend(errors)
        return errors

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            errors = self.rollback()
            if errors and hasattr(exc, 'rollback_errors'):
                exc.rollback_errors.extend(errors)
        return False
