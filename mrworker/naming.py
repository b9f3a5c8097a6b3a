"""
File names for shard and merge files.
Names are relative to the worker's work directory and never depend on
process state, so a retried task finds and replaces its earlier output.
"""

import os


def _check_job(job_name: str):
    if not isinstance(job_name, str) or not job_name:
        raise ValueError(f"job name must be a non-empty string, got {job_name!r}")
    if os.sep in job_name or (os.altsep and os.altsep in job_name) or job_name in ('.', '..'):
        raise ValueError(f"job name must not contain path separators: {job_name!r}")


def _check_index(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


def shard_name(job_name: str, map_index: int, reduce_index: int) -> str:
    """Name of the file map task map_index writes for reduce task reduce_index"""
    _check_job(job_name)
    _check_index('map_index', map_index)
    _check_index('reduce_index', reduce_index)
    # Indices are plain decimal and the job name is a prefix, so splitting
    # from the right recovers all three parts.
    return f"{job_name}-{map_index}-{reduce_index}.shard"


def merge_name(job_name: str, reduce_index: int) -> str:
    """Name of the final output file of reduce task reduce_index"""
    _check_job(job_name)
    _check_index('reduce_index', reduce_index)
    return f"{job_name}-{reduce_index}.out"
