"""Platform layer: processes and files."""

from .files import copy_file, copy_into, reset_dir, write_text
from .process import ProcessError, ProcessRunner, run

__all__ = [
    # files
    "copy_file",
    "copy_into",
    "reset_dir",
    "write_text",
    # process
    "ProcessError",
    "ProcessRunner",
    "run",
]
