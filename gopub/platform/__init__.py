"""Platform abstraction layer."""

from .files import clear_directory, copy_tree, remove_path
from .process import ProcessError, redact, run

__all__ = [
    # files
    "clear_directory",
    "copy_tree",
    "remove_path",
    # process
    "ProcessError",
    "redact",
    "run",
]
