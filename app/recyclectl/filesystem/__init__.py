"""Live filesystem operations.

This module provides path traversal with recursion confirmation, the
secure shred engine and the batch operator for delete, shred and trash.
"""

from recyclectl.filesystem.confirm import ConfirmationPolicy, prompt_recursion
from recyclectl.filesystem.models import FilesystemActionResult, PathKind, TargetPath, WalkIssue
from recyclectl.filesystem.operator import FilesystemOperator
from recyclectl.filesystem.shredder import ShredConfig, ShredEngine
from recyclectl.filesystem.walker import PathWalker

__all__ = [
    "ConfirmationPolicy",
    "FilesystemActionResult",
    "FilesystemOperator",
    "PathKind",
    "PathWalker",
    "ShredConfig",
    "ShredEngine",
    "TargetPath",
    "WalkIssue",
    "prompt_recursion",
]
