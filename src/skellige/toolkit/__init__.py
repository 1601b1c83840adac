"""Shared filesystem toolkit used by the git layer.

Every helper reports failures as a ToolkitError, which wraps the concrete
FileError, PathError or OSError behind it.
"""

from .errors import (
    FileError,
    FileErrorKind,
    PathError,
    PathErrorKind,
    ToolkitError,
    ToolkitErrorKind,
)
from .fs import abs_path, mkdir_p, read_string

__all__ = [
    "abs_path",
    "mkdir_p",
    "read_string",
    "FileError",
    "FileErrorKind",
    "PathError",
    "PathErrorKind",
    "ToolkitError",
    "ToolkitErrorKind",
]
