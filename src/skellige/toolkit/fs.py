"""Filesystem helpers that report failures as ToolkitError."""

import os
from pathlib import Path

import structlog

from .errors import FileError, FileErrorKind, PathError, PathErrorKind, ToolkitError

logger = structlog.get_logger(__name__)


def abs_path(path: str | os.PathLike[str]) -> Path:
    """Expand ``~`` and return the absolute form of path.

    Args:
        path: Relative, absolute or home-relative path

    Returns:
        Absolute path; symlinks are not required to exist

    Raises:
        ToolkitError: If the path is empty or the home directory can't be found
    """
    raw = os.fspath(path)
    if not raw:
        raise ToolkitError(PathError(PathErrorKind.EMPTY))

    try:
        expanded = Path(raw).expanduser()
    except RuntimeError as e:
        raise ToolkitError(PathError(PathErrorKind.FAILED_TO_EXPAND, raw)) from e

    return expanded.resolve()


def mkdir_p(path: str | os.PathLike[str]) -> Path:
    """Create path and any missing parents, returning the absolute path."""
    target = abs_path(path)
    if target.exists() and not target.is_dir():
        raise ToolkitError(PathError(PathErrorKind.IS_NOT_DIR, target))

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ToolkitError(e) from e

    logger.debug("toolkit.mkdir", path=str(target))
    return target


def read_string(path: str | os.PathLike[str]) -> str:
    """Read a UTF-8 text file.

    Raises:
        ToolkitError: Wrapping a FileError when the file is missing, is a
            directory or does not hold valid UTF-8, or an OSError otherwise
    """
    target = abs_path(path)
    if not target.exists():
        raise ToolkitError(FileError(FileErrorKind.DOES_NOT_EXIST, target))
    if not target.is_file():
        raise ToolkitError(FileError(FileErrorKind.IS_NOT_FILE, target))

    try:
        data = target.read_bytes()
    except OSError as e:
        raise ToolkitError(e) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        # The decode error is not a toolkit type; keep the chain flat.
        raise ToolkitError(
            FileError(FileErrorKind.FAILED_TO_EXTRACT_STRING, target)
        ) from None
