"""Error types raised by the toolkit helpers.

ToolkitError is a union over the concrete failures below. Introspection on it
forwards to the wrapped error, so callers can check for a FileError or an
OSError without matching on the union first.
"""

import os
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=BaseException)

__all__ = [
    "FileError",
    "FileErrorKind",
    "PathError",
    "PathErrorKind",
    "ToolkitError",
    "ToolkitErrorKind",
]


class FileErrorKind(Enum):
    """Closed set of file failures."""

    FAILED_TO_EXTRACT_STRING = "failed to extract string from file"
    IS_NOT_FILE = "is not a file"
    DOES_NOT_EXIST = "file does not exist"


class PathErrorKind(Enum):
    """Closed set of path failures."""

    EMPTY = "path empty"
    DOES_NOT_EXIST = "path does not exist"
    IS_NOT_DIR = "is not a directory"
    FAILED_TO_EXPAND = "failed to expand path"


class _KindError(Exception):
    """Shared shape of the toolkit leaf errors: a kind plus an optional path."""

    def __init__(
        self,
        kind: Enum,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        self._kind = kind
        self._path = os.fspath(path) if path is not None else None
        super().__init__(kind, self._path)

    @property
    def path(self) -> str | None:
        return self._path

    def __str__(self) -> str:
        if self._path is None:
            return str(self._kind.value)
        return f"{self._kind.value}: {self._path}"


class FileError(_KindError):
    """A file could not be read or was not a file."""

    def __init__(
        self,
        kind: FileErrorKind,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__(kind, path)

    @property
    def kind(self) -> FileErrorKind:
        return self._kind  # type: ignore[return-value]


class PathError(_KindError):
    """A path was empty, missing or of the wrong type."""

    def __init__(
        self,
        kind: PathErrorKind,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__(kind, path)

    @property
    def kind(self) -> PathErrorKind:
        return self._kind  # type: ignore[return-value]


class ToolkitErrorKind(Enum):
    """Which concrete error a ToolkitError wraps."""

    FILE = "File"
    PATH = "Path"
    IO = "Io"


class ToolkitError(Exception):
    """Union of every failure the toolkit can produce.

    The kind is derived from the wrapped error's type, so a ToolkitError can
    only be built around a FileError, a PathError or an OSError.

    Raises:
        TypeError: If ``inner`` is none of the supported types
    """

    def __init__(self, inner: BaseException) -> None:
        if isinstance(inner, FileError):
            kind = ToolkitErrorKind.FILE
        elif isinstance(inner, PathError):
            kind = ToolkitErrorKind.PATH
        elif isinstance(inner, OSError):
            kind = ToolkitErrorKind.IO
        else:
            raise TypeError(
                f"ToolkitError cannot wrap {type(inner).__name__}"
            )
        self._kind = kind
        self._inner = inner
        super().__init__(inner)

    @property
    def kind(self) -> ToolkitErrorKind:
        return self._kind

    @property
    def inner(self) -> BaseException:
        return self._inner

    def __str__(self) -> str:
        return str(self._inner)

    def __repr__(self) -> str:
        return f"ToolkitError.{self._kind.value}({self._inner!r})"

    def as_ref(self) -> BaseException:
        """Return the wrapped error, skipping the union itself."""
        return self._inner

    def as_mut(self) -> BaseException:
        return self.as_ref()

    def is_(self, cls: type[BaseException]) -> bool:
        return isinstance(self.as_ref(), cls)

    def downcast_ref(self, cls: type[E]) -> E | None:
        target = self.as_ref()
        if isinstance(target, cls):
            return target
        return None

    def downcast_mut(self, cls: type[E]) -> E | None:
        return self.downcast_ref(cls)

    def source(self) -> BaseException | None:
        """Return the cause recorded on the wrapped error, if any."""
        return self.as_ref().__cause__
