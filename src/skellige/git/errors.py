"""Unified error type for the git layer.

Every failure skellige can produce is an ``Error`` tagged with one
``ErrorKind``. Domain failures carry a branch/repo name or nothing at all;
failures from GitPython, the toolkit or plain I/O carry the original exception.

Introspection always looks through the wrapper: ``err.is_(OSError)`` asks about
the wrapped exception, not about ``Error``. Toolkit errors are unions
themselves, so for them the lookup goes one level further to whatever the
ToolkitError wraps.

Usage:
    from skellige.git import Error, ErrorKind, converted

    @converted()
    def head_sha(path: str) -> str:
        return git.Repo(path).git.rev_parse("HEAD")  # GitError -> Error

    try:
        head_sha("/tmp/nowhere")
    except Error as e:
        if e.is_(git.NoSuchPathError):
            ...
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TypeVar

import git
import structlog

from skellige.toolkit.errors import ToolkitError

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=BaseException)

__all__ = ["Error", "ErrorKind", "converted"]


class ErrorKind(Enum):
    """Closed set of failures. Values are the variant names used in repr()."""

    BRANCH_NOT_FOUND = "BranchNotFound"
    FAST_FORWARD_ONLY = "FastForwardOnly"
    NATIVE_VCS = "NativeVcs"
    NO_MESSAGE_WAS_FOUND = "NoMessageWasFound"
    IO = "Io"
    REPO_NOT_FOUND = "RepoNotFound"
    TOOLKIT = "Toolkit"
    URL_NOT_SET = "UrlNotSet"


_NAMED_KINDS = frozenset({ErrorKind.BRANCH_NOT_FOUND, ErrorKind.REPO_NOT_FOUND})
_UNIT_KINDS = frozenset(
    {
        ErrorKind.FAST_FORWARD_ONLY,
        ErrorKind.NO_MESSAGE_WAS_FOUND,
        ErrorKind.URL_NOT_SET,
    }
)
_WRAPPED_TYPES: dict[ErrorKind, type[BaseException]] = {
    ErrorKind.NATIVE_VCS: git.GitError,
    ErrorKind.TOOLKIT: ToolkitError,
    ErrorKind.IO: OSError,
}

_MESSAGES = {
    ErrorKind.BRANCH_NOT_FOUND: "failed to find branch: {}",
    ErrorKind.FAST_FORWARD_ONLY: "only fast-forward supported",
    ErrorKind.NO_MESSAGE_WAS_FOUND: "no message was found for commit",
    ErrorKind.REPO_NOT_FOUND: "failed to find repo: {}",
    ErrorKind.URL_NOT_SET: "no url was set for the repo",
}


class Error(Exception):
    """Any failure raised by skellige.

    Args:
        kind: Which failure this is
        payload: Branch or repo name for the named kinds, the wrapped
            exception for NATIVE_VCS/TOOLKIT/IO, nothing for the rest

    Raises:
        TypeError: If the payload does not fit the kind
    """

    def __init__(
        self,
        kind: ErrorKind,
        payload: str | BaseException | None = None,
    ) -> None:
        if kind in _NAMED_KINDS:
            if not isinstance(payload, str):
                raise TypeError(f"{kind.value} requires a str payload")
        elif kind in _UNIT_KINDS:
            if payload is not None:
                raise TypeError(f"{kind.value} takes no payload")
        elif not isinstance(payload, _WRAPPED_TYPES[kind]):
            expected = _WRAPPED_TYPES[kind].__name__
            raise TypeError(f"{kind.value} requires a {expected} payload")

        self._kind = kind
        self._payload = payload
        super().__init__(kind, payload)

    @classmethod
    def branch_not_found(cls, name: str | os.PathLike[str]) -> "Error":
        """Return an error indicating that the given branch was not found."""
        return cls(ErrorKind.BRANCH_NOT_FOUND, os.fspath(name))

    @classmethod
    def repo_not_found(cls, name: str | os.PathLike[str]) -> "Error":
        """Return an error indicating that the given repo was not found."""
        return cls(ErrorKind.REPO_NOT_FOUND, os.fspath(name))

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Error":
        """Wrap a GitPython, toolkit or I/O exception.

        GitPython errors are matched first since some of them, such as
        NoSuchPathError, are OSErrors as well. An Error is returned as is.

        Raises:
            TypeError: If exc is not one of the wrapped exception types
        """
        if isinstance(exc, Error):
            return exc
        if isinstance(exc, git.GitError):
            return cls(ErrorKind.NATIVE_VCS, exc)
        if isinstance(exc, ToolkitError):
            return cls(ErrorKind.TOOLKIT, exc)
        if isinstance(exc, OSError):
            return cls(ErrorKind.IO, exc)
        raise TypeError(f"cannot convert {type(exc).__name__} into Error")

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def payload(self) -> str | BaseException | None:
        return self._payload

    def __str__(self) -> str:
        if self._kind in _WRAPPED_TYPES:
            return str(self._payload)
        return _MESSAGES[self._kind].format(self._payload)

    def __repr__(self) -> str:
        if self._payload is None:
            return f"Error.{self._kind.value}"
        return f"Error.{self._kind.value}({self._payload!r})"

    def as_ref(self) -> BaseException:
        """Return the exception introspection should look at.

        Domain kinds return the Error itself. GitPython and I/O kinds return
        the wrapped exception. Toolkit kinds defer to ToolkitError.as_ref(),
        which returns whatever the toolkit union wraps.
        """
        if self._kind is ErrorKind.TOOLKIT:
            return self._payload.as_ref()  # type: ignore[union-attr]
        if self._kind in _WRAPPED_TYPES:
            return self._payload  # type: ignore[return-value]
        return self

    def as_mut(self) -> BaseException:
        return self.as_ref()

    def is_(self, cls: type[BaseException]) -> bool:
        """Check whether the underlying exception is an instance of cls."""
        return isinstance(self.as_ref(), cls)

    def downcast_ref(self, cls: type[E]) -> E | None:
        """Return the underlying exception as cls, or None if it isn't one."""
        target = self.as_ref()
        if isinstance(target, cls):
            return target
        return None

    def downcast_mut(self, cls: type[E]) -> E | None:
        return self.downcast_ref(cls)

    def source(self) -> BaseException | None:
        """Return the cause of the underlying exception.

        Domain kinds have no cause. Wrapped kinds report the cause recorded
        on the wrapped exception, which is None for anything raised directly
        by GitPython, the toolkit or the OS.
        """
        target = self.as_ref()
        if target is self:
            return None
        return target.__cause__


@contextmanager
def converted() -> Iterator[None]:
    """Re-raise GitPython, toolkit and I/O failures as Error.

    Works as a context manager or as a decorator. Errors already of type
    Error pass through unchanged.
    """
    try:
        yield
    except (git.GitError, ToolkitError, OSError) as e:
        err = Error.from_exception(e)
        logger.debug(
            "git.error_converted",
            kind=err.kind.name,
            source_type=type(e).__name__,
            error=str(err),
        )
        raise err from e
