"""GitPython-based repository operations.

Every public function here raises only ``Error``: GitPython, toolkit and I/O
failures are converted on the way out, and conditions that GitPython reports
with generic exceptions (ValueError, TypeError) are mapped to the matching
domain kind.
"""

import os
import sys
from pathlib import Path
from typing import TextIO

import git
import structlog

from skellige.config import settings
from skellige.toolkit.fs import abs_path, mkdir_p

from .errors import Error, ErrorKind, converted

logger = structlog.get_logger(__name__)

__all__ = [
    "StreamProgress",
    "branch",
    "clone",
    "last_message",
    "repo",
    "update",
    "url",
]


class StreamProgress(git.RemoteProgress):
    """Write clone/fetch progress to a text stream.

    GitPython calls update() from its output reader threads, where a raised
    exception would be lost. A failing write is therefore recorded and
    re-raised by raise_for_error() once the operation returns.
    """

    _OP_NAMES = {
        git.RemoteProgress.COUNTING: "counting",
        git.RemoteProgress.COMPRESSING: "compressing",
        git.RemoteProgress.WRITING: "writing",
        git.RemoteProgress.RECEIVING: "receiving",
        git.RemoteProgress.RESOLVING: "resolving",
        git.RemoteProgress.FINDING_SOURCES: "finding sources",
        git.RemoteProgress.CHECKING_OUT: "checking out",
    }

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream if stream is not None else sys.stderr
        self.stream_error: OSError | None = None

    def update(
        self,
        op_code: int,
        cur_count: str | float,
        max_count: str | float | None = None,
        message: str = "",
    ) -> None:
        if self.stream_error is not None:
            return

        name = self._OP_NAMES.get(op_code & self.OP_MASK, "progress")
        total = f"/{max_count}" if max_count else ""
        line = f"{name}: {cur_count}{total} {message}".rstrip()
        try:
            self.stream.write(line + "\n")
            self.stream.flush()
        except OSError as e:
            self.stream_error = e

    def raise_for_error(self) -> None:
        """Re-raise the first stream failure seen during the operation."""
        if self.stream_error is not None:
            raise self.stream_error


@converted()
def repo(path: str | os.PathLike[str]) -> git.Repo:
    """Open the repository at path.

    Raises:
        Error: REPO_NOT_FOUND if path is missing or is not a git repository
    """
    try:
        return git.Repo(path)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        raise Error.repo_not_found(path) from None


def _active_branch(r: git.Repo) -> str:
    try:
        return r.active_branch.name
    except TypeError:
        # Detached HEAD
        raise Error.branch_not_found("HEAD") from None


def _remote(r: git.Repo, name: str) -> tuple[git.Remote, str]:
    """Return the named remote and its url.

    A remote section without a url key still counts as an existing remote
    to GitPython, so the url is read from the config directly.
    """
    try:
        remote = r.remote(name)
    except ValueError:
        raise Error(ErrorKind.URL_NOT_SET) from None
    value = remote.config_reader.get_value("url", "")
    if not value:
        raise Error(ErrorKind.URL_NOT_SET)
    return remote, str(value)


@converted()
def url(path: str | os.PathLike[str], remote: str | None = None) -> str:
    """Return the url of the remote (``settings.remote`` by default)."""
    with repo(path) as r:
        _, value = _remote(r, remote or settings.remote)
    return value


@converted()
def branch(path: str | os.PathLike[str]) -> str:
    """Return the name of the checked out branch."""
    with repo(path) as r:
        return _active_branch(r)


@converted()
def last_message(path: str | os.PathLike[str]) -> str:
    """Return the message of the HEAD commit without trailing whitespace.

    Raises:
        Error: NO_MESSAGE_WAS_FOUND if HEAD has no commit or the message is empty
    """
    with repo(path) as r:
        try:
            message = r.head.commit.message
        except ValueError:
            raise Error(ErrorKind.NO_MESSAGE_WAS_FOUND) from None

    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    message = message.rstrip()
    if not message:
        raise Error(ErrorKind.NO_MESSAGE_WAS_FOUND)
    return message


@converted()
def clone(
    url: str,
    dst: str | os.PathLike[str],
    branch: str | None = None,
    progress: StreamProgress | None = None,
) -> Path:
    """Clone url into dst, creating missing parent directories.

    Args:
        url: Anything git accepts as a clone source
        dst: Destination directory; ``~`` is expanded
        branch: Branch to check out instead of the remote HEAD
        progress: Optional progress reporter

    Returns:
        Absolute path of the new working tree

    Raises:
        Error: BRANCH_NOT_FOUND if the remote lacks branch, otherwise the
            wrapped toolkit, GitPython or I/O failure
    """
    target = abs_path(dst)
    mkdir_p(target.parent)

    kwargs: dict[str, object] = {}
    if branch:
        kwargs["branch"] = branch

    try:
        cloned = git.Repo.clone_from(url, target, progress=progress, **kwargs)
    except git.GitCommandError as e:
        if branch and "remote branch" in str(e).lower():
            raise Error.branch_not_found(branch) from e
        raise
    cloned.close()

    if progress is not None:
        progress.raise_for_error()

    logger.info("git.cloned", url=url, path=str(target), branch=branch)
    return target


@converted()
def update(
    path: str | os.PathLike[str],
    remote: str | None = None,
    progress: StreamProgress | None = None,
) -> bool:
    """Fetch the remote and fast-forward the checked out branch.

    Returns:
        True if HEAD moved, False if it was already up to date

    Raises:
        Error: BRANCH_NOT_FOUND if the remote has no matching branch,
            FAST_FORWARD_ONLY if local and remote history diverged
    """
    with repo(path) as r:
        current = _active_branch(r)
        origin, _ = _remote(r, remote or settings.remote)
        origin.fetch(progress=progress)
        if progress is not None:
            progress.raise_for_error()

        target = next(
            (ref for ref in origin.refs if ref.remote_head == current),
            None,
        )
        if target is None:
            raise Error.branch_not_found(current)

        if r.head.is_valid():
            head = r.head.commit
            if head == target.commit or r.is_ancestor(target.commit, head):
                logger.debug("git.up_to_date", path=str(path), branch=current)
                return False
            if not r.is_ancestor(head, target.commit):
                raise Error(ErrorKind.FAST_FORWARD_ONLY)

        r.git.merge("--ff-only", target.name)

    logger.info("git.updated", path=str(path), branch=current, remote=origin.name)
    return True
