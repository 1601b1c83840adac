"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from pathlib import Path

import git
import pytest

CommitFile = Callable[[git.Repo, str, str, str], git.Commit]


def _commit_file(repo: git.Repo, name: str, content: str, message: str) -> git.Commit:
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


def _configure_user(repo: git.Repo) -> None:
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")


@pytest.fixture
def commit_file() -> CommitFile:
    """Write a file into a repo's working tree and commit it."""
    return _commit_file


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[tuple[Path, git.Repo], None, None]:
    """Create an empty git repository."""
    repo_path = tmp_path / "repo"
    repo = git.Repo.init(repo_path)
    _configure_user(repo)
    yield repo_path, repo
    repo.close()


@pytest.fixture
def single_commit_repo(temp_repo: tuple[Path, git.Repo]) -> tuple[Path, git.Repo]:
    """Create a repository with a single commit."""
    repo_path, repo = temp_repo
    _commit_file(repo, "test.txt", "Hello, World!", "Initial commit")
    return repo_path, repo


@pytest.fixture
def cloned_repo(
    tmp_path: Path, single_commit_repo: tuple[Path, git.Repo]
) -> Generator[tuple[git.Repo, git.Repo], None, None]:
    """Clone single_commit_repo; yields (origin, clone)."""
    origin_path, origin = single_commit_repo
    clone = git.Repo.clone_from(str(origin_path), tmp_path / "clone")
    _configure_user(clone)
    yield origin, clone
    clone.close()
