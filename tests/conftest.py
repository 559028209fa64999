"""Fixtures for building throwaway git repositories."""

from pathlib import Path

import git
import pytest

AUTHOR = git.Actor("Test User", "test@example.com")


@pytest.fixture
def init_repo():
    """Create an empty git repository at the given path."""
    def _init(path: Path) -> git.Repo:
        path.mkdir(parents=True, exist_ok=True)
        return git.Repo.init(path)
    return _init


@pytest.fixture
def commit_file():
    """Write a file, stage it and commit. Returns the new commit."""
    def _commit(repo: git.Repo, name: str, content: str, message: str = "msg") -> git.Commit:
        path = Path(repo.working_tree_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        repo.index.add([str(path)])
        return repo.index.commit(message, author=AUTHOR, committer=AUTHOR)
    return _commit


@pytest.fixture
def tracking_pair(tmp_path, init_repo, commit_file):
    """
    An upstream repo and a clone of it under tmp_path/root.
    The clone's current branch tracks origin.
    """
    upstream = init_repo(tmp_path / "upstream")
    commit_file(upstream, "README.md", "hello\n", "initial")
    clone = upstream.clone(str(tmp_path / "root" / "clone"))
    return upstream, clone
