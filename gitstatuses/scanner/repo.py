"""Repository inspector — opens a git repo and derives its RepoStatus."""

import logging
from pathlib import Path

import git
import git.exc

from ..models import RepoState, RepoStatus

logger = logging.getLogger(__name__)

NO_BRANCH = "(no branch)"
DETACHED = "HEAD"
CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


class InspectionError(Exception):
    """A repository that has a .git entry but could not be inspected."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


def repo_name(path: Path) -> str:
    return path.name or "unknown"


def get_branch_name(repo: git.Repo) -> str:
    """Short branch name, '<branch> (no commits)' if unborn, '(no branch)' if HEAD is unreadable."""
    head = repo.head
    try:
        if head.is_detached:
            return DETACHED
        ref = head.reference
    except Exception as e:
        logger.debug("Cannot read HEAD of %s: %s", repo.git_dir, e)
        return NO_BRANCH
    if head.is_valid():
        return ref.name
    # Symbolic HEAD pointing at a branch with no commit yet
    return f"{ref.path.rsplit('/', 1)[-1]} (no commits)"


def get_ahead_behind(repo: git.Repo) -> tuple[int, int]:
    """(ahead, behind) of the current branch vs its upstream; (0, 0) if either side is missing."""
    try:
        branch = repo.active_branch
        upstream = branch.tracking_branch()
        if upstream is None or not branch.is_valid() or not upstream.is_valid():
            return 0, 0
        local_sha = branch.commit.hexsha
        upstream_sha = upstream.commit.hexsha
        out = repo.git.rev_list("--left-right", "--count", f"{local_sha}...{upstream_sha}")
        ahead, behind = (int(n) for n in out.split())
        return ahead, behind
    except Exception as e:
        logger.debug("No ahead/behind for %s: %s", repo.git_dir, e)
        return 0, 0


def get_commit_count(repo: git.Repo) -> int:
    """Commits reachable from HEAD; 0 when HEAD has no target."""
    try:
        if not repo.head.is_valid():
            return 0
        return int(repo.git.rev_list("--count", repo.head.commit.hexsha))
    except Exception as e:
        logger.debug("Cannot count commits in %s: %s", repo.git_dir, e)
        return 0


def _parse_porcelain(output: str) -> tuple[int, int, bool]:
    """
    Parse `git status --porcelain -z` into (untracked, changed, conflicted).
    `changed` is broader than git's "modified": any tracked path with an index
    or worktree difference counts, staged additions, renames, copies and
    type changes included, so Clean means exactly zero untracked and zero changed.
    """
    untracked = changed = 0
    conflicted = False
    entries = iter(output.split("\0"))
    for entry in entries:
        if len(entry) < 3:
            continue
        code = entry[:2]
        if code == "??":
            untracked += 1
            continue
        if code == "!!":
            continue
        changed += 1
        if code in CONFLICT_CODES:
            conflicted = True
        if code[0] in "RC":
            # rename/copy: the source path follows as its own entry
            next(entries, None)
    return untracked, changed, conflicted


def get_worktree_counts(repo: git.Repo) -> tuple[int, int, RepoState]:
    """(untracked, changed, state) from a single status query. Errors give UNKNOWN."""
    try:
        output = repo.git.status("--porcelain", "-z", "--untracked-files=all")
    except Exception as e:
        logger.debug("Status query failed for %s: %s", repo.git_dir, e)
        return 0, 0, RepoState.UNKNOWN
    untracked, changed, conflicted = _parse_porcelain(output)
    clean = untracked == 0 and changed == 0 and not conflicted
    return untracked, changed, RepoState.CLEAN if clean else RepoState.DIRTY


def get_remote_url(repo: git.Repo) -> str | None:
    """URL of the 'origin' remote, if any."""
    try:
        return repo.remote("origin").url
    except Exception:
        return None


def fetch_origin(repo: git.Repo) -> None:
    """Fetch 'origin'. Raises ValueError if there is no origin, GitCommandError if the fetch fails."""
    repo.remote("origin").fetch()


def inspect_repo(path: str | Path, fetch: bool = False, include_remote: bool = False) -> RepoStatus | None:
    """
    Inspect one directory. Returns None if it holds no .git entry,
    raises InspectionError if it does but can't be opened or fetched.
    """
    path = Path(path)
    try:
        if not (path / ".git").exists():
            return None
    except OSError as e:
        logger.debug("Cannot look for .git in %s: %s", path, e)
        return None
    name = repo_name(path)
    try:
        repo = git.Repo(path)
    except (git.exc.GitError, OSError, ValueError) as e:
        raise InspectionError(name, f"could not open repository: {e}") from e

    with repo:
        if fetch:
            try:
                fetch_origin(repo)
            except (git.exc.GitError, OSError, ValueError) as e:
                raise InspectionError(name, f"fetch from origin failed: {e}") from e

        branch = get_branch_name(repo)
        ahead, behind = get_ahead_behind(repo)
        commits = get_commit_count(repo)
        untracked, changed, state = get_worktree_counts(repo)
        remote_url = get_remote_url(repo) if include_remote else None

    return RepoStatus(
        name=name,
        path=str(path.resolve()),
        branch=branch,
        ahead=ahead,
        behind=behind,
        commits=commits,
        untracked=untracked,
        changed=changed,
        status=state,
        remote_url=remote_url,
    )
