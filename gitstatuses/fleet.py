"""Fleet scan — walk a directory, inspect every repository in parallel."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

from .models import RepoState, RepoStatus, ScanConfig
from .scanner import InspectionError, inspect_repo, walk_dirs
from .scanner.repo import repo_name

logger = logging.getLogger(__name__)


class ScanResults:
    """Thread-safe, append-only collection of successes and failures."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._repos: list[RepoStatus] = []
        self._failed: list[str] = []

    def add_success(self, status: RepoStatus) -> None:
        with self._lock:
            self._repos.append(status)

    def add_failure(self, name: str) -> None:
        with self._lock:
            self._failed.append(name)

    def snapshot(self) -> tuple[list[RepoStatus], list[str]]:
        """Copies of both lists, taken under the lock."""
        with self._lock:
            return list(self._repos), list(self._failed)


def default_workers() -> int:
    return os.cpu_count() or 1


def _inspect_into(path: Path, config: ScanConfig, results: ScanResults) -> None:
    """Worker body: one directory in, at most one record out."""
    try:
        status = inspect_repo(path, fetch=config.fetch, include_remote=config.include_remote)
    except InspectionError as e:
        logger.warning("Could not inspect %s: %s", path, e.reason)
        results.add_failure(e.name)
        return
    except Exception:
        logger.exception("Unexpected error while inspecting %s", path)
        results.add_failure(repo_name(path))
        return
    if status is not None:
        results.add_success(status)


def find_repositories(
    config: ScanConfig,
    max_workers: int | None = None,
) -> tuple[list[RepoStatus], list[str]]:
    """
    Scan config.root for git repositories.
    Returns (statuses, failed repository names), in completion order.
    A repository that fails never stops the others.
    """
    root = Path(config.root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    candidates = list(walk_dirs(root, config.max_depth))
    logger.debug("Found %d directories under %s (depth %d)", len(candidates), root, config.max_depth)
    results = ScanResults()
    if not candidates:
        return results.snapshot()

    workers = max(1, min(max_workers or default_workers(), len(candidates)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_inspect_into, d, config, results) for d in candidates]
        for future in futures:
            future.result()

    repos, failed = results.snapshot()
    logger.debug("Inspected %d repositories, %d failed", len(repos), len(failed))
    return repos, failed


def summarize(repos: Iterable[RepoStatus], failed: Iterable[str] = ()) -> dict[str, Any]:
    """Counts for the summary view: total, clean, dirty, unpushed, failed."""
    repos = list(repos)
    return {
        "total": len(repos),
        "clean": sum(1 for r in repos if r.status == RepoState.CLEAN),
        "dirty": sum(1 for r in repos if r.status == RepoState.DIRTY),
        "unpushed": sum(1 for r in repos if r.has_unpushed),
        "failed": len(list(failed)),
    }
