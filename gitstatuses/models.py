"""Structured records for scanned repositories."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class RepoState(str, Enum):
    CLEAN = "Clean"
    DIRTY = "Dirty"
    UNKNOWN = "Unknown"  # status query failed

    @property
    def label(self) -> str:
        return "?" if self is RepoState.UNKNOWN else self.value


@dataclass(frozen=True)
class RepoStatus:
    """Status snapshot of one repository. Built once, never mutated."""

    name: str  # directory name, not unique across a scan
    path: str
    branch: str
    ahead: int = 0
    behind: int = 0
    commits: int = 0
    untracked: int = 0
    changed: int = 0
    status: RepoState = RepoState.UNKNOWN
    remote_url: Optional[str] = None

    @property
    def has_unpushed(self) -> bool:
        return self.ahead > 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "branch": self.branch,
            "ahead": self.ahead,
            "behind": self.behind,
            "commits": self.commits,
            "untracked": self.untracked,
            "changed": self.changed,
            "status": self.status.value,
            "has_unpushed": self.has_unpushed,
            "remote_url": self.remote_url,
        }


@dataclass(frozen=True)
class ScanConfig:
    """What to scan and how."""

    root: Path
    max_depth: int = 1
    fetch: bool = False  # fetch origin before reading upstream state
    include_remote: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
