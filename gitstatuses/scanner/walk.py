"""Directory walker — bounded, never follows symlinks."""

import logging
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SKIP_DIRS = {".git"}


def _subdirs(d: Path) -> list[Path]:
    """Real (non-symlink) child directories of d; empty if d can't be read."""
    try:
        children = list(d.iterdir())
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", d, e)
        return []
    dirs = []
    for child in children:
        if child.name in SKIP_DIRS:
            continue
        try:
            # readable but not searchable parents make stat fail per child
            if child.is_symlink() or not child.is_dir():
                continue
        except OSError as e:
            logger.debug("Skipping %s: %s", child, e)
            continue
        dirs.append(child)
    return dirs


def walk_dirs(root: str | Path, max_depth: int = 1) -> Iterator[Path]:
    """
    Yield directories below root, from depth 1 (root's children) to max_depth.
    Root itself is not yielded. Order is not guaranteed.
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be >= 1, got {max_depth}")
    stack = [(Path(root), 0)]
    while stack:
        d, depth = stack.pop()
        for child in _subdirs(d):
            yield child
            if depth + 1 < max_depth:
                stack.append((child, depth + 1))
