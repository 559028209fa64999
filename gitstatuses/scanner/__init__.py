"""Repo scanner — walks directories and inspects git repositories."""

from .repo import InspectionError, inspect_repo
from .walk import walk_dirs

__all__ = ["InspectionError", "inspect_repo", "walk_dirs"]
