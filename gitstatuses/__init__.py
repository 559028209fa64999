"""git-statuses — status of every git repository under a directory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("git-statuses")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
