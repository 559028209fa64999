"""CLI entry point — scan a directory, print a status table."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import typer

from . import __version__
from .config import load_config, resolve_config_path
from .fleet import find_repositories, summarize
from .format import format_json, format_legend, format_summary, format_table
from .models import ScanConfig

logger = logging.getLogger("gitstatuses")

app = typer.Typer(help="Scan a directory for git repositories and show their status.")


def _err(msg: str) -> None:
    """Raise a styled error (red box) — used for all CLI errors."""
    raise click.BadParameter(msg)


def setup_logging(verbose: bool = False) -> None:
    """Plain stderr logging; DEBUG with --verbose, INFO otherwise."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root = logging.getLogger("gitstatuses")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-statuses {__version__}")
        raise typer.Exit()


def _report_failures(failed: list[str]) -> None:
    if not failed:
        return
    logger.warning("Failed to process the following repositories:")
    for name in sorted(failed, key=str.lower):
        logger.warning(" - %s", name)


@app.command()
def main(
    directory: Path = typer.Argument(Path("."), help="Directory to scan"),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=1, help="How many directory levels to descend (default: 1)"),
    fetch: Optional[bool] = typer.Option(None, "--fetch/--no-fetch", help="Fetch origin before reading ahead/behind"),
    remote: Optional[bool] = typer.Option(None, "--remote/--no-remote", "-r", help="Show the origin remote URL"),
    summary: Optional[bool] = typer.Option(None, "--summary/--no-summary", "-s", help="Show a summary of the scan"),
    legend: Optional[bool] = typer.Option(None, "--legend/--no-legend", "-l", help="Explain colors and statuses"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False, help="YAML file with default options"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
) -> None:
    """Scan DIRECTORY for git repositories and report their status."""
    setup_logging(verbose)
    defaults = load_config(resolve_config_path(config_path))

    def pick(value, key):
        return defaults[key] if value is None else value

    if not directory.exists() or not directory.is_dir():
        _err(f"Directory not found: {directory}\nUse a path that exists, e.g. git-statuses .")

    scan_config = ScanConfig(
        root=directory.resolve(),
        max_depth=pick(depth, "depth"),
        fetch=pick(fetch, "fetch"),
        include_remote=pick(remote, "remote"),
    )
    repos, failed = find_repositories(scan_config)
    counts = summarize(repos, failed)

    if json_out:
        typer.echo(format_json(repos, failed, counts))
        _report_failures(failed)
        return

    if repos:
        typer.echo(format_table(repos, show_remote=scan_config.include_remote))
    else:
        logger.info("No repositories found.")
    if pick(legend, "legend"):
        typer.echo(format_legend())
    if pick(summary, "summary"):
        typer.echo(format_summary(counts))
    _report_failures(failed)


def _main() -> None:
    app()


if __name__ == "__main__":
    _main()
