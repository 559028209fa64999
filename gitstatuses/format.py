"""Terminal output formatting — status table, legend, summary, JSON."""

import json
from typing import Any, Iterable, List, Optional

import click

from .models import RepoState, RepoStatus

HEADERS = ["Directory", "Branch", "Ahead", "Behind", "Commits", "Untracked", "Status"]
NUMERIC_COLUMNS = {"Ahead", "Behind", "Commits", "Untracked"}


def sort_repos(repos: Iterable[RepoStatus]) -> List[RepoStatus]:
    """Case-insensitive by name. Returns a new list."""
    return sorted(repos, key=lambda r: r.name.lower())


def _name_color(r: RepoStatus) -> Optional[str]:
    if r.has_unpushed:
        return "red"
    if r.commits == 0:
        return "blue"
    if r.ahead > 0:
        return "yellow"
    if r.behind > 0:
        return "cyan"
    return None


def _status_cell(r: RepoStatus) -> tuple[str, Optional[str]]:
    if r.status == RepoState.CLEAN:
        return "Clean", "green"
    if r.status == RepoState.DIRTY:
        return f"Dirty ({r.changed} changed)", "red"
    return r.status.label, None


def _row(r: RepoStatus, show_remote: bool) -> List[tuple[str, Optional[str]]]:
    """Cells as (text, color) pairs."""
    cells = [
        (r.name, _name_color(r)),
        (r.branch, None),
        (str(r.ahead), None),
        (str(r.behind), None),
        (str(r.commits), None),
        (str(r.untracked), None),
        _status_cell(r),
    ]
    if show_remote:
        cells.append((r.remote_url or "-", None))
    return cells


def _border(widths: List[int], left: str, mid: str, right: str) -> str:
    return left + mid.join("─" * (w + 2) for w in widths) + right


def _line(cells: List[tuple[str, Optional[str]]], widths: List[int], headers: List[str], bold: bool = False) -> str:
    parts = []
    for (text, color), width, header in zip(cells, widths, headers):
        # pad before styling so escape codes don't count toward width
        padded = text.rjust(width) if header in NUMERIC_COLUMNS and not bold else text.ljust(width)
        if color or bold:
            padded = click.style(padded, fg=color, bold=bold or None)
        parts.append(f" {padded} ")
    return "│" + "│".join(parts) + "│"


def format_table(repos: Iterable[RepoStatus], show_remote: bool = False) -> str:
    """Box-drawn table, one row per repository, sorted by name."""
    headers = HEADERS + (["Remote"] if show_remote else [])
    rows = [_row(r, show_remote) for r in sort_repos(repos)]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, (text, _) in enumerate(row):
            widths[i] = max(widths[i], len(text))

    lines = [_border(widths, "┌", "┬", "┐")]
    lines.append(_line([(h, None) for h in headers], widths, headers, bold=True))
    lines.append(_border(widths, "├", "┼", "┤"))
    for row in rows:
        lines.append(_line(row, widths, headers))
    lines.append(_border(widths, "└", "┴", "┘"))
    return "\n".join(lines)


def format_legend() -> str:
    lines = [
        "",
        "Legend:",
        "  Clean: No changes, no unpushed commits.",
        "  Dirty: Changes present, may or may not have unpushed commits.",
        "  ?: Status could not be determined.",
        "  Unpushed: Commits that are not pushed to the remote repository.",
        "  " + click.style("Red", fg="red") + ": Repository has unpushed commits.",
        "  " + click.style("Blue", fg="blue") + ": Repository has no commits in the current branch.",
        "  " + click.style("Yellow", fg="yellow") + ": Repository is ahead of upstream.",
        "  " + click.style("Cyan", fg="cyan") + ": Repository is behind upstream.",
    ]
    return "\n".join(lines)


def format_summary(counts: dict[str, Any]) -> str:
    lines = [
        "",
        "Summary:",
        f"  Total repositories:   {counts['total']}",
        f"  Clean:                {counts['clean']}",
        f"  With changes:         {counts['dirty']}",
        f"  With unpushed:        {counts['unpushed']}",
    ]
    if counts.get("failed"):
        lines.append(f"  Failed:               {counts['failed']}")
    return "\n".join(lines)


def format_json(repos: Iterable[RepoStatus], failed: Iterable[str], counts: dict[str, Any]) -> str:
    output = {
        "repositories": [r.to_dict() for r in sort_repos(repos)],
        "failed": sorted(failed, key=str.lower),
        "summary": counts,
    }
    return json.dumps(output, indent=2)
