"""Renderer for CLI output.

This module renders mappings, link outcomes, status reports and detected
sources with Rich, using one colour convention throughout:
green = linked/healthy, yellow = stale or local data, red = broken or
refused, dim = nothing there yet.
"""

from typing import Iterable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from memorybridge.models.core import (
    DetectedSource,
    EntryKind,
    LinkResult,
    LinkState,
    Mapping,
    PrefixMap,
    StatusReport,
    UnlinkResult,
)

STATE_LABELS = {
    LinkState.LINK_CORRECT: ("linked", "green"),
    LinkState.LINK_WRONG: ("stale", "yellow"),
    LinkState.DIRECTORY_EXISTS: ("local dir", "yellow"),
    LinkState.MISSING: ("--", "dim"),
}

_MAX_NAME = 50


def _short(name: str) -> str:
    if len(name) > _MAX_NAME:
        return "..." + name[-(_MAX_NAME - 3) :]
    return name


def sort_mappings(mappings: Iterable[Mapping]) -> List[Mapping]:
    """Return *mappings* ordered by source name for stable output."""
    return sorted(mappings, key=lambda m: m.source_name)


def render_header(command: str, console: Console) -> None:
    """Print the command banner."""
    console.print(f"\n[bold]memorybridge[/bold] {command}\n")


def render_mappings(
    mappings: Sequence[Mapping],
    console: Optional[Console] = None,
    prefix_map: Optional[PrefixMap] = None,
) -> None:
    """Render a preview table of *mappings* and a one-line summary.

    Args:
        mappings: Mappings to show (rendered in the given order).
        console: Optional Console instance to use for rendering.
        prefix_map: When given, shown as the table title.
    """
    console = console or Console()

    title = None
    if prefix_map is not None:
        title = f"{escape(prefix_map.remote)} → {escape(prefix_map.local)}"
    table = Table(title=title)
    table.add_column("Project", style="cyan")
    table.add_column("Local name")
    table.add_column("State", style="bold")

    for m in mappings:
        label, style = STATE_LABELS[m.state]
        table.add_row(
            escape(_short(m.source_name)),
            escape(_short(m.local_name)),
            f"[{style}]{label}[/{style}]",
        )

    console.print(f"  [bold]{len(mappings)}[/bold] project(s):")
    console.print(table)
    render_counts(mappings, console)


def render_counts(mappings: Sequence[Mapping], console: Console) -> None:
    """Print linked / to-link / conflict counts."""
    linked = len([m for m in mappings if m.state == LinkState.LINK_CORRECT])
    linkable = len([m for m in mappings if m.linkable])
    conflicts = len([m for m in mappings if m.state == LinkState.DIRECTORY_EXISTS])
    console.print(
        f"\n  [green]{linked}[/green] already linked, "
        f"[cyan]{linkable}[/cyan] to link, "
        f"[yellow]{conflicts}[/yellow] conflicts\n"
    )


def render_link_outcome(
    mappings: Sequence[Mapping], result: LinkResult, console: Console
) -> None:
    """Print one line per mapping (by its pre-run state) and the totals."""
    prefix = "would " if result.dry_run else ""
    for m in mappings:
        label = escape(m.label)
        if m.state == LinkState.MISSING:
            console.print(f"  [green]{prefix}link[/green]    {label}")
        elif m.state == LinkState.LINK_WRONG:
            console.print(f"  [yellow]{prefix}update[/yellow]  {label}")
        elif m.state == LinkState.LINK_CORRECT:
            console.print(f"  [dim]skip[/dim]    {label}")
        else:
            console.print(f"  [red]skip[/red]    {label} (local dir exists)")

    console.print(
        f"\n  [bold]Done:[/bold] {result.created} created, "
        f"{result.updated} updated, {result.skipped} skipped\n"
    )


def render_unlink_outcome(
    mappings: Sequence[Mapping], result: UnlinkResult, console: Console
) -> None:
    """Print the removed links and the total."""
    prefix = "would " if result.dry_run else ""
    for m in mappings:
        if m.is_link:
            console.print(f"  [red]{prefix}unlink[/red]  {escape(m.label)}")
    console.print(f"\n  [bold]Done:[/bold] {result.removed} removed\n")


def render_status(report: StatusReport, console: Optional[Console] = None) -> None:
    """Render the local projects directory status."""
    console = console or Console()
    if not report.exists:
        console.print(
            f"  [dim]No projects directory at {escape(str(report.root))} "
            "(nothing bridged yet).[/dim]\n"
        )
        return

    for entry in report.entries:
        if entry.kind == EntryKind.SYMLINK:
            ok = "[green]ok[/green]" if entry.healthy else "[red]broken[/red]"
            console.print(f"  [cyan]→[/cyan] {escape(entry.name)}")
            console.print(f"    {escape(entry.target or '')}  {ok}")
        else:
            console.print(f"  [dim]■[/dim] {escape(entry.name)}")

    summary = f"\n  {report.symlinks} bridged, {report.local_dirs} local"
    if report.broken:
        summary += f", [red]{report.broken} broken[/red]"
    console.print(summary + "\n")


def render_sources(
    sources: Sequence[DetectedSource],
    prefixes: Sequence[Optional[str]],
    console: Console,
) -> None:
    """List detected remote installations with their inferred prefixes."""
    for i, (source, prefix) in enumerate(zip(sources, prefixes), start=1):
        console.print(f"    [cyan]{i}[/cyan]) {escape(str(source.projects_path))}")
        console.print(
            f"       [dim]{source.project_count} projects, "
            f"home: {escape(str(source.local_home))}[/dim]"
        )
        if prefix:
            console.print(f"       [dim]remote prefix: {escape(prefix)}[/dim]")
