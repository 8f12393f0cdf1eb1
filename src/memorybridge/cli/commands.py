"""CLI commands for memorybridge.

This module implements all user-facing CLI commands: scan, link, unlink,
status, detect, wizard and version.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console for consistent, styled UX.
- Running without a command starts the interactive wizard.

Design:
- Typer app is instantiated at module level for reuse across commands.
- Annotated is used for CLI argument/option definitions to provide type safety
  and rich help text.
- ``--source`` and ``--map`` fall back to the bridge saved by the wizard (or
  MEMORYBRIDGE_BRIDGE_SOURCE / MEMORYBRIDGE_BRIDGE_MAP).
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from memorybridge.cli import renderer
from memorybridge.cli.console import ConsoleManager
from memorybridge.cli.wizard import default_prompter, run_wizard
from memorybridge.core.apply import apply_links, remove_links
from memorybridge.core.detect import DEFAULT_SEARCH_ROOTS, scan_for_sources
from memorybridge.core.discover import discover_mappings
from memorybridge.core.prefix import detect_remote_prefix
from memorybridge.core.status import inspect_status
from memorybridge.exceptions import (
    InvalidInputError,
    LinkOperationError,
    SourceNotFoundError,
)
from memorybridge.models.core import Mapping, PrefixMap
from memorybridge.utils.config import resolve_projects_dir, resolve_setting
from memorybridge.utils.debug import setup_logger
from memorybridge.utils.json import dumps

app = typer.Typer(
    name="memorybridge",
    help="Share Claude project memory across systems that see the same "
    "projects under different absolute paths.",
    add_completion=True,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


SOURCE = Annotated[
    Optional[Path],
    typer.Option(
        "--source",
        "-s",
        file_okay=False,
        dir_okay=True,
        help="Remote .claude/projects/ directory",
    ),
]

MAP = Annotated[
    Optional[str],
    typer.Option(
        "--map",
        "-m",
        help="Path prefix mapping REMOTE=LOCAL, e.g. '/home/user=/mnt/wsl2/home/user'",
    ),
]

ENCODED_REMOTE = Annotated[
    bool,
    typer.Option(
        "--encoded-remote",
        help="REMOTE in --map is already encoded (e.g. '-home-user'); use this "
        "when path segments contain '-'",
    ),
]

PROJECTS_DIR = Annotated[
    Optional[Path],
    typer.Option(
        "--projects-dir",
        file_okay=False,
        help="Local projects directory (default: ~/.claude/projects)",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]

DRY_RUN = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Show what would change without touching the filesystem",
    ),
]


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the MEMORYBRIDGE_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Run without a command for the interactive wizard."""
    if no_rich:
        os.environ["MEMORYBRIDGE_NO_RICH"] = "1"
    if ctx.invoked_subcommand is None:
        ctx.invoke(wizard)


def _fail(console: Console, message: str) -> typer.Exit:
    console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(ExitCode.ERROR)


def _resolve_bridge(
    console: Console,
    source: Optional[Path],
    map_spec: Optional[str],
    encoded_remote: bool,
) -> tuple[Path, PrefixMap]:
    """Resolve --source/--map against saved settings and parse the mapping."""
    source_value = resolve_setting(
        "bridge.source",
        default=None,
        cli_value=str(source) if source is not None else None,
    )
    if not source_value:
        raise _fail(console, "Missing --source")

    if map_spec is None:
        map_spec = resolve_setting("bridge.map", default=None)
        # A saved mapping carries its own encoding flag.
        if map_spec is not None and not encoded_remote:
            encoded_remote = resolve_setting("bridge.encoded_remote", default=False)
    if not map_spec:
        raise _fail(console, "Missing --map")

    try:
        prefix_map = PrefixMap.parse(map_spec, encoded_remote=encoded_remote)
    except InvalidInputError as e:
        raise _fail(console, f"--map requires format remote_prefix=local_prefix: {e}")
    return Path(source_value).expanduser(), prefix_map


def _discover(
    console: Console, source: Path, prefix_map: PrefixMap, target_root: Path
) -> list[Mapping]:
    try:
        return renderer.sort_mappings(
            discover_mappings(source, prefix_map, target_root)
        )
    except SourceNotFoundError as e:
        raise _fail(console, str(e))
    except OSError as e:
        raise _fail(console, f"Error: cannot read {source}: {e}")


@app.command()
def scan(
    source: SOURCE = None,
    map_spec: MAP = None,
    encoded_remote: ENCODED_REMOTE = False,
    projects_dir: PROJECTS_DIR = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Preview which projects would be linked (read-only)."""
    with ConsoleManager() as console:
        source_dir, prefix_map = _resolve_bridge(
            console, source, map_spec, encoded_remote
        )
        target_root = resolve_projects_dir(projects_dir)
        mappings = _discover(console, source_dir, prefix_map, target_root)

        if json_output:
            typer.echo(dumps([m.model_dump() for m in mappings]))
            return

        renderer.render_header("scan", console)
        console.print(f"  Source:  {source_dir}")
        console.print(f"  Map:     {prefix_map.remote} → {prefix_map.local}\n")
        renderer.render_mappings(mappings, console)
        if any(m.linkable for m in mappings):
            console.print("  Run [bold]link[/bold] to create symlinks.\n")


@app.command()
def link(
    source: SOURCE = None,
    map_spec: MAP = None,
    encoded_remote: ENCODED_REMOTE = False,
    projects_dir: PROJECTS_DIR = None,
    dry_run: DRY_RUN = False,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Create or repair symlinks for every mapped project."""
    with ConsoleManager() as console:
        source_dir, prefix_map = _resolve_bridge(
            console, source, map_spec, encoded_remote
        )
        target_root = resolve_projects_dir(projects_dir)
        mappings = _discover(console, source_dir, prefix_map, target_root)

        try:
            result = apply_links(mappings, target_root, dry_run=dry_run)
        except LinkOperationError as e:
            raise _fail(console, f"Error: {e}")
        except OSError as e:
            raise _fail(console, f"Error: cannot prepare {target_root}: {e}")

        if json_output:
            typer.echo(dumps(result.model_dump()))
            return
        renderer.render_header("link", console)
        renderer.render_link_outcome(mappings, result, console)


@app.command()
def unlink(
    source: SOURCE = None,
    map_spec: MAP = None,
    encoded_remote: ENCODED_REMOTE = False,
    projects_dir: PROJECTS_DIR = None,
    dry_run: DRY_RUN = False,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Remove the symlinks created for mapped projects."""
    with ConsoleManager() as console:
        source_dir, prefix_map = _resolve_bridge(
            console, source, map_spec, encoded_remote
        )
        target_root = resolve_projects_dir(projects_dir)
        mappings = _discover(console, source_dir, prefix_map, target_root)

        try:
            result = remove_links(mappings, dry_run=dry_run)
        except LinkOperationError as e:
            raise _fail(console, f"Error: {e}")

        if json_output:
            typer.echo(dumps(result.model_dump()))
            return
        renderer.render_header("unlink", console)
        renderer.render_unlink_outcome(mappings, result, console)


@app.command()
def status(
    projects_dir: PROJECTS_DIR = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Show current bridges in the local projects directory."""
    target_root = resolve_projects_dir(projects_dir)
    with ConsoleManager() as console:
        try:
            report = inspect_status(target_root)
        except OSError as e:
            raise _fail(console, f"Error: cannot read {target_root}: {e}")
        if json_output:
            typer.echo(dumps(report.model_dump()))
            return
        renderer.render_header("status", console)
        renderer.render_status(report, console)


@app.command()
def detect(
    projects_dir: PROJECTS_DIR = None,
    search_root: Annotated[
        Optional[list[str]],
        typer.Option(
            "--search-root",
            help="Mount root to scan (repeatable; default: /mnt /media /run/media /Volumes)",
        ),
    ] = None,
) -> None:
    """Look for remote Claude installations on mounted filesystems."""
    roots = search_root or list(DEFAULT_SEARCH_ROOTS)
    with ConsoleManager() as console:
        renderer.render_header("detect", console)
        sources = scan_for_sources(roots, exclude=resolve_projects_dir(projects_dir))
        if not sources:
            console.print("  [yellow]No remote installations found.[/yellow]\n")
            return
        renderer.render_sources(
            sources, [detect_remote_prefix(s.projects_path) for s in sources], console
        )
        console.print()


@app.command()
def wizard(
    projects_dir: PROJECTS_DIR = None,
    search_root: Annotated[
        Optional[list[str]],
        typer.Option("--search-root", help="Mount root to scan (repeatable)"),
    ] = None,
    answers: Annotated[
        Optional[Path],
        typer.Option(
            "--answers",
            exists=True,
            dir_okay=False,
            help="Read answers from a file instead of the terminal",
        ),
    ] = None,
    no_save: Annotated[
        bool,
        typer.Option("--no-save", help="Do not remember the chosen mapping"),
    ] = False,
) -> None:
    """Interactive setup: detect, preview and link."""
    roots = search_root or list(DEFAULT_SEARCH_ROOTS)
    target_root = resolve_projects_dir(projects_dir)
    with ConsoleManager() as console:
        with default_prompter(console, answers) as prompter:
            try:
                code = run_wizard(prompter, target_root, roots, remember=not no_save)
            except EOFError:
                console.print("\n  Cancelled.\n")
                code = ExitCode.ERROR
            except (InvalidInputError, SourceNotFoundError, LinkOperationError) as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                code = ExitCode.ERROR
    if code:
        raise typer.Exit(code)


@app.command()
def version() -> None:
    """Show the version of memorybridge."""
    from memorybridge.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"memorybridge version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    setup_logger()
    app()


if __name__ == "__main__":
    main()
