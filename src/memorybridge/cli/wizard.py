"""Interactive setup wizard.

Walks the user from nothing to a working bridge:

1. show the local projects directory,
2. look for remote installations on mounted filesystems,
3. pick one (or type a path) and infer the remote prefix,
4. preview the mappings, confirm, and link,
5. remember the mapping so later runs need no flags.

The inferred prefix is used in its encoded form, so project paths containing
``-`` never go through the lossy decode step.
"""

import os
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape

from memorybridge.cli import renderer
from memorybridge.cli.prompts import Prompter
from memorybridge.core.apply import apply_links
from memorybridge.core.codec import decode_prefix
from memorybridge.core.detect import DEFAULT_SEARCH_ROOTS, scan_for_sources
from memorybridge.core.discover import discover_mappings
from memorybridge.core.prefix import detect_remote_prefix
from memorybridge.models.core import DetectedSource, PrefixMap
from memorybridge.utils.config import save_bridge

REMOTE_PROMPT = "  Enter remote path prefix (e.g. /home/user)"
SOURCE_PROMPT = "  Enter path to remote .claude/projects/"


def _custom_source(path_text: str) -> DetectedSource:
    projects = Path(path_text).expanduser().absolute()
    home = Path(os.path.abspath(os.path.join(projects, "..", "..")))
    count = len(list(projects.iterdir())) if projects.is_dir() else 0
    return DetectedSource(projects_path=projects, local_home=home, project_count=count)


def _select_source(
    prompter: Prompter, detected: Sequence[DetectedSource]
) -> DetectedSource:
    console = prompter.console
    if len(detected) == 1:
        console.print()
        path = escape(str(detected[0].projects_path))
        if prompter.confirm(f"  Use [bold]{path}[/bold]?"):
            return detected[0]
        return _custom_source(prompter.ask(SOURCE_PROMPT))

    options = [
        f"{escape(str(d.projects_path))} [dim]({d.project_count} projects)[/dim]"
        for d in detected
    ]
    options.append("Enter a custom path")
    choice = prompter.choose("Which remote installation?", options)
    if choice == len(detected):
        return _custom_source(prompter.ask(SOURCE_PROMPT))
    return detected[choice]


def _select_prefix_map(
    prompter: Prompter, source: Path, local_prefix: str
) -> PrefixMap:
    console = prompter.console
    auto_prefix = detect_remote_prefix(source)
    if auto_prefix is None:
        console.print("\n  [yellow]![/yellow] Could not auto-detect remote prefix.")
        return PrefixMap.from_paths(prompter.ask(REMOTE_PROMPT), local_prefix)

    candidate = PrefixMap.from_encoded_remote(auto_prefix, local_prefix)
    console.print("\n  [green]✓[/green] Detected path mapping:")
    console.print(f"    Remote encoded prefix: [bold]{escape(auto_prefix)}[/bold]")
    console.print(
        f"    Remote path (guess):   [bold]{escape(decode_prefix(auto_prefix))}[/bold]"
    )
    console.print(f"    Local mount path:      [bold]{escape(local_prefix)}[/bold]")
    console.print(
        f"    Local encoded prefix:  [bold]{escape(candidate.local_encoded)}[/bold]"
    )
    if prompter.confirm("\n  Use this mapping?"):
        return candidate
    return PrefixMap.from_paths(prompter.ask(REMOTE_PROMPT), local_prefix)


def run_wizard(
    prompter: Prompter,
    target_root: Path,
    search_roots: Sequence[str] = DEFAULT_SEARCH_ROOTS,
    *,
    remember: bool = True,
) -> int:
    """Run the interactive setup and return a process exit code.

    Args:
        prompter: Source of answers and sink for output.
        target_root: Local projects directory.
        search_roots: Mount roots scanned for remote installations.
        remember: Save the chosen mapping to the config file.

    Raises:
        SourceNotFoundError: If the chosen source disappears before discovery.
        LinkOperationError: If a link cannot be created.
    """
    console = prompter.console
    console.print(
        "\n  [bold magenta]memorybridge[/bold magenta][bold] interactive setup[/bold]\n"
    )

    if target_root.is_dir():
        count = len(list(target_root.iterdir()))
        console.print(
            f"  [green]✓[/green] Local Claude projects: {escape(str(target_root))} "
            f"[dim]({count} projects)[/dim]"
        )
    else:
        console.print("  [dim]No local projects directory yet (will be created)[/dim]")

    console.print("\n  Scanning mounted filesystems for remote Claude installations...")
    with console.status("[cyan]Scanning...", spinner="dots"):
        detected = scan_for_sources(search_roots, exclude=target_root)

    if detected:
        console.print(
            f"  [green]✓[/green] Found {len(detected)} remote installation(s):\n"
        )
        renderer.render_sources(
            detected, [detect_remote_prefix(d.projects_path) for d in detected], console
        )
        selected = _select_source(prompter, detected)
    else:
        console.print("  [yellow]![/yellow] No remote installations found automatically.\n")
        selected = _custom_source(prompter.ask(SOURCE_PROMPT))
        if selected.projects_path.is_dir():
            console.print(
                f"  [dim]Inferred local mount: {escape(str(selected.local_home))}[/dim]"
            )

    source = selected.projects_path
    if not source.is_dir():
        console.print(f"  [red]Path does not exist: {escape(str(source))}[/red]")
        return 1

    prefix_map = _select_prefix_map(prompter, source, str(selected.local_home))

    console.print("\n  Discovering projects...\n")
    mappings = renderer.sort_mappings(discover_mappings(source, prefix_map, target_root))
    renderer.render_mappings(mappings, console, prefix_map)

    linkable = len([m for m in mappings if m.linkable])
    if linkable == 0:
        console.print("  Nothing to do: all projects are already bridged!\n")
        return 0

    if not prompter.confirm(f"  Create [bold]{linkable}[/bold] symlink(s)?"):
        console.print("\n  Cancelled.\n")
        return 0

    result = apply_links(mappings, target_root)
    console.print(
        f"\n  [green]✓[/green] [bold]Done:[/bold] {result.created} created, "
        f"{result.updated} updated, {result.skipped} skipped"
    )

    if remember:
        save_bridge(str(source), prefix_map.spec, prefix_map.remote_is_encoded)
    console.print(_next_time_hint(source, prefix_map, remember))
    return 0


def _next_time_hint(source: Path, prefix_map: PrefixMap, remember: bool) -> str:
    command = f"memorybridge link --source '{source}' --map '{prefix_map.spec}'"
    if prefix_map.remote_is_encoded:
        command += " --encoded-remote"
    lines = ["\n  [dim]Next time, run non-interactively:[/dim]"]
    lines.append(f"  [dim]{escape(command)}[/dim]")
    if remember:
        lines.append("  [dim](saved: `memorybridge link` alone now reuses it)[/dim]")
    return "\n".join(lines) + "\n"


def default_prompter(console, stream_path: Optional[Path] = None) -> Prompter:
    """Build the wizard's prompter, reading answers from *stream_path* if given."""
    if stream_path is None:
        return Prompter(console=console)
    return Prompter(
        console=console, stream=stream_path.open("r", encoding="utf-8"), owns_stream=True
    )
