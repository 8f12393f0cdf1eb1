"""Command-line interface for memorybridge.

- The Typer application lives in ``memorybridge.cli.commands``; the interactive
  wizard in ``memorybridge.cli.wizard``.
- Consoles are created per command by ``memorybridge.cli.console.ConsoleManager``.
"""

from rich.traceback import install

# Install rich traceback handler for all CLI commands
install(show_locals=True)
