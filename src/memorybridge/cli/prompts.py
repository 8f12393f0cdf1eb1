"""Interactive prompting for the setup wizard.

All wizard input goes through a :class:`Prompter`, which binds a Rich console
for output and an input stream for answers. Questions are asked with
``rich.prompt`` (``Prompt`` for text and numbered choices, ``Confirm`` for
yes/no), so invalid answers are re-asked by Rich itself. An exhausted answer
stream raises ``EOFError`` instead of re-asking forever.

The prompter is a context manager: a stream it opened itself is closed on every
exit path, including errors.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import IO, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.text import TextType


def _read_answer(
    console: Console, prompt: TextType, password: bool, stream: Optional[IO[str]]
) -> str:
    answer = console.input(prompt, password=password, stream=stream)
    if stream is not None and answer == "":
        raise EOFError("No more input")
    return answer.strip()


class _TextPrompt(Prompt):
    @classmethod
    def get_input(cls, console, prompt, password, stream=None) -> str:  # type: ignore[override]
        return _read_answer(console, prompt, password, stream)


class _YesNoPrompt(Confirm):
    @classmethod
    def get_input(cls, console, prompt, password, stream=None) -> str:  # type: ignore[override]
        return _read_answer(console, prompt, password, stream)


class Prompter(AbstractContextManager):
    """Ask questions on *console* and read answers from *stream*.

    Args:
        console: Console used to render prompts.
        stream: Input stream; None reads from standard input.
        owns_stream: Close *stream* when the prompter is closed.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        stream: Optional[IO[str]] = None,
        *,
        owns_stream: bool = False,
    ) -> None:
        self.console = console or Console()
        self.stream = stream
        self._owns_stream = owns_stream
        self.closed = False

    def ask(self, question: str) -> str:
        """Ask a free-text question and return the stripped answer.

        Raises:
            EOFError: If the input stream is exhausted.
        """
        return _TextPrompt.ask(question, console=self.console, stream=self.stream)

    def confirm(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question; an empty answer returns *default*."""
        return _YesNoPrompt.ask(
            question, console=self.console, stream=self.stream, default=default
        )

    def choose(self, question: str, options: Sequence[str]) -> int:
        """Show numbered *options* and return the zero-based index chosen."""
        self.console.print(f"\n  [bold]{question}[/bold]\n")
        for i, option in enumerate(options, start=1):
            self.console.print(f"    [cyan]{i}[/cyan]) {option}")
        self.console.print()
        choice = _TextPrompt.ask(
            "  Choice",
            choices=[str(i) for i in range(1, len(options) + 1)],
            console=self.console,
            stream=self.stream,
        )
        return int(choice) - 1

    def close(self) -> None:
        """Release the input stream if this prompter owns it."""
        if self.closed:
            return
        if self._owns_stream and self.stream is not None:
            self.stream.close()
        self.closed = True

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        self.close()
        return False
