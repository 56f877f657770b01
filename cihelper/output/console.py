"""Console output abstraction.

Commands print two kinds of output:
- values (a version string, a SHA) on stdout, unstyled, so CI scripts can
  capture them with ``$(ci-helper version)``;
- status lines, echoed commands and errors for the operator. Errors go to
  stderr.

``RichConsole`` is the production backend; ``MockConsole`` records output
for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    ERROR = auto()
    DIM = auto()


class ConsoleProtocol(Protocol):
    """Interface the commands and services print through."""

    def out(self, value: str) -> None:
        """Print a command's result value on stdout, verbatim."""
        ...

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a status message with optional styling."""
        ...

    def error(self, message: str) -> None:
        """Print an error message on stderr."""
        ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self) -> None:
        from rich.console import Console
        from rich.markup import escape

        self._escape = escape
        self._stdout = Console(highlight=False, soft_wrap=True)
        self._stderr = Console(stderr=True, highlight=False, soft_wrap=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.DIM: "dim",
        }

    def out(self, value: str) -> None:
        self._stdout.print(value, markup=False, emoji=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._stdout.print(message, style=rich_style, markup=False)
        else:
            self._stdout.print(message, markup=False)

    def error(self, message: str) -> None:
        self._stderr.print(f"[red bold]error:[/red bold] {self._escape(message)}")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style
    stderr: bool = False


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def out(self, value: str) -> None:
        self.outputs.append(OutputRecord(value, Style.DEFAULT))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR, stderr=True))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def stdout(self) -> list[str]:
        return [o.message for o in self.outputs if not o.stderr]

    @property
    def stderr(self) -> list[str]:
        return [o.message for o in self.outputs if o.stderr]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
