"""Console output abstraction.

The workflow reports progress through ConsoleProtocol rather than printing
or logging directly. The CLI injects a RichConsole filtered by the configured
log level; tests inject a MockConsole and assert on what was reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "LogLevel",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class LogLevel(IntEnum):
    """Verbosity threshold, ordered from most to least verbose."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, name: str) -> LogLevel:
        """Parse a configured level name; unknown names fall back to INFO."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return cls.INFO


class ConsoleProtocol(Protocol):
    """Leveled, styled output sink."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def debug(self, message: str) -> None:
        """Diagnostic detail, shown only at DEBUG level."""
        ...

    def header(self, message: str) -> None:
        ...

    def newline(self) -> None:
        ...


# label, label color and stream of each leveled message kind
_TAGS: dict[Style, tuple[str, str, bool]] = {
    Style.SUCCESS: ("OK", "green", False),
    Style.INFO: ("info:", "cyan", False),
    Style.WARNING: ("warning:", "yellow", True),
    Style.ERROR: ("error:", "red bold", True),
    Style.DEBUG: ("debug:", "magenta", True),
}

_RICH_STYLES = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DEBUG: "magenta dim",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class RichConsole:
    """Console implementation using Rich.

    Messages below `level` are dropped; errors are always shown. Leveled
    messages other than info and success go to stderr so that stdout only
    carries what a command reports.
    """

    def __init__(self, level: LogLevel = LogLevel.INFO) -> None:
        from rich.console import Console

        self.level = level
        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)

    def _tagged(self, kind: Style, message: str, threshold: LogLevel) -> None:
        if self.level > threshold:
            return
        from rich.markup import escape

        label, color, to_stderr = _TAGS[kind]
        target = self._err if to_stderr else self._out
        target.print(
            f"[{color}]{label}[/{color}] {escape(message)}",
            style="dim" if kind is Style.DEBUG else None,
        )

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=_RICH_STYLES.get(style), markup=False)

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message, LogLevel.INFO)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message, LogLevel.ERROR)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message, LogLevel.WARN)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message, LogLevel.INFO)

    def debug(self, message: str) -> None:
        self._tagged(Style.DEBUG, message, LogLevel.DEBUG)

    def header(self, message: str) -> None:
        self._out.line()
        self._out.print(message, style=_RICH_STYLES[Style.HEADER], markup=False)

    def newline(self) -> None:
        self._out.line()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Debug records are always captured, regardless of level.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
