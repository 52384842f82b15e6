"""Console output abstraction.

Services never print directly; they talk to a ``ConsoleProtocol``. The CLI
passes a ``RichConsole``, tests pass a ``MockConsole`` and inspect what was
said. Reports on stdout stay pipeable because errors and warnings go to
stderr.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Plain-text prefix for each leveled message.
_PREFIX = {
    Style.SUCCESS: "OK ",
    Style.ERROR: "error: ",
    Style.WARNING: "warning: ",
    Style.INFO: "info: ",
}

_RICH_STYLE = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    """Styled, leveled output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Terminal console backed by rich.

    Args:
        quiet: Drop success and info lines; errors, warnings and reports
            are still shown.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        # Deferred so `grepo --version` does not pay for importing rich.
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._quiet = quiet

    @property
    def rich(self) -> Console:
        """The stdout console, for rendering tables."""
        return self._out

    def _leveled(self, style: Style, message: str, *, to_stderr: bool = False) -> None:
        prefix = _PREFIX[style].rstrip()
        target = self._err if to_stderr else self._out
        target.print(f"[{_RICH_STYLE[style]}]{prefix}[/] {message}")

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=_RICH_STYLE[style] or None)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._leveled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._leveled(Style.ERROR, message, to_stderr=True)

    def warning(self, message: str) -> None:
        self._leveled(Style.WARNING, message, to_stderr=True)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._leveled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._out.print()
        self._out.print(message, style=_RICH_STYLE[Style.HEADER])

    def newline(self) -> None:
        self._out.print()


@dataclass
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records every line instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list[OutputRecord])

    def _record(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(_PREFIX.get(style, "") + message, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def header(self, message: str) -> None:
        self._record(Style.HEADER, message)

    def newline(self) -> None:
        self.print("")

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has(self, style: Style) -> bool:
        return any(o.style == style for o in self.outputs)

    def has_error(self) -> bool:
        return self.has(Style.ERROR)

    def has_warning(self) -> bool:
        return self.has(Style.WARNING)

    def has_success(self) -> bool:
        return self.has(Style.SUCCESS)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
