"""User-facing output: the console abstraction and error presentation."""

from .console import ConsoleProtocol, MockConsole, OutputRecord, RichConsole, Style
from .errors import GrepoError, describe_error, error_exit_code, print_error

__all__ = [
    "ConsoleProtocol",
    "GrepoError",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
    "describe_error",
    "error_exit_code",
    "print_error",
]
