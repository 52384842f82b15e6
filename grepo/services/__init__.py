"""Operations exposed to the CLI."""

from .inspect import InspectService
from .watch import WatchChange, WatchService

__all__ = [
    "InspectService",
    "WatchChange",
    "WatchService",
]
