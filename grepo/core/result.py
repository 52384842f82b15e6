"""Ok / Err results for operations that can fail in expected ways.

Expected failures (a repo that is not a working tree, an unwritable config
file, a base directory that vanished) are values, not exceptions. Callers
branch with pattern matching:

    match add_watch(config, "api", git):
        case Ok(updated):
            store.save(updated)
        case Err(AlreadyWatched(repo=repo)):
            console.warning(f"{repo.name} is already watched")
        case Err(error):
            console.error(describe_error(error))

Exceptions stay reserved for bugs and interrupts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
E = TypeVar("E")
D = TypeVar("D")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: D) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises ValueError naming the error; only call after checking is_ok()."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: D) -> D:
        return default


Result = Union[Ok[T], Err[E]]
