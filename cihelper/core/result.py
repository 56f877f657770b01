"""Result type for explicit error handling.

Every fallible step of the helper (git queries, toolchain invocations,
downloads) returns either ``Ok(value)`` or ``Err(error)`` instead of raising.
Callers branch on the variant and stop at the first ``Err``.

Usage:
    match repo.revision():
        case Ok(sha):
            console.out(sha)
        case Err(error):
            print_error(error, console)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """No value to transform; returns ``self``."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
