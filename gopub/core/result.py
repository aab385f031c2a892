"""Result type for explicit error handling.

Every fallible step of a release (parsing a go.mod, cloning, tagging, pushing)
returns either ``Ok(value)`` or ``Err(error)`` instead of raising. Callers
branch on the variant with ``isinstance`` or pattern matching:

    match parse_descriptor(mod_file, version_override=None):
        case Ok(module):
            print(module.canonical_name)
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeGuard, TypeVar

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result wrapping ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the wrapped value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> None:
        """Raise, since an Ok carries no error.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap_err on Ok: {self.value}")

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result wrapping ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raise with the wrapped error.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        """Return the wrapped error."""
        return self.error

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Narrow a Result to Ok for static type checkers."""
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Narrow a Result to Err for static type checkers."""
    return isinstance(result, Err)
