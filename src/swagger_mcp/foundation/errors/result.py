"""Ok/Err result variants for explicit error propagation.

Every fallible step of the dispatch pipeline returns ``Ok(value)`` or
``Err(error)`` instead of raising. Steps chain with ``map``/``flat_map``; the
operation boundary destructures the outcome with a ``match`` statement:

    >>> match Ok(2).map(lambda x: x * 10):
    ...     case Ok(value): print(value)
    ...     case Err(error): print("failed:", error)
    20
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True, repr=False)
class Ok(Generic[T]):
    """Success carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise RuntimeError(f"unwrap_err() on {self!r}")

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Feed the value into the next fallible step."""
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Err(Generic[E]):
    """Failure carrying ``error``. ``map``/``flat_map`` pass it through untouched."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise RuntimeError(f"unwrap() on {self!r}")

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[object], object]) -> Err[E]:
        return self

    def flat_map(self, f: Callable[[object], object]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
