"""Result type for the fallible seams of the pipeline.

Parsing and configuration loading return ``Ok`` or ``Err`` instead of
raising, so failures travel as data and callers ``match`` on them.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


type Result[T, E] = Ok[T] | Err[E]


def map_ok(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:
    """Apply ``f`` to the value of an ``Ok``; pass an ``Err`` through."""
    match result:
        case Ok(value):
            return Ok(f(value))
        case Err():
            return result
