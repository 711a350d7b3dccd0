"""Declaration model for algebraic data types.

A declaration such as

    data Tree A = Leaf | Node (Tree A) A (Tree A)

is represented as a ``Declaration`` holding its type parameters and an
ordered, non-empty tuple of ``Constructor``s. Each constructor holds
``Member``s, each member a ``Type``.

The model is produced once by the parser and only read afterwards. Every
node is a frozen dataclass, so equality is structural. Structural
invariants are checked on construction and raise ``ModelError``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class ModelError(ValueError):
    """A model node was built with an invalid structure."""


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ref:
    """A named type applied to zero or more arguments.

    Example: ``Tree A`` is Ref("Tree", (Ref("A"),))
    """

    name: str
    parameters: tuple[Type, ...] = ()


@dataclass(frozen=True)
class Tuple:
    """A tuple of two or more component types, e.g. ``(A, S)``."""

    types: tuple[Type, ...]

    def __post_init__(self) -> None:
        if len(self.types) < 2:
            raise ModelError(f"A tuple needs at least two components, got {len(self.types)}")


@dataclass(frozen=True)
class Fun:
    """A function type ``domain -> codomain``."""

    domain: Type
    codomain: Type


@dataclass(frozen=True)
class Unit:
    """The empty type, written ``()``."""


UNIT = Unit()

Type = Ref | Tuple | Fun | Unit


# ---------------------------------------------------------------------------
# Constructors and members
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Member:
    """One field of a constructor.

    A member without a name is positional; the generator names it after its
    position (``value0``, ``value1``, ...).
    """

    type: Type
    name: str | None = None

    @property
    def is_named(self) -> bool:
        return self.name is not None


@dataclass(frozen=True)
class Constructor:
    name: str
    members: tuple[Member, ...] = ()

    def __post_init__(self) -> None:
        named = [m.name for m in self.members if m.name is not None]
        if named and len(named) != len(self.members):
            raise ModelError(
                f"Constructor '{self.name}' mixes named and positional members"
            )
        duplicate = _first_duplicate(named)
        if duplicate is not None:
            raise ModelError(
                f"Constructor '{self.name}' declares field '{duplicate}' twice"
            )

    @property
    def is_nullary(self) -> bool:
        return len(self.members) == 0

    @property
    def is_record(self) -> bool:
        return bool(self.members) and all(m.is_named for m in self.members)


@dataclass(frozen=True)
class TypeParameter:
    """A type parameter, optionally bounded: ``(A :: string)``."""

    name: str
    constraint: Type | None = None


# ---------------------------------------------------------------------------
# Declaration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Declaration:
    name: str
    parameters: tuple[TypeParameter, ...]
    constructors: tuple[Constructor, ...]

    def __post_init__(self) -> None:
        if not self.constructors:
            raise ModelError(f"Declaration '{self.name}' has no constructors")
        duplicate = _first_duplicate(c.name for c in self.constructors)
        if duplicate is not None:
            raise ModelError(
                f"Declaration '{self.name}' declares constructor '{duplicate}' twice"
            )
        duplicate = _first_duplicate(p.name for p in self.parameters)
        if duplicate is not None:
            raise ModelError(
                f"Declaration '{self.name}' declares type parameter '{duplicate}' twice"
            )

    @property
    def is_sum(self) -> bool:
        return len(self.constructors) > 1

    @property
    def is_product(self) -> bool:
        return len(self.constructors) == 1

    @property
    def is_polymorphic(self) -> bool:
        return len(self.parameters) > 0

    @property
    def is_enum(self) -> bool:
        return all(c.is_nullary for c in self.constructors)

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    def is_recursive_member(self, member: Member) -> bool:
        """Direct self-reference only; mutual recursion is not detected."""
        return isinstance(member.type, Ref) and member.type.name == self.name

    @property
    def is_recursive(self) -> bool:
        return any(
            self.is_recursive_member(m) for c in self.constructors for m in c.members
        )


def _first_duplicate(names: Iterable[str]) -> str | None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            return name
        seen.add(name)
    return None
