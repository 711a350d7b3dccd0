"""Target syntax tree: the subset of TypeScript the generator emits.

The generator builds these nodes instead of strings; ``printer`` turns them
into text. Each category is a closed union so dispatch over it can end in
``assert_never``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Type nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeRef:
    """``Name`` or ``Name<Arg, ...>``."""

    name: str
    args: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class KeywordType:
    """A built-in type keyword such as ``never`` or ``undefined``."""

    keyword: str


NEVER = KeywordType("never")
UNDEFINED = KeywordType("undefined")


@dataclass(frozen=True)
class LiteralType:
    """A string literal type, e.g. ``"Some"``."""

    value: str


@dataclass(frozen=True)
class TupleType:
    elements: tuple[TypeNode, ...]


@dataclass(frozen=True)
class Param:
    """A function parameter; ``type`` is omitted for arrow-function parameters."""

    name: str
    type: TypeNode | None = None


@dataclass(frozen=True)
class FunctionType:
    params: tuple[Param, ...]
    result: TypeNode


@dataclass(frozen=True)
class PropertySignature:
    name: str
    type: TypeNode
    readonly: bool = True


@dataclass(frozen=True)
class TypeLiteral:
    members: tuple[PropertySignature, ...]


@dataclass(frozen=True)
class UnionType:
    types: tuple[TypeNode, ...]


TypeNode = TypeRef | KeywordType | LiteralType | TupleType | FunctionType | TypeLiteral | UnionType


@dataclass(frozen=True)
class TypeParam:
    """``A`` or ``A extends Constraint``."""

    name: str
    constraint: TypeNode | None = None


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class PropertyAccess:
    target: Expr
    name: str


@dataclass(frozen=True)
class Call:
    callee: Expr
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class PropertyAssignment:
    """``name: value``; printed as shorthand ``name`` when value is None."""

    name: str
    value: Expr | None = None


@dataclass(frozen=True)
class ObjectLiteral:
    properties: tuple[PropertyAssignment, ...]


@dataclass(frozen=True)
class ArrowFunction:
    params: tuple[Param, ...]
    body: Expr | Block


@dataclass(frozen=True)
class BinaryExpr:
    left: Expr
    operator: str
    right: Expr


Expr = (
    Identifier
    | StringLiteral
    | BooleanLiteral
    | PropertyAccess
    | Call
    | ObjectLiteral
    | ArrowFunction
    | BinaryExpr
)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Return:
    value: Expr


@dataclass(frozen=True)
class Block:
    statements: tuple[Stmt, ...]
    multiline: bool = False


@dataclass(frozen=True)
class CaseClause:
    test: Expr
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class Switch:
    subject: Expr
    clauses: tuple[CaseClause, ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then: Block


@dataclass(frozen=True)
class ConstDeclaration:
    name: str
    type: TypeNode | None
    initializer: Expr
    exported: bool = True


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    type_params: tuple[TypeParam, ...]
    params: tuple[Param, ...]
    return_type: TypeNode
    body: Block
    exported: bool = True


@dataclass(frozen=True)
class TypeAliasDeclaration:
    name: str
    type_params: tuple[TypeParam, ...]
    type: TypeNode
    exported: bool = True


@dataclass(frozen=True)
class ImportDeclaration:
    """``import { a, b } from "module";``"""

    names: tuple[str, ...]
    module: str


Stmt = (
    Return
    | Block
    | Switch
    | If
    | ConstDeclaration
    | FunctionDeclaration
    | TypeAliasDeclaration
    | ImportDeclaration
)


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


class FragmentKind(Enum):
    TYPE = "type"
    CONSTRUCTOR = "constructor"
    FOLD = "fold"
    IMPORT = "import"
    ACCESSOR = "accessor"
    EQUALITY = "equality"


@dataclass(frozen=True)
class Fragment:
    """One top-level declaration of generated output."""

    kind: FragmentKind
    name: str
    node: Stmt
