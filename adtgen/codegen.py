"""Generate TypeScript declarations for a data declaration.

``generate`` turns a ``Declaration`` into an ordered list of fragments:

1. the union (or record) type,
2. one smart constructor per constructor,
3. the fold eliminators (sum types only),
4. prism accessors, preceded by their import (sum types only, optional),
5. the ``Eq`` instance, preceded by its import (optional).

Generation is total: any declaration the model accepts yields valid output.
"""

from __future__ import annotations

import logging
from typing import assert_never

from .lexical import lower_first, safe_identifier, upper_first
from .model import Constructor, Declaration, Fun, Member, Ref, Tuple, Type, Unit
from .options import DEFAULT_OPTIONS, Options, PositionalHandlers, RecordHandlers
from .tsast import (
    NEVER,
    UNDEFINED,
    ArrowFunction,
    BinaryExpr,
    Block,
    BooleanLiteral,
    Call,
    CaseClause,
    ConstDeclaration,
    Expr,
    Fragment,
    FragmentKind,
    FunctionDeclaration,
    FunctionType,
    Identifier,
    If,
    ImportDeclaration,
    LiteralType,
    ObjectLiteral,
    Param,
    PropertyAccess,
    PropertyAssignment,
    PropertySignature,
    Return,
    Stmt,
    StringLiteral,
    Switch,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeNode,
    TypeParam,
    TypeRef,
    UnionType,
)

logger = logging.getLogger(__name__)

EQ_MODULE = "fp-ts/lib/Eq"
PRISM_MODULE = "monocle-ts"
EQ_FUNCTION_NAME = "getEq"
# Local binding through which a recursive Eq refers to itself.
SELF_EQ_NAME = "S"


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def member_name(member: Member, position: int) -> str:
    """Property name of a member: its field name, or ``value{position}``."""
    if member.name is not None:
        return member.name
    return f"value{position}"


def property_names(
    d: Declaration, c: Constructor, options: Options = DEFAULT_OPTIONS
) -> tuple[str, ...]:
    """Property names of the members of ``c``.

    On a sum type a member named like the discriminant would overwrite the
    tag, so it gets a trailing underscore (more if that name is taken too).
    """
    names = [member_name(m, i) for i, m in enumerate(c.members)]
    if not d.is_sum or options.tag_name not in names:
        return tuple(names)
    taken = {options.tag_name, *names}
    resolved = []
    for name in names:
        if name == options.tag_name:
            while name in taken:
                name += "_"
            taken.add(name)
        resolved.append(name)
    return tuple(resolved)


def constructor_value_name(c: Constructor) -> str:
    return safe_identifier(lower_first(c.name))


def handler_name(c: Constructor) -> str:
    return f"on{c.name}"


def type_names(t: Type) -> set[str]:
    """Every type name mentioned in ``t``."""
    if isinstance(t, Ref):
        return {t.name}.union(*(type_names(p) for p in t.parameters))
    if isinstance(t, Tuple):
        return set().union(*(type_names(e) for e in t.types))
    if isinstance(t, Fun):
        return type_names(t.domain) | type_names(t.codomain)
    if isinstance(t, Unit):
        return set()
    assert_never(t)


def return_type_param_name(d: Declaration) -> str:
    """``R``, or ``R1``, ``R2``, ... when ``R`` is already in scope.

    In scope are the declaration's own name, its type parameters and every
    type its members or parameter constraints mention.
    """
    taken = {d.name, *d.parameter_names}
    for p in d.parameters:
        if p.constraint is not None:
            taken |= type_names(p.constraint)
    for c in d.constructors:
        for m in c.members:
            taken |= type_names(m.type)
    candidate = "R"
    counter = 0
    while candidate in taken:
        counter += 1
        candidate = f"R{counter}"
    return candidate


def comparator_name(d: Declaration, c: Constructor, property_name: str) -> str:
    prefix = f"eq{c.name}" if d.is_sum else "eq"
    return prefix + upper_first(property_name)


def _domain_param_name(t: Type) -> str | None:
    if isinstance(t, Ref):
        return safe_identifier(lower_first(t.name))
    if isinstance(t, Tuple):
        return "tuple"
    if isinstance(t, Fun):
        return "f"
    if isinstance(t, Unit):
        return None
    assert_never(t)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def type_node(t: Type) -> TypeNode:
    if isinstance(t, Ref):
        return TypeRef(t.name, tuple(type_node(p) for p in t.parameters))
    if isinstance(t, Tuple):
        return TupleType(tuple(type_node(e) for e in t.types))
    if isinstance(t, Fun):
        name = _domain_param_name(t.domain)
        params = () if name is None else (Param(name, type_node(t.domain)),)
        return FunctionType(params, type_node(t.codomain))
    if isinstance(t, Unit):
        return UNDEFINED
    assert_never(t)


def _type_params(d: Declaration) -> tuple[TypeParam, ...]:
    return tuple(
        TypeParam(p.name, None if p.constraint is None else type_node(p.constraint))
        for p in d.parameters
    )


def _data_type(d: Declaration) -> TypeRef:
    return TypeRef(d.name, tuple(TypeRef(p.name) for p in d.parameters))


def _data_type_without_values(d: Declaration) -> TypeRef:
    """The declaration's type with every parameter at its bound (or ``never``)."""
    return TypeRef(
        d.name,
        tuple(NEVER if p.constraint is None else type_node(p.constraint) for p in d.parameters),
    )


def _member_params(d: Declaration, c: Constructor, options: Options) -> tuple[Param, ...]:
    return tuple(
        Param(safe_identifier(name), type_node(m.type))
        for name, m in zip(property_names(d, c, options), c.members)
    )


def _tag_property(c: Constructor, options: Options) -> PropertyAssignment:
    return PropertyAssignment(options.tag_name, StringLiteral(c.name))


# ---------------------------------------------------------------------------
# Data type
# ---------------------------------------------------------------------------


def data_fragment(d: Declaration, options: Options = DEFAULT_OPTIONS) -> Fragment:
    variants: list[TypeNode] = []
    for c in d.constructors:
        members = tuple(
            PropertySignature(name, type_node(m.type))
            for name, m in zip(property_names(d, c, options), c.members)
        )
        if d.is_sum:
            members = (PropertySignature(options.tag_name, LiteralType(c.name)), *members)
        variants.append(TypeLiteral(members))
    union = variants[0] if len(variants) == 1 else UnionType(tuple(variants))
    node = TypeAliasDeclaration(d.name, _type_params(d), union)
    return Fragment(FragmentKind.TYPE, d.name, node)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def _nullary_constructor(d: Declaration, c: Constructor, options: Options) -> Stmt:
    properties = (_tag_property(c, options),) if d.is_sum else ()
    return ConstDeclaration(
        constructor_value_name(c), _data_type_without_values(d), ObjectLiteral(properties)
    )


def _constructor_function(d: Declaration, c: Constructor, options: Options) -> Stmt:
    properties: list[PropertyAssignment] = [_tag_property(c, options)] if d.is_sum else []
    for name in property_names(d, c, options):
        param = safe_identifier(name)
        properties.append(PropertyAssignment(name, None if param == name else Identifier(param)))
    body = Block((Return(ObjectLiteral(tuple(properties))),))
    return FunctionDeclaration(
        constructor_value_name(c), _type_params(d), _member_params(d, c, options), _data_type(d), body
    )


def constructor_fragments(d: Declaration, options: Options = DEFAULT_OPTIONS) -> list[Fragment]:
    fragments = []
    for c in d.constructors:
        if c.is_nullary:
            node = _nullary_constructor(d, c, options)
        else:
            node = _constructor_function(d, c, options)
        fragments.append(Fragment(FragmentKind.CONSTRUCTOR, constructor_value_name(c), node))
    return fragments


# ---------------------------------------------------------------------------
# Fold
# ---------------------------------------------------------------------------


def _handler_type(
    d: Declaration, c: Constructor, result: TypeRef, eager: bool, options: Options
) -> TypeNode:
    if eager and c.is_nullary:
        return result
    return FunctionType(_member_params(d, c, options), result)


def _fold(d: Declaration, name: str, eager: bool, options: Options) -> FunctionDeclaration:
    result = TypeRef(return_type_param_name(d))
    matchee = Identifier(options.matchee_name)
    style = options.handler_style

    handlers: tuple[Param, ...]
    if isinstance(style, PositionalHandlers):
        handlers = tuple(
            Param(handler_name(c), _handler_type(d, c, result, eager, options))
            for c in d.constructors
        )
    elif isinstance(style, RecordHandlers):
        bundle = TypeLiteral(
            tuple(
                PropertySignature(handler_name(c), _handler_type(d, c, result, eager, options), readonly=False)
                for c in d.constructors
            )
        )
        handlers = (Param(style.handlers_name, bundle),)
    else:
        assert_never(style)

    clauses = []
    for c in d.constructors:
        handler: Expr = Identifier(handler_name(c))
        if isinstance(style, RecordHandlers):
            handler = PropertyAccess(Identifier(style.handlers_name), handler_name(c))
        if eager and c.is_nullary:
            value: Expr = handler
        else:
            args = tuple(PropertyAccess(matchee, name) for name in property_names(d, c, options))
            value = Call(handler, args)
        clauses.append(CaseClause(StringLiteral(c.name), (Return(value),)))

    body = Block((Switch(PropertyAccess(matchee, options.tag_name), tuple(clauses)),))
    return FunctionDeclaration(
        name,
        (*_type_params(d), TypeParam(result.name)),
        (Param(options.matchee_name, _data_type(d)), *handlers),
        result,
        body,
    )


def fold_fragments(d: Declaration, options: Options = DEFAULT_OPTIONS) -> list[Fragment]:
    """Eager and lazy folds when some constructor is nullary, else one fold."""
    if not d.is_sum:
        return []
    prefix = options.fold_prefix
    if any(c.is_nullary for c in d.constructors):
        folds = [
            _fold(d, prefix, True, options),
            _fold(d, f"{prefix}L", False, options),
        ]
    else:
        folds = [_fold(d, prefix, False, options)]
    return [Fragment(FragmentKind.FOLD, f.name, f) for f in folds]


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def _tag_test(subject: Expr, c: Constructor, options: Options) -> BinaryExpr:
    return BinaryExpr(PropertyAccess(subject, options.tag_name), "===", StringLiteral(c.name))


def accessor_fragments(d: Declaration, options: Options = DEFAULT_OPTIONS) -> list[Fragment]:
    if not d.is_sum:
        return []
    fragments = [
        Fragment(FragmentKind.IMPORT, PRISM_MODULE, ImportDeclaration(("Prism",), PRISM_MODULE))
    ]
    data_type = _data_type(d)
    prism_type = TypeRef("Prism", (data_type, data_type))
    matchee = options.matchee_name
    for c in d.constructors:
        name = f"_{lower_first(c.name)}"
        predicate = ArrowFunction((Param(matchee),), _tag_test(Identifier(matchee), c, options))
        prism = Call(PropertyAccess(Identifier("Prism"), "fromPredicate"), (predicate,))
        node: Stmt
        if d.is_polymorphic:
            node = FunctionDeclaration(name, _type_params(d), (), prism_type, Block((Return(prism),)))
        else:
            node = ConstDeclaration(name, prism_type, prism)
        fragments.append(Fragment(FragmentKind.ACCESSOR, name, node))
    return fragments


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def _comparators(d: Declaration, options: Options) -> tuple[Param, ...]:
    return tuple(
        Param(comparator_name(d, c, name), TypeRef("Eq", (type_node(m.type),)))
        for c in d.constructors
        for name, m in zip(property_names(d, c, options), c.members)
        if not d.is_recursive_member(m)
    )


def _members_equal(d: Declaration, c: Constructor, options: Options) -> Expr:
    x, y = Identifier("x"), Identifier("y")
    comparisons: list[Expr] = []
    for name, m in zip(property_names(d, c, options), c.members):
        eq_name = SELF_EQ_NAME if d.is_recursive_member(m) else comparator_name(d, c, name)
        comparisons.append(
            Call(
                PropertyAccess(Identifier(eq_name), "equals"),
                (PropertyAccess(x, name), PropertyAccess(y, name)),
            )
        )
    if not comparisons:
        return BooleanLiteral(True)
    result = comparisons[0]
    for comparison in comparisons[1:]:
        result = BinaryExpr(result, "&&", comparison)
    return result


def _equals_body(d: Declaration, options: Options) -> Expr | Block:
    x, y = Identifier("x"), Identifier("y")
    if d.is_enum:
        if d.is_sum:
            return BinaryExpr(PropertyAccess(x, options.tag_name), "===", PropertyAccess(y, options.tag_name))
        return BooleanLiteral(True)
    if not d.is_sum:
        return Block((Return(_members_equal(d, d.constructors[0], options)),))
    statements: list[Stmt] = [
        If(
            BinaryExpr(_tag_test(x, c, options), "&&", _tag_test(y, c, options)),
            Block((Return(_members_equal(d, c, options)),), multiline=True),
        )
        for c in d.constructors
    ]
    statements.append(Return(BooleanLiteral(False)))
    return Block(tuple(statements))


def equality_fragments(d: Declaration, options: Options = DEFAULT_OPTIONS) -> list[Fragment]:
    eq_type = TypeRef("Eq", (_data_type(d),))
    from_equals = Call(
        Identifier("fromEquals"),
        (ArrowFunction((Param("x"), Param("y")), _equals_body(d, options)),),
    )
    if d.is_recursive:
        body = Block(
            (
                ConstDeclaration(SELF_EQ_NAME, eq_type, from_equals, exported=False),
                Return(Identifier(SELF_EQ_NAME)),
            )
        )
    else:
        body = Block((Return(from_equals),))
    comparators = () if d.is_enum else _comparators(d, options)
    node = FunctionDeclaration(EQ_FUNCTION_NAME, _type_params(d), comparators, eq_type, body)
    return [
        Fragment(FragmentKind.IMPORT, EQ_MODULE, ImportDeclaration(("Eq", "fromEquals"), EQ_MODULE)),
        Fragment(FragmentKind.EQUALITY, EQ_FUNCTION_NAME, node),
    ]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def generate(d: Declaration, options: Options = DEFAULT_OPTIONS) -> list[Fragment]:
    fragments = [data_fragment(d, options)]
    fragments.extend(constructor_fragments(d, options))
    fragments.extend(fold_fragments(d, options))
    if options.emit_accessors:
        fragments.extend(accessor_fragments(d, options))
    if options.emit_equality:
        fragments.extend(equality_fragments(d, options))
    logger.debug(
        "Generated %d fragment(s) for %r: %s",
        len(fragments),
        d.name,
        ", ".join(f.kind.value for f in fragments),
    )
    return fragments
