"""Grammar for data declarations.

    declaration   := "data" identifier parameter* "=" constructor ("|" constructor)*
    parameter     := identifier | "(" identifier "::" type ")"
    constructor   := identifier ("{" field ("," field)* "}" | member*)
    member        := atom ("->" type)?
    field         := identifier "::" type
    type          := application ("->" type)?
    application   := identifier atom* | atom
    atom          := identifier | "(" ")" | "(" type ")" | "(" type ("," type)+ ")"

Whitespace separates tokens and is otherwise ignored. Juxtaposition binds
tighter than ``->``, which associates to the right. Once ``->`` has been
read a type must follow; there is no backtracking past the arrow.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from .combinators import (
    Parser,
    ParseFailure,
    Stream,
    alt,
    char,
    commit,
    eof,
    fail_at,
    lazy,
    located,
    many,
    optional,
    sat,
    sep_by,
    sep_by1,
    spaces,
    spaces1,
    string,
    succeed,
)
from .lexical import is_identifier_part, is_identifier_start
from .model import (
    UNIT,
    Constructor,
    Declaration,
    Fun,
    Member,
    Ref,
    Tuple,
    Type,
    TypeParameter,
)
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _symbol(s: str) -> Parser[str]:
    return spaces.then(string(s))


def _unique(
    items: tuple[tuple[T, Stream], ...],
    name_of: Callable[[T], str],
    expected: str,
) -> Parser[tuple[T, ...]]:
    """Reject a repeated name, pointing at the repetition. The rejection is final."""
    seen: set[str] = set()
    for item, start in items:
        name = name_of(item)
        if name in seen:
            return commit(fail_at(start, expected))
        seen.add(name)
    return succeed(tuple(item for item, _ in items))


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

identifier: Parser[str] = sat(is_identifier_start).chain(
    lambda first: many(sat(is_identifier_part)).map(lambda rest: first + "".join(rest))
).label("an identifier")


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _from_components(types: tuple[Type, ...]) -> Type:
    match types:
        case ():
            return UNIT
        case (single,):
            return single
        case _:
            return Tuple(types)


tuple_type: Parser[Type] = (
    char("(")
    .then(sep_by(spaces.then(lazy(lambda: type_expr)), _symbol(",")))
    .skip(_symbol(")"))
    .map(_from_components)
    .label("a tuple")
)

atom: Parser[Type] = alt(identifier.map(lambda name: Ref(name)), tuple_type)

application: Parser[Type] = alt(
    identifier.chain(lambda name: many(spaces.then(atom)).map(lambda args: Ref(name, args))),
    atom,
)

arrow: Parser[str] = _symbol("->")


def _codomain(domain: Type) -> Parser[Type]:
    return spaces.then(lazy(lambda: type_expr)).map(lambda codomain: Fun(domain, codomain))


def _function_tail(domain: Type) -> Parser[Type]:
    def after_arrow(found: str | None) -> Parser[Type]:
        if found is None:
            return succeed(domain)
        return commit(_codomain(domain)).label("a function type")

    return optional(arrow).chain(after_arrow)


type_expr: Parser[Type] = application.chain(_function_tail)

function_type: Parser[Type] = application.skip(arrow).chain(_codomain).label("a function type")


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

member: Parser[Member] = atom.chain(_function_tail).map(lambda t: Member(t))

field: Parser[Member] = identifier.skip(_symbol("::")).chain(
    lambda name: spaces.then(type_expr).map(lambda t: Member(t, name))
)

_fields: Parser[tuple[Member, ...]] = (
    char("{")
    .then(sep_by1(spaces.then(located(field)), _symbol(",")))
    .skip(_symbol("}"))
    .chain(lambda fields: _unique(fields, lambda m: m.name or "", "a unique field name"))
)

_record_constructor: Parser[Constructor] = identifier.chain(
    lambda name: spaces.then(_fields).map(lambda members: Constructor(name, members))
)

_positional_constructor: Parser[Constructor] = identifier.chain(
    lambda name: many(spaces.then(member)).map(lambda members: Constructor(name, members))
)

constructor: Parser[Constructor] = alt(_record_constructor, _positional_constructor).label(
    "a constructor"
)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

_constrained_parameter: Parser[TypeParameter] = (
    char("(")
    .then(spaces)
    .then(identifier)
    .skip(_symbol("::"))
    .chain(lambda name: spaces.then(type_expr).map(lambda t: TypeParameter(name, t)))
    .skip(_symbol(")"))
)

parameter: Parser[TypeParameter] = alt(
    identifier.map(lambda name: TypeParameter(name)),
    _constrained_parameter,
).label("a parameter")

_parameters: Parser[tuple[TypeParameter, ...]] = many(spaces.then(located(parameter))).chain(
    lambda params: _unique(params, lambda p: p.name, "a unique parameter name")
)

_constructors: Parser[tuple[Constructor, ...]] = sep_by1(
    spaces.then(located(constructor)), _symbol("|")
).chain(lambda ctors: _unique(ctors, lambda c: c.name, "a unique constructor name"))


def _declaration(name: str) -> Parser[Declaration]:
    return _parameters.skip(_symbol("=")).chain(
        lambda params: _constructors.map(lambda ctors: Declaration(name, params, ctors))
    )


declaration: Parser[Declaration] = (
    spaces.then(string("data"))
    .then(spaces1)
    .then(identifier)
    .chain(_declaration)
    .skip(spaces)
    .skip(eof)
    .label("a data declaration")
)


def parse(text: str) -> Result[Declaration, ParseFailure]:
    """Parse exactly one data declaration from ``text``."""
    result = declaration.run(text)
    match result:
        case Ok(decl):
            logger.debug(
                "Parsed %r: %d parameter(s), %d constructor(s)",
                decl.name,
                len(decl.parameters),
                len(decl.constructors),
            )
        case Err(failure):
            logger.debug("Parse failed: %s", failure.message)
    return result
