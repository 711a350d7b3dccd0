"""Render target syntax trees as TypeScript source.

Layout follows what the TypeScript compiler's own printer produces for
synthesized nodes: ordinary blocks and object literals stay on one line,
while type literals, ``switch`` bodies and multi-line blocks (used for
``if``) break onto new lines indented by four spaces.
"""

from __future__ import annotations

import json
from typing import assert_never

from .tsast import (
    ArrowFunction,
    BinaryExpr,
    Block,
    BooleanLiteral,
    Call,
    ConstDeclaration,
    Expr,
    Fragment,
    FunctionDeclaration,
    FunctionType,
    Identifier,
    If,
    ImportDeclaration,
    KeywordType,
    LiteralType,
    ObjectLiteral,
    Param,
    PropertyAccess,
    PropertyAssignment,
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

INDENT = "    "

_PRECEDENCE = {"||": 1, "&&": 2, "===": 3, "!==": 3}


def _pad(level: int) -> str:
    return INDENT * level


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def render_type(node: TypeNode, level: int = 0) -> str:
    if isinstance(node, TypeRef):
        if not node.args:
            return node.name
        return f"{node.name}<{', '.join(render_type(a, level) for a in node.args)}>"
    if isinstance(node, KeywordType):
        return node.keyword
    if isinstance(node, LiteralType):
        return _quote(node.value)
    if isinstance(node, TupleType):
        return f"[{', '.join(render_type(e, level) for e in node.elements)}]"
    if isinstance(node, FunctionType):
        return f"({_params(node.params, level)}) => {render_type(node.result, level)}"
    if isinstance(node, TypeLiteral):
        if not node.members:
            return "{}"
        lines = []
        for m in node.members:
            modifier = "readonly " if m.readonly else ""
            lines.append(f"{_pad(level + 1)}{modifier}{m.name}: {render_type(m.type, level + 1)};")
        return "{\n" + "\n".join(lines) + "\n" + _pad(level) + "}"
    if isinstance(node, UnionType):
        parts = []
        for t in node.types:
            text = render_type(t, level)
            parts.append(f"({text})" if isinstance(t, FunctionType) else text)
        return " | ".join(parts)
    assert_never(node)


def _type_params(params: tuple[TypeParam, ...], level: int) -> str:
    if not params:
        return ""
    rendered = [
        p.name if p.constraint is None else f"{p.name} extends {render_type(p.constraint, level)}"
        for p in params
    ]
    return f"<{', '.join(rendered)}>"


def _param(param: Param, level: int) -> str:
    if param.type is None:
        return param.name
    return f"{param.name}: {render_type(param.type, level)}"


def _params(params: tuple[Param, ...], level: int) -> str:
    return ", ".join(_param(p, level) for p in params)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


def _operand(node: Expr, parent: str, level: int) -> str:
    text = render_expr(node, level)
    if isinstance(node, BinaryExpr) and _PRECEDENCE[node.operator] < _PRECEDENCE[parent]:
        return f"({text})"
    return text


def _property(prop: PropertyAssignment, level: int) -> str:
    if prop.value is None:
        return prop.name
    return f"{prop.name}: {render_expr(prop.value, level)}"


def render_expr(node: Expr, level: int = 0) -> str:
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return _quote(node.value)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, PropertyAccess):
        return f"{render_expr(node.target, level)}.{node.name}"
    if isinstance(node, Call):
        args = ", ".join(render_expr(a, level) for a in node.args)
        return f"{render_expr(node.callee, level)}({args})"
    if isinstance(node, ObjectLiteral):
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(_property(p, level) for p in node.properties) + " }"
    if isinstance(node, ArrowFunction):
        if len(node.params) == 1 and node.params[0].type is None:
            params = node.params[0].name
        else:
            params = f"({_params(node.params, level)})"
        if isinstance(node.body, Block):
            body = _block(node.body, level)
        elif isinstance(node.body, ObjectLiteral):
            body = f"({render_expr(node.body, level)})"
        else:
            body = render_expr(node.body, level)
        return f"{params} => {body}"
    if isinstance(node, BinaryExpr):
        left = _operand(node.left, node.operator, level)
        right = _operand(node.right, node.operator, level)
        return f"{left} {node.operator} {right}"
    assert_never(node)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def _export(exported: bool) -> str:
    return "export " if exported else ""


def _block(block: Block, level: int) -> str:
    if block.multiline:
        lines = [_pad(level + 1) + render_stmt(s, level + 1) for s in block.statements]
        return "{\n" + "\n".join(lines) + "\n" + _pad(level) + "}"
    if not block.statements:
        return "{ }"
    return "{ " + " ".join(render_stmt(s, level) for s in block.statements) + " }"


def render_stmt(node: Stmt, level: int = 0) -> str:
    if isinstance(node, Return):
        return f"return {render_expr(node.value, level)};"
    if isinstance(node, Block):
        return _block(node, level)
    if isinstance(node, Switch):
        lines = []
        for clause in node.clauses:
            body = " ".join(render_stmt(s, level + 1) for s in clause.statements)
            lines.append(f"{_pad(level + 1)}case {render_expr(clause.test, level + 1)}: {body}")
        head = f"switch ({render_expr(node.subject, level)}) {{\n"
        return head + "\n".join(lines) + "\n" + _pad(level) + "}"
    if isinstance(node, If):
        return f"if ({render_expr(node.condition, level)}) {_block(node.then, level)}"
    if isinstance(node, ConstDeclaration):
        annotation = "" if node.type is None else f": {render_type(node.type, level)}"
        initializer = render_expr(node.initializer, level)
        return f"{_export(node.exported)}const {node.name}{annotation} = {initializer};"
    if isinstance(node, FunctionDeclaration):
        return (
            f"{_export(node.exported)}function {node.name}"
            f"{_type_params(node.type_params, level)}({_params(node.params, level)})"
            f": {render_type(node.return_type, level)} {_block(node.body, level)}"
        )
    if isinstance(node, TypeAliasDeclaration):
        return (
            f"{_export(node.exported)}type {node.name}{_type_params(node.type_params, level)}"
            f" = {render_type(node.type, level)};"
        )
    if isinstance(node, ImportDeclaration):
        return f"import {{ {', '.join(node.names)} }} from {_quote(node.module)};"
    assert_never(node)


def render_node(node: Stmt | Expr | TypeNode, level: int = 0) -> str:
    """Render a statement, expression or type node."""
    if isinstance(node, Stmt):
        return render_stmt(node, level)
    if isinstance(node, Expr):
        return render_expr(node, level)
    if isinstance(node, TypeNode):
        return render_type(node, level)
    assert_never(node)


def render(fragment: Fragment) -> str:
    """Render one generated fragment as a single top-level declaration."""
    return render_node(fragment.node)
