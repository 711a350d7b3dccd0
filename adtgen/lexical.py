"""Lexical primitives shared by the grammar and the generator.

Identifiers in the source grammar are letters, digits, ``_`` and ``$``, not
starting with a digit. Any other character ends an identifier, so every name
the parser accepts is also a valid TypeScript identifier.
"""

from __future__ import annotations

IDENTIFIER_SYMBOLS = frozenset("_$")

# Words that cannot name a TypeScript value (parameters, functions, consts).
RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "function", "if", "import", "in",
        "instanceof", "new", "null", "return", "super", "switch", "this",
        "throw", "true", "try", "typeof", "var", "void", "while", "with",
        "implements", "interface", "let", "package", "private", "protected",
        "public", "static", "yield", "await",
    }
)


def is_identifier_start(c: str) -> bool:
    return c.isalpha() or c in IDENTIFIER_SYMBOLS


def is_identifier_part(c: str) -> bool:
    return is_identifier_start(c) or c.isdecimal()


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def safe_identifier(name: str) -> str:
    """Escape a reserved word so it can be used as a value-level name.

    >>> safe_identifier("default")
    'default_'
    >>> safe_identifier("value0")
    'value0'
    """
    if name in RESERVED_WORDS:
        return name + "_"
    return name
