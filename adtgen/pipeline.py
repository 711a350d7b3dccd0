"""The full pipeline: source text to TypeScript.

    parse(text) -> Declaration -> generate(declaration, options) -> render each
"""

from __future__ import annotations

from .codegen import generate
from .combinators import ParseFailure
from .grammar import parse
from .options import DEFAULT_OPTIONS, Options
from .printer import render
from .result import Result, map_ok
from .tsast import Fragment

FRAGMENT_SEPARATOR = "\n\n"


def compile_fragments(text: str, options: Options = DEFAULT_OPTIONS) -> Result[list[Fragment], ParseFailure]:
    return map_ok(parse(text), lambda declaration: generate(declaration, options))


def compile(text: str, options: Options = DEFAULT_OPTIONS) -> Result[str, ParseFailure]:
    """Parse ``text``, generate every fragment and join them with blank lines."""
    return map_ok(
        compile_fragments(text, options),
        lambda fragments: FRAGMENT_SEPARATOR.join(render(f) for f in fragments),
    )
