"""adtgen: generate TypeScript boilerplate for algebraic data types."""

from .model import (
    UNIT,
    Constructor,
    Declaration,
    Fun,
    Member,
    ModelError,
    Ref,
    Tuple,
    Type,
    TypeParameter,
    Unit,
)
from .combinators import ParseFailure
from .grammar import parse
from .options import (
    DEFAULT_OPTIONS,
    HandlerStyle,
    Options,
    PositionalHandlers,
    RecordHandlers,
)
from .tsast import Fragment, FragmentKind
from .codegen import generate
from .printer import render
from .pipeline import compile, compile_fragments
from .result import Ok, Err, Result

__version__ = "0.1.0"

__all__ = [
    # Model
    "UNIT", "Constructor", "Declaration", "Fun", "Member", "ModelError",
    "Ref", "Tuple", "Type", "TypeParameter", "Unit",
    # Parsing
    "ParseFailure", "parse",
    # Options
    "DEFAULT_OPTIONS", "HandlerStyle", "Options", "PositionalHandlers", "RecordHandlers",
    # Generation
    "Fragment", "FragmentKind", "generate", "render", "compile", "compile_fragments",
    # Result
    "Ok", "Err", "Result",
]
