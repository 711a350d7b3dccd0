"""Parser combinators over an immutable character stream.

A parser is a function from a ``Stream`` to either ``Ok((value, rest))`` or
``Err(ParseFailure)``. Streams are never mutated, so trying an alternative
simply means calling the next parser with the same stream.

Failure reporting follows these rules:

- ``label`` replaces the expected-label of a failure but keeps the position
  where the failure actually happened, so wrapping parsers in labels reports
  the outermost construct under attempt together with the exact unparsed
  suffix of the input.
- ``alt`` keeps the failure that got furthest when every alternative fails.
  Repetition discards the failure that ends it.
- A failure raised under ``commit`` is final: neither ``alt`` nor
  repetition recovers from it.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

from .result import Err, Ok, Result

A = TypeVar("A")
B = TypeVar("B")


# ---------------------------------------------------------------------------
# Stream and failure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Stream:
    """A position inside the source text."""

    text: str
    pos: int = 0

    @property
    def remaining(self) -> str:
        return self.text[self.pos:]

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str | None:
        if self.at_end:
            return None
        return self.text[self.pos]

    def advance(self, n: int = 1) -> Stream:
        return Stream(self.text, self.pos + n)


@dataclass(frozen=True)
class ParseFailure:
    """The only error the core reports.

    ``expected`` names the construct being parsed ("a data declaration"),
    ``remaining`` is the input left unconsumed where parsing stopped.
    """

    expected: str
    remaining: str
    committed: bool = field(default=False, compare=False, repr=False)

    @property
    def message(self) -> str:
        return f"Expected {self.expected}, cannot parse {json.dumps(self.remaining, ensure_ascii=False)}"

    def __str__(self) -> str:
        return self.message


type Reply[T] = Ok[tuple[T, Stream]] | Err[ParseFailure]


def _further(a: ParseFailure, b: ParseFailure) -> ParseFailure:
    # Less remaining input means the failure happened later; ties go to b.
    return a if len(a.remaining) < len(b.remaining) else b


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class Parser(Generic[A]):
    def __init__(self, fn: Callable[[Stream], Reply[A]]) -> None:
        self._fn = fn

    def __call__(self, stream: Stream) -> Reply[A]:
        return self._fn(stream)

    def run(self, text: str) -> Result[A, ParseFailure]:
        """Parse a prefix of ``text``; trailing input is left alone."""
        match self(Stream(text)):
            case Ok((value, _)):
                return Ok(value)
            case Err(failure):
                return Err(failure)

    def map(self, f: Callable[[A], B]) -> Parser[B]:
        def parse(stream: Stream) -> Reply[B]:
            match self(stream):
                case Ok((value, rest)):
                    return Ok((f(value), rest))
                case Err() as err:
                    return err

        return Parser(parse)

    def chain(self, f: Callable[[A], Parser[B]]) -> Parser[B]:
        def parse(stream: Stream) -> Reply[B]:
            match self(stream):
                case Ok((value, rest)):
                    return f(value)(rest)
                case Err() as err:
                    return err

        return Parser(parse)

    def then(self, other: Parser[B]) -> Parser[B]:
        """Sequence, keeping the right-hand value."""
        return self.chain(lambda _: other)

    def skip(self, other: Parser[B]) -> Parser[A]:
        """Sequence, keeping the left-hand value."""
        return self.chain(lambda value: other.map(lambda _: value))

    def alt(self, *others: Parser[A]) -> Parser[A]:
        return alt(self, *others)

    def label(self, expected: str) -> Parser[A]:
        return label(self, expected)


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def succeed(value: A) -> Parser[A]:
    return Parser(lambda stream: Ok((value, stream)))


def fail(expected: str) -> Parser[A]:
    return Parser(lambda stream: Err(ParseFailure(expected, stream.remaining)))


def sat(predicate: Callable[[str], bool], expected: str = "a character") -> Parser[str]:
    def parse(stream: Stream) -> Reply[str]:
        c = stream.peek()
        if c is not None and predicate(c):
            return Ok((c, stream.advance()))
        return Err(ParseFailure(expected, stream.remaining))

    return Parser(parse)


def char(c: str) -> Parser[str]:
    return sat(lambda x: x == c, json.dumps(c))


def string(s: str) -> Parser[str]:
    def parse(stream: Stream) -> Reply[str]:
        if stream.text.startswith(s, stream.pos):
            return Ok((s, stream.advance(len(s))))
        return Err(ParseFailure(json.dumps(s), stream.remaining))

    return Parser(parse)


def _take_while(predicate: Callable[[str], bool], minimum: int, expected: str) -> Parser[str]:
    def parse(stream: Stream) -> Reply[str]:
        end = stream.pos
        while end < len(stream.text) and predicate(stream.text[end]):
            end += 1
        if end - stream.pos < minimum:
            return Err(ParseFailure(expected, stream.remaining))
        return Ok((stream.text[stream.pos:end], Stream(stream.text, end)))

    return Parser(parse)


spaces: Parser[str] = _take_while(str.isspace, 0, "whitespace")
spaces1: Parser[str] = _take_while(str.isspace, 1, "whitespace")


def _eof(stream: Stream) -> Reply[None]:
    if stream.at_end:
        return Ok((None, stream))
    return Err(ParseFailure("end of input", stream.remaining))


eof: Parser[None] = Parser(_eof)


def lazy(thunk: Callable[[], Parser[A]]) -> Parser[A]:
    """Defer building a parser until it runs, for recursive grammars."""
    return Parser(lambda stream: thunk()(stream))


def located(p: Parser[A]) -> Parser[tuple[A, Stream]]:
    """Pair the parsed value with the stream it started from."""
    return Parser(lambda stream: p.map(lambda value: (value, stream))(stream))


# ---------------------------------------------------------------------------
# Choice and labels
# ---------------------------------------------------------------------------


def alt(*parsers: Parser[A]) -> Parser[A]:
    if not parsers:
        raise ValueError("alt() needs at least one parser")

    def parse(stream: Stream) -> Reply[A]:
        failure: ParseFailure | None = None
        for p in parsers:
            match p(stream):
                case Ok() as ok:
                    return ok
                case Err(error) if error.committed:
                    return Err(error)
                case Err(error):
                    failure = error if failure is None else _further(failure, error)
        assert failure is not None
        return Err(failure)

    return Parser(parse)


def optional(p: Parser[A]) -> Parser[A | None]:
    return alt(p, succeed(None))


def commit(p: Parser[A]) -> Parser[A]:
    """Make any failure of ``p`` final."""

    def parse(stream: Stream) -> Reply[A]:
        match p(stream):
            case Err(error) if not error.committed:
                return Err(replace(error, committed=True))
            case reply:
                return reply

    return Parser(parse)


def fail_at(stream: Stream, expected: str) -> Parser[A]:
    """Fail, reporting ``stream`` rather than the current position."""
    return Parser(lambda _: Err(ParseFailure(expected, stream.remaining)))


def label(p: Parser[A], expected: str) -> Parser[A]:
    def parse(stream: Stream) -> Reply[A]:
        match p(stream):
            case Err(error):
                return Err(replace(error, expected=expected))
            case reply:
                return reply

    return Parser(parse)


# ---------------------------------------------------------------------------
# Repetition
# ---------------------------------------------------------------------------


def many(p: Parser[A]) -> Parser[tuple[A, ...]]:
    """Zero or more ``p``. Items that consume no input end the repetition."""

    def parse(stream: Stream) -> Reply[tuple[A, ...]]:
        values: list[A] = []
        while True:
            match p(stream):
                case Ok((value, rest)) if rest.pos > stream.pos:
                    values.append(value)
                    stream = rest
                case Err(error) if error.committed:
                    return Err(error)
                case _:
                    return Ok((tuple(values), stream))

    return Parser(parse)


def many1(p: Parser[A]) -> Parser[tuple[A, ...]]:
    return p.chain(lambda first: many(p).map(lambda rest: (first, *rest)))


def sep_by1(p: Parser[A], sep: Parser[B]) -> Parser[tuple[A, ...]]:
    return p.chain(lambda first: many(sep.then(p)).map(lambda rest: (first, *rest)))


def sep_by(p: Parser[A], sep: Parser[B]) -> Parser[tuple[A, ...]]:
    return alt(sep_by1(p, sep), succeed(()))
