"""Generator options.

``Options`` is immutable; the ``with_*`` methods return updated copies:

    opts = DEFAULT_OPTIONS.with_tag_name("tag").with_fold_prefix("match")
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PositionalHandlers:
    """One fold handler parameter per constructor."""


@dataclass(frozen=True)
class RecordHandlers:
    """All fold handlers bundled into one object parameter."""

    handlers_name: str = "clauses"


HandlerStyle = PositionalHandlers | RecordHandlers


@dataclass(frozen=True)
class Options:
    tag_name: str = "type"
    fold_prefix: str = "fold"
    matchee_name: str = "fa"
    handler_style: HandlerStyle = PositionalHandlers()
    emit_accessors: bool = True
    emit_equality: bool = True

    def with_tag_name(self, tag_name: str) -> Options:
        return replace(self, tag_name=tag_name)

    def with_fold_prefix(self, fold_prefix: str) -> Options:
        return replace(self, fold_prefix=fold_prefix)

    def with_matchee_name(self, matchee_name: str) -> Options:
        return replace(self, matchee_name=matchee_name)

    def with_handler_style(self, handler_style: HandlerStyle) -> Options:
        return replace(self, handler_style=handler_style)

    def with_accessors(self, emit_accessors: bool) -> Options:
        return replace(self, emit_accessors=emit_accessors)

    def with_equality(self, emit_equality: bool) -> Options:
        return replace(self, emit_equality=emit_equality)


DEFAULT_OPTIONS = Options()
