"""Golden tests for generated TypeScript, plus generator-wide properties."""

import logging

import pytest

from adtgen import (
    DEFAULT_OPTIONS,
    Declaration,
    FragmentKind,
    Options,
    RecordHandlers,
    compile,
    compile_fragments,
    generate,
    parse,
    render,
)
from adtgen.codegen import handler_name, member_name, return_type_param_name
from adtgen.examples import EXAMPLES
from adtgen.result import Err, Ok


def _declaration(text: str) -> Declaration:
    match parse(text):
        case Ok(d):
            return d
        case Err(e):
            pytest.fail(f"Expected Ok, got Err: {e}")


def _blocks(text: str, options: Options = DEFAULT_OPTIONS) -> list[str]:
    return [render(f) for f in generate(_declaration(text), options)]


def _block(text: str, name: str, options: Options = DEFAULT_OPTIONS) -> str:
    for f in generate(_declaration(text), options):
        if f.name == name:
            return render(f)
    raise AssertionError(f"No fragment named {name!r}")


OPTION = EXAMPLES["Option"]


# ---------------------------------------------------------------------------
# Option: every fragment
# ---------------------------------------------------------------------------


class TestOption:
    def test_fragment_order(self) -> None:
        fragments = generate(_declaration(OPTION))
        assert [f.kind for f in fragments] == [
            FragmentKind.TYPE,
            FragmentKind.CONSTRUCTOR,
            FragmentKind.CONSTRUCTOR,
            FragmentKind.FOLD,
            FragmentKind.FOLD,
            FragmentKind.IMPORT,
            FragmentKind.ACCESSOR,
            FragmentKind.ACCESSOR,
            FragmentKind.IMPORT,
            FragmentKind.EQUALITY,
        ]
        assert [f.name for f in fragments] == [
            "Option", "none", "some", "fold", "foldL",
            "monocle-ts", "_none", "_some", "fp-ts/lib/Eq", "getEq",
        ]

    def test_data(self) -> None:
        assert _block(OPTION, "Option") == (
            "export type Option<A> = {\n"
            '    readonly type: "None";\n'
            "} | {\n"
            '    readonly type: "Some";\n'
            "    readonly value0: A;\n"
            "};"
        )

    def test_constructors(self) -> None:
        assert _block(OPTION, "none") == 'export const none: Option<never> = { type: "None" };'
        assert _block(OPTION, "some") == (
            'export function some<A>(value0: A): Option<A> { return { type: "Some", value0 }; }'
        )

    def test_eager_fold(self) -> None:
        assert _block(OPTION, "fold") == (
            "export function fold<A, R>(fa: Option<A>, onNone: R, onSome: (value0: A) => R): R"
            " { switch (fa.type) {\n"
            '    case "None": return onNone;\n'
            '    case "Some": return onSome(fa.value0);\n'
            "} }"
        )

    def test_lazy_fold(self) -> None:
        assert _block(OPTION, "foldL") == (
            "export function foldL<A, R>(fa: Option<A>, onNone: () => R, onSome: (value0: A) => R): R"
            " { switch (fa.type) {\n"
            '    case "None": return onNone();\n'
            '    case "Some": return onSome(fa.value0);\n'
            "} }"
        )

    def test_accessors(self) -> None:
        assert _block(OPTION, "monocle-ts") == 'import { Prism } from "monocle-ts";'
        assert _block(OPTION, "_some") == (
            "export function _some<A>(): Prism<Option<A>, Option<A>>"
            ' { return Prism.fromPredicate(fa => fa.type === "Some"); }'
        )

    def test_equality(self) -> None:
        assert _block(OPTION, "fp-ts/lib/Eq") == 'import { Eq, fromEquals } from "fp-ts/lib/Eq";'
        assert _block(OPTION, "getEq") == (
            "export function getEq<A>(eqSomeValue0: Eq<A>): Eq<Option<A>>"
            " { return fromEquals((x, y) => {"
            ' if (x.type === "None" && y.type === "None") {\n'
            "    return true;\n"
            "}"
            ' if (x.type === "Some" && y.type === "Some") {\n'
            "    return eqSomeValue0.equals(x.value0, y.value0);\n"
            "}"
            " return false; }); }"
        )

    def test_compile_joins_fragments(self) -> None:
        match compile(OPTION):
            case Ok(text):
                assert text == "\n\n".join(_blocks(OPTION))
                assert text.startswith("export type Option<A> = {")
            case Err(e):
                pytest.fail(f"Expected Ok, got Err: {e}")


# ---------------------------------------------------------------------------
# Other shapes
# ---------------------------------------------------------------------------


def test_either_uses_fresh_return_type() -> None:
    text = EXAMPLES["Either"]
    assert _block(text, "left") == (
        'export function left<L, R>(value0: L): Either<L, R> { return { type: "Left", value0 }; }'
    )
    assert _block(text, "fold") == (
        "export function fold<L, R, R1>(fa: Either<L, R>, onLeft: (value0: L) => R1, onRight: (value0: R) => R1): R1"
        " { switch (fa.type) {\n"
        '    case "Left": return onLeft(fa.value0);\n'
        '    case "Right": return onRight(fa.value0);\n'
        "} }"
    )
    # No nullary constructor: a single fold.
    assert "foldL" not in [f.name for f in generate(_declaration(text))]


def test_tree_equality_refers_to_itself() -> None:
    text = EXAMPLES["Tree"]
    assert _block(text, "node") == (
        "export function node<A>(value0: Tree<A>, value1: A, value2: Tree<A>): Tree<A>"
        ' { return { type: "Node", value0, value1, value2 }; }'
    )
    assert _block(text, "getEq") == (
        "export function getEq<A>(eqNodeValue1: Eq<A>): Eq<Tree<A>>"
        " { const S: Eq<Tree<A>> = fromEquals((x, y) => {"
        ' if (x.type === "Leaf" && y.type === "Leaf") {\n'
        "    return true;\n"
        "}"
        ' if (x.type === "Node" && y.type === "Node") {\n'
        "    return S.equals(x.value0, y.value0)"
        " && eqNodeValue1.equals(x.value1, y.value1)"
        " && S.equals(x.value2, y.value2);\n"
        "}"
        " return false; }); return S; }"
    )


def test_enum() -> None:
    text = EXAMPLES["FooBarBaz"]
    assert _block(text, "FooBarBaz") == (
        "export type FooBarBaz = {\n"
        '    readonly type: "Foo";\n'
        "} | {\n"
        '    readonly type: "Bar";\n'
        "} | {\n"
        '    readonly type: "Baz";\n'
        "};"
    )
    assert _block(text, "foo") == 'export const foo: FooBarBaz = { type: "Foo" };'
    assert _block(text, "fold") == (
        "export function fold<R>(fa: FooBarBaz, onFoo: R, onBar: R, onBaz: R): R"
        " { switch (fa.type) {\n"
        '    case "Foo": return onFoo;\n'
        '    case "Bar": return onBar;\n'
        '    case "Baz": return onBaz;\n'
        "} }"
    )
    assert _block(text, "_foo") == (
        "export const _foo: Prism<FooBarBaz, FooBarBaz>"
        ' = Prism.fromPredicate(fa => fa.type === "Foo");'
    )
    assert _block(text, "getEq") == (
        "export function getEq(): Eq<FooBarBaz> { return fromEquals((x, y) => x.type === y.type); }"
    )


def test_record_product() -> None:
    text = EXAMPLES["User"]
    assert _blocks(text) == [
        "export type User = {\n"
        "    readonly name: string;\n"
        "    readonly surname: string;\n"
        "    readonly age: number;\n"
        "};",
        "export function user(name: string, surname: string, age: number): User"
        " { return { name, surname, age }; }",
        'import { Eq, fromEquals } from "fp-ts/lib/Eq";',
        "export function getEq(eqName: Eq<string>, eqSurname: Eq<string>, eqAge: Eq<number>): Eq<User>"
        " { return fromEquals((x, y) => {"
        " return eqName.equals(x.name, y.name)"
        " && eqSurname.equals(x.surname, y.surname)"
        " && eqAge.equals(x.age, y.age); }); }",
    ]


def test_record_sum() -> None:
    text = EXAMPLES["Maybe"]
    assert _block(text, "Maybe") == (
        "export type Maybe<A> = {\n"
        '    readonly type: "Nothing";\n'
        "} | {\n"
        '    readonly type: "Just";\n'
        "    readonly value: A;\n"
        "};"
    )
    assert _block(text, "just") == (
        'export function just<A>(value: A): Maybe<A> { return { type: "Just", value }; }'
    )
    assert '    case "Just": return onJust(fa.value);' in _block(text, "fold")
    assert "eqJustValue: Eq<A>" in _block(text, "getEq")


def test_field_named_like_tag_is_renamed() -> None:
    text = "data T = A { type :: string } | B"
    assert _block(text, "T") == (
        "export type T = {\n"
        '    readonly type: "A";\n'
        "    readonly type_: string;\n"
        "} | {\n"
        '    readonly type: "B";\n'
        "};"
    )
    assert _block(text, "a") == 'export function a(type_: string): T { return { type: "A", type_ }; }'
    fold = _block(text, "fold")
    assert "onA: (type_: string) => R" in fold
    assert '    case "A": return onA(fa.type_);' in fold
    assert "eqAType_: Eq<string>" in _block(text, "getEq")
    assert "eqAType_.equals(x.type_, y.type_)" in _block(text, "getEq")


def test_tag_rename_skips_taken_names() -> None:
    text = "data T = A { type :: string, type_ :: number } | B"
    assert _block(text, "a") == (
        'export function a(type__: string, type_: number): T { return { type: "A", type__, type_ }; }'
    )


def test_field_named_like_tag_kept_without_collision() -> None:
    assert _block("data P = P { type :: string }", "p") == (
        "export function p(type: string): P { return { type }; }"
    )
    options = DEFAULT_OPTIONS.with_tag_name("kind")
    assert _block("data T = A { type :: string } | B", "a", options) == (
        'export function a(type: string): T { return { kind: "A", type }; }'
    )


def test_constrained_parameter() -> None:
    text = EXAMPLES["Constrained"]
    assert _block(text, "Constrained").startswith("export type Constrained<A extends string> = {")
    assert _block(text, "fetching") == (
        'export const fetching: Constrained<string> = { type: "Fetching" };'
    )
    assert _block(text, "gotData") == (
        "export function gotData<A extends string>(value0: A): Constrained<A>"
        ' { return { type: "GotData", value0 }; }'
    )
    assert _block(text, "_fetching").startswith(
        "export function _fetching<A extends string>(): Prism<Constrained<A>, Constrained<A>>"
    )


def test_positional_product() -> None:
    text = EXAMPLES["Tuple2"]
    assert _blocks(text) == [
        "export type Tuple2<A, B> = {\n    readonly value0: [A, B];\n};",
        "export function tuple2<A, B>(value0: [A, B]): Tuple2<A, B> { return { value0 }; }",
        'import { Eq, fromEquals } from "fp-ts/lib/Eq";',
        "export function getEq<A, B>(eqValue0: Eq<[A, B]>): Eq<Tuple2<A, B>>"
        " { return fromEquals((x, y) => { return eqValue0.equals(x.value0, y.value0); }); }",
    ]


def test_nullary_product() -> None:
    assert _blocks(EXAMPLES["Nullary"]) == [
        "export type Nullary = {};",
        "export const nullary: Nullary = {};",
        'import { Eq, fromEquals } from "fp-ts/lib/Eq";',
        "export function getEq(): Eq<Nullary> { return fromEquals((x, y) => true); }",
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (EXAMPLES["State"], "(s: S) => [A, S]"),
        (EXAMPLES["Writer"], "() => [A, W]"),
        ("data F = F ((A -> B) -> C)", "(f: (a: A) => B) => C"),
        ("data G = G ((A, B) -> C)", "(tuple: [A, B]) => C"),
        ("data H = H (Array A -> A)", "(array: Array<A>) => A"),
        ("data U = U ()", "undefined"),
    ],
)
def test_member_types(text: str, expected: str) -> None:
    data = _blocks(text)[0]
    assert data.splitlines()[1] == f"    readonly value0: {expected};"


def test_reserved_words_are_escaped() -> None:
    box = "data Box = Box { default :: string }"
    assert _block(box, "box") == (
        "export function box(default_: string): Box { return { default: default_ }; }"
    )
    assert "readonly default: string;" in _block(box, "Box")

    op = "data Op = New | Delete"
    names = [f.name for f in generate(_declaration(op))]
    assert names[:3] == ["Op", "new_", "delete_"]
    assert _block(op, "new_") == 'export const new_: Op = { type: "New" };'
    assert "_new" in names


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestOptions:
    def test_tag_name(self) -> None:
        options = DEFAULT_OPTIONS.with_tag_name("tag")
        assert 'readonly tag: "None";' in _block(OPTION, "Option", options)
        assert _block(OPTION, "none", options) == 'export const none: Option<never> = { tag: "None" };'
        assert "switch (fa.tag)" in _block(OPTION, "fold", options)
        assert 'fa => fa.tag === "Some"' in _block(OPTION, "_some", options)
        assert 'x.tag === "Some" && y.tag === "Some"' in _block(OPTION, "getEq", options)

    def test_fold_prefix(self) -> None:
        options = DEFAULT_OPTIONS.with_fold_prefix("match")
        names = [f.name for f in generate(_declaration(OPTION), options) if f.kind is FragmentKind.FOLD]
        assert names == ["match", "matchL"]

    def test_matchee_name(self) -> None:
        options = DEFAULT_OPTIONS.with_matchee_name("s")
        fold = _block(OPTION, "fold", options)
        assert fold.startswith("export function fold<A, R>(s: Option<A>, ")
        assert "switch (s.type)" in fold
        assert "return onSome(s.value0);" in fold
        assert 's => s.type === "Some"' in _block(OPTION, "_some", options)

    def test_record_handlers(self) -> None:
        options = DEFAULT_OPTIONS.with_handler_style(RecordHandlers())
        assert _block(OPTION, "fold", options) == (
            "export function fold<A, R>(fa: Option<A>, clauses: {\n"
            "    onNone: R;\n"
            "    onSome: (value0: A) => R;\n"
            "}): R { switch (fa.type) {\n"
            '    case "None": return clauses.onNone;\n'
            '    case "Some": return clauses.onSome(fa.value0);\n'
            "} }"
        )
        lazy = _block(OPTION, "foldL", DEFAULT_OPTIONS.with_handler_style(RecordHandlers("cases")))
        assert "cases: {\n    onNone: () => R;" in lazy
        assert 'case "None": return cases.onNone();' in lazy

    def test_disable_accessors_and_equality(self) -> None:
        options = DEFAULT_OPTIONS.with_accessors(False).with_equality(False)
        kinds = {f.kind for f in generate(_declaration(OPTION), options)}
        assert kinds == {FragmentKind.TYPE, FragmentKind.CONSTRUCTOR, FragmentKind.FOLD}

    def test_options_are_immutable(self) -> None:
        changed = DEFAULT_OPTIONS.with_tag_name("tag")
        assert DEFAULT_OPTIONS.tag_name == "type"
        assert changed.tag_name == "tag"
        assert changed.fold_prefix == DEFAULT_OPTIONS.fold_prefix


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def test_return_type_parameter_avoids_collisions() -> None:
    assert return_type_param_name(_declaration(OPTION)) == "R"
    assert return_type_param_name(_declaration(EXAMPLES["Either"])) == "R1"
    assert return_type_param_name(_declaration("data X R R1 = A R | B R1")) == "R2"
    assert return_type_param_name(_declaration("data X R R1 R2 = A R | B R1 | C R2")) == "R3"
    assert return_type_param_name(_declaration("data X R2 R = A R | B R2")) == "R1"


@pytest.mark.parametrize("text", ["data R = A | B", "data T = A R | B", "data T (A :: R) = T A"])
def test_return_type_parameter_avoids_type_names(text: str) -> None:
    assert return_type_param_name(_declaration(text)) == "R1"


def test_fold_over_type_named_r() -> None:
    assert _block("data R = A | B", "fold").startswith(
        "export function fold<R1>(fa: R, onA: R1, onB: R1): R1 { switch (fa.type) {"
    )


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_generation_is_deterministic(name: str) -> None:
    first = compile(EXAMPLES[name])
    assert isinstance(first, Ok)
    assert compile(EXAMPLES[name]) == first


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_generation_is_total(name: str) -> None:
    d = _declaration(EXAMPLES[name])
    kinds = [f.kind for f in generate(d)]
    assert kinds[0] is FragmentKind.TYPE
    assert kinds.count(FragmentKind.CONSTRUCTOR) == len(d.constructors)
    if d.is_product:
        assert FragmentKind.FOLD not in kinds
        assert FragmentKind.ACCESSOR not in kinds


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_folds_are_exhaustive(name: str) -> None:
    d = _declaration(EXAMPLES[name])
    folds = [f for f in generate(d) if f.kind is FragmentKind.FOLD]
    if not d.is_sum:
        assert folds == []
        return
    for fold in folds:
        text = render(fold)
        for c in d.constructors:
            assert text.count(f'case "{c.name}":') == 1
            if c.members:
                args = ", ".join(f"fa.{member_name(m, i)}" for i, m in enumerate(c.members))
                assert f"return {handler_name(c)}({args});" in text


def test_compile_reports_parse_failure() -> None:
    match compile_fragments("data Option A = "):
        case Err(failure):
            assert failure.message == 'Expected a data declaration, cannot parse ""'
        case Ok(fragments):
            pytest.fail(f"Expected Err, got Ok: {fragments}")


def test_generate_logs_fragments(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="adtgen.codegen"):
        generate(_declaration(EXAMPLES["User"]))
    assert "Generated 4 fragment(s) for 'User': type, constructor, import, equality" in caplog.text
