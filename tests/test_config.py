"""Tests for reading generator options from ADTGEN_* variables."""

import pytest

from adtgen.config import ConfigError, is_identifier, options_from_env
from adtgen.options import DEFAULT_OPTIONS, Options, RecordHandlers
from adtgen.result import Err, Ok


def test_empty_environment_gives_defaults() -> None:
    assert options_from_env({}) == Ok(DEFAULT_OPTIONS)


def test_blank_values_are_ignored() -> None:
    assert options_from_env({"ADTGEN_TAG_NAME": "  ", "ADTGEN_EMIT_EQUALITY": ""}) == Ok(DEFAULT_OPTIONS)


def test_reads_every_variable() -> None:
    env = {
        "ADTGEN_TAG_NAME": "tag",
        "ADTGEN_FOLD_PREFIX": "match",
        "ADTGEN_MATCHEE_NAME": "s",
        "ADTGEN_HANDLERS_NAME": "cases",
        "ADTGEN_EMIT_ACCESSORS": "off",
        "ADTGEN_EMIT_EQUALITY": "No",
    }
    assert options_from_env(env) == Ok(
        Options(
            tag_name="tag",
            fold_prefix="match",
            matchee_name="s",
            handler_style=RecordHandlers("cases"),
            emit_accessors=False,
            emit_equality=False,
        )
    )


@pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
def test_true_flags(value: str) -> None:
    base = DEFAULT_OPTIONS.with_equality(False)
    match options_from_env({"ADTGEN_EMIT_EQUALITY": value}, base):
        case Ok(options):
            assert options.emit_equality
        case Err(e):
            pytest.fail(f"Expected Ok, got Err: {e}")


def test_base_options_survive() -> None:
    base = DEFAULT_OPTIONS.with_tag_name("kind")
    match options_from_env({"ADTGEN_FOLD_PREFIX": "cata"}, base):
        case Ok(options):
            assert options.tag_name == "kind"
            assert options.fold_prefix == "cata"
        case Err(e):
            pytest.fail(f"Expected Ok, got Err: {e}")


def test_invalid_identifier() -> None:
    match options_from_env({"ADTGEN_TAG_NAME": "1abc"}):
        case Ok(options):
            pytest.fail(f"Expected Err, got Ok: {options}")
        case Err(e):
            assert isinstance(e, ConfigError)
            assert str(e) == "ADTGEN_TAG_NAME='1abc' is not a valid identifier"


def test_invalid_flag() -> None:
    match options_from_env({"ADTGEN_EMIT_EQUALITY": "maybe"}):
        case Ok(options):
            pytest.fail(f"Expected Err, got Ok: {options}")
        case Err(e):
            assert str(e) == "ADTGEN_EMIT_EQUALITY='maybe' is not a boolean"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADTGEN_MATCHEE_NAME", "value")
    match options_from_env():
        case Ok(options):
            assert options.matchee_name == "value"
        case Err(e):
            pytest.fail(f"Expected Ok, got Err: {e}")


def test_is_identifier() -> None:
    assert is_identifier("clauses")
    assert is_identifier("$_x1")
    assert not is_identifier("1x")
    assert not is_identifier("a-b")
    assert not is_identifier("")
