"""Build generator options from ``ADTGEN_*`` environment variables.

The CLI calls ``load_dotenv()`` first, so the same variables can live in a
``.env`` file next to the project that uses the generator.

    ADTGEN_TAG_NAME        discriminant property (default "type")
    ADTGEN_FOLD_PREFIX     fold function name (default "fold")
    ADTGEN_MATCHEE_NAME    fold matchee parameter (default "fa")
    ADTGEN_HANDLERS_NAME   bundle fold handlers into one parameter with this name
    ADTGEN_EMIT_ACCESSORS  boolean (default on)
    ADTGEN_EMIT_EQUALITY   boolean (default on)
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

from .options import DEFAULT_OPTIONS, Options, RecordHandlers
from .result import Err, Ok, Result

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """An environment variable holds a value the generator cannot use."""


def _identifier(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key, "").strip()
    if not value:
        return default
    if not _IDENTIFIER.match(value):
        raise ConfigError(f"{key}={value!r} is not a valid identifier")
    return value


def _flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key, "").strip().lower()
    if not value:
        return default
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{key}={value!r} is not a boolean")


def options_from_env(
    environ: Mapping[str, str] | None = None,
    base: Options = DEFAULT_OPTIONS,
) -> Result[Options, ConfigError]:
    env = os.environ if environ is None else environ
    try:
        options = (
            base.with_tag_name(_identifier(env, "ADTGEN_TAG_NAME", base.tag_name))
            .with_fold_prefix(_identifier(env, "ADTGEN_FOLD_PREFIX", base.fold_prefix))
            .with_matchee_name(_identifier(env, "ADTGEN_MATCHEE_NAME", base.matchee_name))
            .with_accessors(_flag(env, "ADTGEN_EMIT_ACCESSORS", base.emit_accessors))
            .with_equality(_flag(env, "ADTGEN_EMIT_EQUALITY", base.emit_equality))
        )
        handlers_name = _identifier(env, "ADTGEN_HANDLERS_NAME", "")
    except ConfigError as e:
        return Err(e)
    if handlers_name:
        options = options.with_handler_style(RecordHandlers(handlers_name))
    return Ok(options)


def is_identifier(value: str) -> bool:
    return bool(_IDENTIFIER.match(value))
