"""Module rendering from Jinja2 templates."""

from pathlib import Path

import typing
import jinja2

from .printer import render
from .tsast import Fragment

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def render_template(template_name: str, **kwargs: typing.Any) -> str:
    return _env.get_template(template_name).render(**kwargs)


def render_module(source: str, fragments: typing.Sequence[Fragment]) -> str:
    """Render a complete generated ``.ts`` module, header included."""
    return render_template(
        "module.ts.j2",
        source=" ".join(source.split()),
        blocks=[render(f) for f in fragments],
    )


def render_index(names: typing.Iterable[str]) -> str:
    return render_template("index.ts.j2", names=list(names))
