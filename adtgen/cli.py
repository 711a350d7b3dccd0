import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from adtgen.config import ConfigError, is_identifier, options_from_env
from adtgen.examples import EXAMPLES
from adtgen.options import Options, RecordHandlers
from adtgen.pipeline import FRAGMENT_SEPARATOR, compile_fragments
from adtgen.printer import render
from adtgen.result import Err, Ok
from adtgen.templates import render_index, render_module

logger = logging.getLogger("adtgen")

EXIT_PARSE_ERROR = 1
EXIT_USAGE_ERROR = 2


def _apply_overrides(options: Options, args: argparse.Namespace) -> Options:
    """Command-line flags win over ADTGEN_* environment variables."""
    for flag in ("tag_name", "fold_prefix", "matchee_name", "handlers_name"):
        value = getattr(args, flag)
        if value is not None and not is_identifier(value):
            raise ConfigError(f"--{flag.replace('_', '-')}={value!r} is not a valid identifier")
    if args.tag_name is not None:
        options = options.with_tag_name(args.tag_name)
    if args.fold_prefix is not None:
        options = options.with_fold_prefix(args.fold_prefix)
    if args.matchee_name is not None:
        options = options.with_matchee_name(args.matchee_name)
    if args.handlers_name is not None:
        options = options.with_handler_style(RecordHandlers(args.handlers_name))
    if args.accessors is not None:
        options = options.with_accessors(args.accessors)
    if args.equality is not None:
        options = options.with_equality(args.equality)
    return options


def handle_compile(source: str, options: Options, *, bare: bool) -> int:
    """Compile one declaration and print the generated module."""
    match compile_fragments(source, options):
        case Ok(fragments):
            if bare:
                print(FRAGMENT_SEPARATOR.join(render(f) for f in fragments))
            else:
                print(render_module(source, fragments), end="")
            return 0
        case Err(failure):
            print(failure.message, file=sys.stderr)
            return EXIT_PARSE_ERROR


def handle_examples(directory: str, options: Options) -> int:
    """Write <directory>/<Name>.ts for every example, plus an index.ts."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[str] = []
    for name, source in EXAMPLES.items():
        match compile_fragments(source, options):
            case Ok(fragments):
                (out_dir / f"{name}.ts").write_text(render_module(source, fragments))
                written.append(name)
            case Err(failure):
                logger.error("Example %r does not compile: %s", name, failure.message)
                return EXIT_PARSE_ERROR
    (out_dir / "index.ts").write_text(render_index(written))
    print(f"Wrote {len(written)} module(s) to {out_dir}/")
    return 0


def _add_option_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tag-name", dest="tag_name", help="Discriminant property name.")
    parser.add_argument("--fold-prefix", dest="fold_prefix", help="Name of the fold function(s).")
    parser.add_argument("--matchee-name", dest="matchee_name", help="Name of the value being matched.")
    parser.add_argument(
        "--handlers-name",
        dest="handlers_name",
        help="Bundle fold handlers into a single object parameter with this name.",
    )
    parser.add_argument(
        "--accessors",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit prism accessors (default: on).",
    )
    parser.add_argument(
        "--equality",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit an Eq instance (default: on).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adtgen",
        description="Generate TypeScript declarations for algebraic data types",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log pipeline details to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: compile
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile one data declaration read from FILE (or stdin).",
    )
    compile_parser.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="File holding the declaration. Reads stdin when omitted.",
    )
    compile_parser.add_argument(
        "--bare",
        action="store_true",
        default=False,
        help="Print only the generated declarations, without the file header.",
    )
    _add_option_flags(compile_parser)

    # Command: examples
    examples_parser = subparsers.add_parser(
        "examples",
        help="Generate a module for every built-in example.",
    )
    examples_parser.add_argument(
        "--out",
        required=True,
        metavar="DIR",
        help="Directory receiving <Name>.ts files and index.ts.",
    )
    _add_option_flags(examples_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE_ERROR

    match options_from_env():
        case Ok(options):
            pass
        case Err(e):
            print(f"Configuration error: {e}", file=sys.stderr)
            return EXIT_USAGE_ERROR
    try:
        options = _apply_overrides(options, args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    match args.command:
        case "compile":
            if args.file is None:
                source = sys.stdin.read()
            else:
                try:
                    source = Path(args.file).read_text()
                except OSError as e:
                    print(f"Could not read file: {e}", file=sys.stderr)
                    return EXIT_USAGE_ERROR
            return handle_compile(source, options, bare=args.bare)
        case "examples":
            return handle_examples(args.out, options)
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return EXIT_USAGE_ERROR


if __name__ == "__main__":
    sys.exit(main())
