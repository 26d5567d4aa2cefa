"""CLI entrypoint for dbusgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import CONFIG_FILENAME, load_config
from .errors import DBusGenError
from .logging import configure_logging
from .orchestrator import Orchestrator, Source


class _SplitAppend(argparse.Action):
    """Accumulates comma separated values across repeated flags."""

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[override]
        items = list(getattr(namespace, self.dest, None) or [])
        items.extend(part for part in str(values).split(",") if part)
        setattr(namespace, self.dest, items)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbusgen",
        description="Takes D-Bus Introspection Data Format and generates Python bindings for it.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Introspection XML files (reads standard input when omitted).",
    )
    parser.add_argument("--package", default=None, help="Generated package name (default: dbusgen).")
    parser.add_argument(
        "--prefix",
        dest="prefixes",
        action=_SplitAppend,
        default=[],
        help="Prefix to strip from interface names (comma separated, repeatable).",
    )
    parser.add_argument(
        "--only",
        action=_SplitAppend,
        default=[],
        help="Generate code only for the named interfaces.",
    )
    parser.add_argument(
        "--except",
        dest="exclude",
        action=_SplitAppend,
        default=[],
        help="Skip the named interfaces.",
    )
    parser.add_argument(
        "--no-format",
        dest="format",
        action="store_false",
        default=None,
        help="Skip black formatting of the output (debugging only).",
    )
    parser.add_argument(
        "--xml",
        action="store_true",
        help="Combine the inputs into a single introspection document instead of generating code.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help=f"Path to {CONFIG_FILENAME} or the directory holding it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs of the run to this file.",
    )
    return parser


def _read_sources(paths: List[str]) -> List[Source]:
    if not paths:
        return [("<stdin>", sys.stdin.read())]
    return [(path, Path(path).read_bytes()) for path in paths]


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dbusgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    orchestrator = Orchestrator()

    try:
        configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)
        config = load_config(args.config).override(
            package_name=args.package,
            format=args.format,
            prefixes=args.prefixes,
            only=args.only,
            exclude=args.exclude,
        )
        sources = _read_sources(args.paths)
        if args.xml:
            output = orchestrator.run_combine(sources)
        else:
            output = orchestrator.run_generate(sources, config)
    except (DBusGenError, OSError) as exc:
        message = " ".join(str(exc).split())
        parser.exit(1, f"error: {message}\n")

    sys.stdout.write(output)


if __name__ == "__main__":
    main(sys.argv[1:])
