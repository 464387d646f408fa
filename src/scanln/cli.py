"""Command-line interface for scanln."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from scanln.errors import FormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    spec: str
    input_file: Path | None
    line_terminated: bool
    json: bool
    missing: str
    strict: bool
    check: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="scanln",
        description="Scan typed values from each input line using a format spec",
    )
    p.add_argument("spec", help='Format spec such as "{u32} {s}", or a name from [formats]')
    p.add_argument("-i", "--input", metavar="FILE", help="Input file (default: stdin)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover scanln.toml)",
    )
    p.add_argument(
        "--stream",
        action="store_true",
        default=None,
        help="Let values span lines instead of ending each scan at a newline",
    )
    p.add_argument("--json", action="store_true", default=None, help="Print JSON arrays")
    p.add_argument(
        "--missing",
        default=None,
        metavar="TEXT",
        help="Placeholder for values that did not scan (default: -)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 3 if any line did not fill every placeholder",
    )
    p.add_argument("--check", action="store_true", help="Only compile the spec")
    p.add_argument("--debug", action="store_true", help="Dump compiled ops to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log scan progress to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "scanln.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.is_file():
        raise argparse.ArgumentTypeError(f"config file not found: {config_path}")
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    # Named formats
    spec = args.spec
    cfg_formats = config.get("formats")
    if isinstance(cfg_formats, dict) and spec in cfg_formats:
        named = cfg_formats[spec]
        if not isinstance(named, str):
            raise argparse.ArgumentTypeError(f"format {spec!r} in config is not a string")
        spec = named

    # Line termination: config < CLI
    line_terminated = True
    cfg_scan = config.get("scan")
    if isinstance(cfg_scan, dict):
        cfg_lt = cfg_scan.get("line_terminated")
        if isinstance(cfg_lt, bool):
            line_terminated = cfg_lt
    if args.stream:
        line_terminated = False

    # Output: config < CLI
    use_json = False
    missing = "-"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        if cfg_output.get("format") == "json":
            use_json = True
        cfg_missing = cfg_output.get("missing")
        if isinstance(cfg_missing, str):
            missing = cfg_missing
    if args.json:
        use_json = True
    if args.missing is not None:
        missing = args.missing

    return CliOptions(
        spec=spec,
        input_file=Path(args.input) if args.input else None,
        line_terminated=line_terminated,
        json=use_json,
        missing=missing,
        strict=args.strict,
        check=args.check,
        debug=args.debug,
        verbose=args.verbose,
    )


def _json_value(value: Any) -> Any:
    # JSON has no inf or nan; spell them as strings
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def format_values(values: list[Any], options: CliOptions) -> str:
    """Render one scanned line for output."""
    if options.json:
        return json.dumps([_json_value(v) for v in values], allow_nan=False)
    return "\t".join(options.missing if v is None else str(v) for v in values)


def scan_lines(options: CliOptions, stream: Any, out: TextIO) -> int:
    """Scan every line of a binary stream; return the number of incomplete lines."""
    from scanln.console import Console, Format
    from scanln.sources import stream_source

    fmt = Format(options.spec)
    console = Console(stream_source(stream), line_terminated=options.line_terminated)

    incomplete = 0
    lineno = 0
    while not console.at_eof():
        lineno += 1
        values = console.attempt(fmt, drop_line=True)
        if any(v is None for v in values):
            incomplete += 1
            logger.debug("line %d: incomplete match %r", lineno, values)
        out.write(format_values(values, options) + "\n")
    return incomplete


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2/3). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from scanln.debug import dump_ops
    from scanln.parser import compile_spec

    try:
        ops = compile_spec(options.spec)
    except FormatError as exc:
        print(exc.format(), file=sys.stderr)
        return 1

    if options.debug:
        dump_ops(ops)
    if options.check:
        return 0

    try:
        if options.input_file is not None:
            with open(options.input_file, "rb") as f:
                incomplete = scan_lines(options, f, sys.stdout)
        else:
            incomplete = scan_lines(options, sys.stdin.buffer, sys.stdout)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.strict and incomplete:
        print(f"error: {incomplete} line(s) did not match", file=sys.stderr)
        return 3
    return 0
