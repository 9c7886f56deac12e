"""Command-line interface for the Monkey front end."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monkey.errors import LexError, ParseError
from monkey.repl import MODES, PROMPT

CONFIG_NAME = "monkey.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    tokens: bool
    recover: bool
    prompt: str
    mode: str
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey language scanner and parser",
    )
    p.add_argument("input", nargs="?", help="Source file (default: start the REPL)")
    p.add_argument("--tokens", action="store_true", help="Print the token stream instead of parsing")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first bad statement instead of resynchronizing",
    )
    p.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="REPL mode (default: tokens)",
    )
    p.add_argument("--prompt", default=None, metavar="TEXT", help="REPL prompt")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    base_dir = input_file.parent if input_file is not None else Path(".")
    if not base_dir.parts:
        base_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    prompt = PROMPT
    mode = "tokens"
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
        cfg_mode = cfg_repl.get("mode")
        if isinstance(cfg_mode, str):
            if cfg_mode not in MODES:
                raise argparse.ArgumentTypeError(
                    f"invalid repl mode in config (expected one of {', '.join(MODES)}): {cfg_mode}"
                )
            mode = cfg_mode

    recover = True
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_recover = cfg_parser.get("recover")
        if isinstance(cfg_recover, bool):
            recover = cfg_recover

    if args.prompt is not None:
        prompt = args.prompt
    if args.mode is not None:
        mode = args.mode
    if args.strict:
        recover = False

    return CliOptions(
        input_file=input_file,
        tokens=args.tokens,
        recover=recover,
        prompt=prompt,
        mode=mode,
        debug=args.debug,
    )


def run_file(options: CliOptions) -> int:
    """Token-dump or parse the input file. Returns exit code."""
    from monkey.debug import describe_program, dump_ast
    from monkey.lexer import Lexer
    from monkey.parser import Parser
    from monkey.repl import dump_tokens

    assert options.input_file is not None
    filename = str(options.input_file)
    source = options.input_file.read_text(encoding="utf-8")

    if options.tokens:
        dump_tokens(source, sys.stdout)
        return 0

    parser = Parser(Lexer(source), recover=options.recover)
    try:
        program = parser.parse_program()
    except ParseError:
        # Strict mode: report what was collected up to the abort
        program = None

    if parser.diagnostics:
        for diag in parser.diagnostics:
            print(diag.format(filename), file=sys.stderr)
        return 1

    assert program is not None
    if options.debug:
        dump_ast(program, file=sys.stderr)

    sys.stdout.write(describe_program(program))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        if options.input_file is None:
            from monkey.repl import start

            start(prompt=options.prompt, mode=options.mode, recover=options.recover)
            return 0
        return run_file(options)
    except LexError as exc:
        filename = str(options.input_file) if options.input_file is not None else "<stdin>"
        print(exc.format(filename), file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
