"""
PLANG CLI Entrypoint.

This module provides the command-line interface for checking PLANG source code.
It supports checking files or inline strings, token dumps, JSON diagnostics and
an interactive REPL.

Features:
    - Read source from `.plang` files or inline strings.
    - Scan and parse the source, reporting success or the first error.
    - Optionally print every token before the verdict.
    - Optionally print the verdict as a JSON object (with `--tokens`, the
      token stream is included in that object under "token_stream").
    - Launch an interactive REPL.

Example usage:
    plang hello.plang
    plang -s "Program P { int x; x = 1; }" --tokens
    plang hello.plang --json
    plang --repl

Exit status:
    0 when the program is accepted, 1 on a lexical or syntax error,
    2 on usage errors or unreadable input.

Functions:
    format_token(tok: Token) -> str
    run_plang(source: str, is_string: bool = False, tokens: bool = False,
              as_json: bool = False) -> int
    main(argv: list[str] | None = None) -> int
"""

import argparse
import json
import logging
import sys
from typing import Any

from plang.plang_check import ParseResult, check_source, read_source
from plang.plang_scanner import Token, tokenize

SOURCE_SUFFIX = ".plang"

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


def format_token(tok: Token) -> str:
    """Formats one token as `KIND 'text' line:start-end`."""
    text = f"{tok.kind.name:<8} {tok.text!r} {tok.line}:{tok.start_column}-{tok.end_column}"
    if tok.message:
        text += f"  # {tok.message}"
    return text


def print_result(
    result: ParseResult, as_json: bool = False, tokens: list[Token] | None = None
) -> None:
    if as_json:
        payload: dict[str, Any] = dict(result.to_dict())
        if tokens is not None:
            payload["token_stream"] = [tok.to_dict() for tok in tokens]
        print(json.dumps(payload))
        return
    if tokens is not None:
        for tok in tokens:
            print(format_token(tok))
    print(result.message)


def run_plang(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the PLANG front end on one source unit and print the verdict.

    Args:
        source (str): The PLANG source code or path to a `.plang` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, prints every token before the verdict.
        as_json (bool): If True, prints the verdict (and tokens) as one JSON object.

    Returns:
        int: The process exit status.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.plang'.
        OSError: If the file cannot be read.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    if not is_string:
        source = read_source(source)

    result = check_source(source)
    print_result(result, as_json, tokenize(source) if tokens else None)
    return EXIT_OK if result.ok else EXIT_REJECTED


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plang", description="Check PLANG programs for lexical and syntax errors."
    )
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream before the verdict"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the verdict as JSON"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of checking"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log parser progress to stderr"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the PLANG CLI.

    Launches the REPL when no source is given or `--repl` is passed; otherwise
    checks the source and returns the exit status.
    """
    args = build_arg_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.repl or args.source is None:
        from plang.plang_repl import start_repl

        start_repl(show_tokens=args.tokens)
        return EXIT_OK

    try:
        return run_plang(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            as_json=args.as_json,
        )
    except (ValueError, OSError) as e:
        print(f"plang: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
