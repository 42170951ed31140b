"""
Caller-facing entry points for checking PLANG sources.

The parser signals failure by raising. This module runs one parse per call,
each with its own Scanner and Parser, and turns the outcome into a
`ParseResult` value so tools and tests can inspect failures without
catching exceptions.

Classes:
    ParseResult: Tagged outcome of a single parse run.

Functions:
    check_source(source: str) -> ParseResult
    check_file(path: str | Path) -> ParseResult
    read_source(path: str | Path) -> str
"""

import logging
from pathlib import Path
from typing import TypedDict

from plang.plang_errors import ErrorDict, PlangSyntaxError
from plang.plang_parser import Parser

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Parsing completed successfully."


class ResultDict(TypedDict):
    ok: bool
    program: str | None
    tokens: int
    error: ErrorDict | None


class ParseResult:
    """
    Outcome of parsing one source unit.

    Attributes:
        ok (bool): True when the whole program was accepted.
        program_name (str | None): Name after `Program`, if it was reached.
        token_count (int): Number of tokens matched before success or failure.
        error (PlangSyntaxError | None): The single diagnostic of a failed run.
    """

    def __init__(
        self,
        ok: bool,
        program_name: str | None = None,
        token_count: int = 0,
        error: PlangSyntaxError | None = None,
    ) -> None:
        self.ok = ok
        self.program_name = program_name
        self.token_count = token_count
        self.error = error

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"ParseResult(ok, program={self.program_name!r})"
        return f"ParseResult(error={self.error!s})"

    @property
    def message(self) -> str:
        """The single line a tool prints for this result."""
        if self.error is not None:
            return str(self.error)
        return SUCCESS_MESSAGE

    def to_dict(self) -> ResultDict:
        return {
            "ok": self.ok,
            "program": self.program_name,
            "tokens": self.token_count,
            "error": self.error.to_dict() if self.error is not None else None,
        }


def check_source(source: str) -> ParseResult:
    """
    Parse one in-memory source unit.

    Args:
        source (str): Complete PLANG program text.

    Returns:
        ParseResult: `ok=True` on acceptance, otherwise the first error found.
    """
    parser = Parser.from_source(source)
    try:
        parser.parse()
    except PlangSyntaxError as e:
        logger.info("Rejected %s: %s", parser.program_name or "<source>", e)
        return ParseResult(False, parser.program_name, parser.consumed, e)
    logger.info("Accepted program %s", parser.program_name)
    return ParseResult(True, parser.program_name, parser.consumed)


def read_source(path: str | Path) -> str:
    """
    Read a whole source file into memory.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    # newline="" keeps \r\n intact so the scanner counts lines itself.
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def check_file(path: str | Path) -> ParseResult:
    """Read a whole file and parse it. Raises like `read_source`."""
    return check_source(read_source(path))


__all__ = ["SUCCESS_MESSAGE", "ParseResult", "check_file", "check_source", "read_source"]
