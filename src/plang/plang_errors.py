"""
Error types raised by the PLANG front end.

Classes:
    PlangError: Common base for every language error raised by this package.
    PlangSyntaxError: A grammar violation found by the parser.
    ScanError: A lexical error token (unrecognized character, unclosed comment,
        malformed number or operator) met by the parser at its point of use.

Both concrete classes derive from the built-in `SyntaxError`, so callers that
already catch `SyntaxError` keep working. Each carries the position of the
offending token and renders the one-line diagnostic through `str()`:

    ERROR at line 3, position 7: Expected ';', found 'identifier'
    ERROR at line 1, position 5: Unclosed comment (found '/*')
"""

from typing import Any, TypedDict


class ErrorDict(TypedDict):
    """Serialized form of a PLANG error, suitable for JSON output."""

    kind: str
    line: int
    column: int
    message: str
    found: str | None
    expected: str | None


class PlangError(Exception):
    """Base class for PLANG language errors."""


class PlangSyntaxError(PlangError, SyntaxError):
    """
    A syntactic error: the lookahead did not fit the current grammar rule.

    Attributes:
        line (int): 1-based source line of the reported position.
        column (int): 1-based source column of the reported position.
        message (str): Description of the violated rule.
        found (str | None): Lexeme of the offending token, when reported.
        expected (str | None): Description of the expected token, for `match` failures.
    """

    kind = "syntax"

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        found: str | None = None,
        expected: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.found = found
        self.expected = expected
        super().__init__(self.diagnostic())

    def diagnostic(self) -> str:
        text = f"ERROR at line {self.line}, position {self.column}: {self.message}"
        if self.found is not None and self.expected is None:
            text += f" (found '{self.found}')"
        return text

    def __str__(self) -> str:
        return self.diagnostic()

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            self.__class__,
            (self.message, self.line, self.column, self.found, self.expected),
        )

    def to_dict(self) -> ErrorDict:
        return {
            "kind": self.kind,
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "found": self.found,
            "expected": self.expected,
        }


class ScanError(PlangSyntaxError):
    """A lexical error token reached the parser."""

    kind = "lexical"


__all__ = ["ErrorDict", "PlangError", "PlangSyntaxError", "ScanError"]
