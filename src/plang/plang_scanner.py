"""
Scanner (lexical analyzer) for the PLANG teaching language.

This module converts a source buffer into classified tokens, one token per call:

Classes:
    CharacterStream: Source buffer with a cursor and line/column tracking.
    Token: Immutable token with kind, source text and position span.
    Scanner: Produces one Token per `next_token()` call from a CharacterStream.

Features:
    - Skips whitespace (including `\\n`, `\\r` and `\\r\\n` line endings, each
      counted as exactly one line advance) and `/* ... */` block comments
    - Case-sensitive keywords: Program, int, float, if, else, while
    - Numbers with optional fraction and exponent (`12`, `3.5`, `3.5e-2`)
    - Longest-match operators (`<=` before `<`, `==` before `=`)

Lexical errors never raise. They come back as tokens of kind `ERROR` whose
`message` says what went wrong, and the parser decides how to report them.
Once the input is exhausted every further call returns an `EOF` token at the
same position.

Example:
    >>> scanner = Scanner(CharacterStream("x12 = 3.5e-2;"))
    >>> scanner.next_token()
    Token(IDENT, 'x12', 1:1-3)

Exports:
    - CharacterStream
    - Token
    - Scanner
    - tokenize
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from plang.plang_constants import (
    KEYWORDS,
    MAX_OPERATOR_LENGTH,
    TokenKind,
    token_hashmap,
)

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n\v\f"

UNCLOSED_COMMENT = "Unclosed comment"
UNRECOGNIZED_CHARACTER = "Unrecognized character"
BANG_WITHOUT_EQUALS = "Expected '=' after '!'"
MALFORMED_NUMBER = "Malformed number"


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


class CharacterStream:
    """
    A source buffer read one character at a time with line and column tracking.

    A carriage return followed by a line feed is consumed as a single character
    step that advances the line once. A lone `\\r` or `\\n` also advances the line
    once. Every other character advances the column.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        For a `\\r\\n` pair both characters are consumed and `"\\r\\n"` is returned.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        self.position += 1
        if char == "\r" and self.peek() == "\n":
            self.position += 1
            char = "\r\n"
        if char in ("\n", "\r", "\r\n"):
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        text (str): The exact source text matched ("" for end-of-input).
        line (int): 1-based line where the token starts.
        start_column (int): 1-based column of the first character.
        end_column (int): 1-based column of the last character (inclusive).
        message (str | None): Diagnostic for `ERROR` tokens, None otherwise.
    """

    kind: TokenKind
    text: str
    line: int = 0
    start_column: int = 0
    end_column: int = 0
    message: str | None = None

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, {self.line}:{self.start_column}-{self.end_column})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.name,
            "text": self.text,
            "line": self.line,
            "start_column": self.start_column,
            "end_column": self.end_column,
            "message": self.message,
        }


class Scanner:
    """Lexical analyzer for PLANG.

    Each call to `next_token()` skips insignificant input, then returns exactly
    one token and leaves the stream positioned after it. A Scanner owns its
    stream; use `reset()` to scan a new buffer with the same instance.

    Attributes:
        stream (CharacterStream): The source stream being tokenized.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @classmethod
    def from_source(cls, source: str) -> "Scanner":
        return cls(CharacterStream(source))

    def reset(self, source: str) -> None:
        """Discards all scanning state and starts over on a new buffer."""
        self.stream = CharacterStream(source)

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def make_token(
        self,
        kind: TokenKind,
        text: str,
        line: int,
        col: int,
        message: str | None = None,
    ) -> Token:
        """Builds a token that started at (line, col) and ends before the cursor."""
        end_col = max(col, self.stream.column - 1) if text else col
        token = Token(kind, text, line, col, end_col, message)
        if kind is TokenKind.ERROR:
            logger.debug("Lexical error: %s %r at %d:%d", message, text, line, col)
        return token

    def skip_insignificant(self) -> Token | None:
        """Skips whitespace and block comments.

        Returns:
            Token | None: An `ERROR` token if a comment is never closed, else None.
        """
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch in WHITESPACE:
                self.advance()
            elif ch == "/" and self.peek(1) == "*":
                error = self.skip_comment()
                if error is not None:
                    return error
            else:
                break
        return None

    def skip_comment(self) -> Token | None:
        """Consumes a `/* ... */` comment starting at the cursor."""
        line, col = self.stream.line, self.stream.column
        self.advance()
        self.advance()
        while not self.stream.end_of_file():
            if self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                return None
            self.advance()
        token = Token(TokenKind.ERROR, "/*", line, col, col + 1, UNCLOSED_COMMENT)
        logger.debug("Lexical error: %s at %d:%d", UNCLOSED_COMMENT, line, col)
        return token

    def scan_word(self, line: int, col: int) -> Token:
        word = ""
        while _is_letter(self.peek()) or _is_digit(self.peek()):
            word += self.advance()
        kind = KEYWORDS.get(word, TokenKind.IDENT)
        return self.make_token(kind, word, line, col)

    def scan_digits(self) -> str:
        digits = ""
        while _is_digit(self.peek()):
            digits += self.advance()
        return digits

    def scan_number(self, line: int, col: int) -> Token:
        """Scans `digits ['.' digits] [('e'|'E') ['+'|'-'] digits]`.

        A fraction or exponent that is started but has no digits yields an
        `ERROR` token covering everything consumed so far.
        """
        num = self.scan_digits()

        if self.peek() == ".":
            num += self.advance()
            if not _is_digit(self.peek()):
                return self.make_token(TokenKind.ERROR, num, line, col, MALFORMED_NUMBER)
            num += self.scan_digits()

        if self.peek() in ("e", "E"):
            num += self.advance()
            if self.peek() in ("+", "-"):
                num += self.advance()
            if not _is_digit(self.peek()):
                return self.make_token(TokenKind.ERROR, num, line, col, MALFORMED_NUMBER)
            num += self.scan_digits()

        return self.make_token(TokenKind.NUMBER, num, line, col)

    def match_operator(self, line: int, col: int) -> Token | None:
        """Attempts to match the longest operator or punctuation at the cursor."""
        max_token = None
        candidate = ""

        for i in range(MAX_OPERATOR_LENGTH):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return self.make_token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next token from the stream."""
        error = self.skip_insignificant()
        if error is not None:
            return error

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(TokenKind.EOF, "", line, col, col)

        ch = self.peek()

        if _is_letter(ch):
            return self.scan_word(line, col)

        if _is_digit(ch):
            return self.scan_number(line, col)

        token = self.match_operator(line, col)
        if token:
            return token

        bad = self.advance()
        message = BANG_WITHOUT_EQUALS if bad == "!" else UNRECOGNIZED_CHARACTER
        return self.make_token(TokenKind.ERROR, bad, line, col, message)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first `EOF` token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenKind.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Scans a whole buffer, returning every token including the final `EOF`."""
    return list(Scanner.from_source(source))


__all__ = ["CharacterStream", "Scanner", "Token", "tokenize"]
