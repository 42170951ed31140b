"""
PLANG Language Parser

Validates that a PLANG source unit is grammatically well-formed.

The parser pulls tokens from a `Scanner` one at a time and drives a fixed
recursive-descent grammar with a single token of lookahead. It builds no tree:
its job is acceptance or rejection with a precise diagnostic.

Grammar
-------
    program              := 'Program' identifier '{' declaration_list statement_list '}'
    declaration_list     := ( ('int' | 'float') identifier ';' )*
    statement_list       := statement*                          (until '}')
    statement            := assignment_stmt | selection_stmt
                          | iteration_stmt | compound_stmt
    assignment_stmt      := identifier '=' expression ';'
    selection_stmt       := 'if' '(' expression ')' statement ( 'else' statement )?
    iteration_stmt       := 'while' '(' expression ')' statement
    compound_stmt        := '{' statement_list '}'
    expression           := additive_expression ( relop additive_expression )?
    additive_expression  := term ( ('+' | '-') term )*
    term                 := factor ( ('*' | '/') factor )*
    factor               := identifier | number | '(' expression ')'

A relational operator applies at most once per expression, so `a < b < c`
is rejected at the second `<`. An `else` belongs to the nearest `if`.

Parser Behavior
---------------
- Fail-fast: the first violation raises and no further tokens are consumed.
- A lexical `ERROR` token is reported as a `ScanError` wherever it is met.
- Any other violation raises `PlangSyntaxError`.
- Statements and expressions nest at most MAX_NESTING_DEPTH levels combined;
  deeper input is rejected with "Nesting too deep".

Entry Points
------------
- `parse()`: Parse one complete program up to end-of-input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from plang.plang_constants import (
    ADDITIVE_OPS,
    MAX_NESTING_DEPTH,
    MULTIPLICATIVE_OPS,
    RELATIONAL_OPS,
    TYPE_NAMES,
    TokenKind,
    describe,
)
from plang.plang_errors import PlangSyntaxError, ScanError
from plang.plang_scanner import Scanner, Token

logger = logging.getLogger(__name__)


class Parser:
    """
    PLANG recursive-descent parser.

    Each grammar rule is a method of the same name. The parser owns exactly one
    lookahead token and replaces it whenever `match` succeeds; there is no
    backtracking.

    Attributes
    ----------
    scanner : Scanner
        Token source, consulted on demand.
    lookahead : Token
        The next unconsumed token.
    consumed : int
        Number of tokens matched so far.
    program_name : str | None
        Name following `Program`, once matched.
    depth : int
        Current combined nesting of statements and expressions.
    """

    def __init__(self, scanner: Scanner) -> None:
        self.scanner: Scanner = scanner
        self.lookahead: Token = scanner.next_token()
        self.consumed: int = 0
        self.program_name: str | None = None
        self.depth: int = 0

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Scanner.from_source(source))

    def check_lexical(self) -> None:
        """Raises ScanError if the lookahead is a lexical error token."""
        tok = self.lookahead
        if tok.kind is TokenKind.ERROR:
            raise ScanError(
                tok.message or "Lexical error",
                tok.line,
                tok.start_column,
                found=tok.text,
            )

    def error(self, message: str) -> PlangSyntaxError:
        """Builds a context error pointing at the lookahead."""
        self.check_lexical()
        tok = self.lookahead
        found = tok.text or describe(tok.kind)
        return PlangSyntaxError(message, tok.line, tok.start_column, found=found)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Tracks one level of statement or expression nesting."""
        if self.depth >= MAX_NESTING_DEPTH:
            raise self.error("Nesting too deep")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def match(self, expected: TokenKind) -> Token:
        """Consumes the lookahead if it is of kind `expected`.

        Returns:
            Token: The matched token.

        Raises:
            ScanError: If the lookahead is a lexical error token.
            PlangSyntaxError: If the lookahead is of any other kind.
        """
        tok = self.lookahead
        if tok.kind is expected:
            self.lookahead = self.scanner.next_token()
            self.consumed += 1
            return tok
        self.check_lexical()
        raise PlangSyntaxError(
            f"Expected '{describe(expected)}', found '{describe(tok.kind)}'",
            tok.line,
            tok.start_column,
            found=tok.text,
            expected=describe(expected),
        )

    def parse(self) -> None:
        """Parses a complete program followed by end-of-input."""
        self.program()
        self.match(TokenKind.EOF)
        logger.debug("Parsed program %r (%d tokens)", self.program_name, self.consumed)

    # Grammar rules

    def program(self) -> None:
        self.match(TokenKind.PROGRAM)
        self.program_name = self.match(TokenKind.IDENT).text
        self.match(TokenKind.LBRACE)
        self.declaration_list()
        self.statement_list()
        self.match(TokenKind.RBRACE)

    def declaration_list(self) -> None:
        while self.lookahead.kind in TYPE_NAMES:
            self.match(self.lookahead.kind)
            ident = self.match(TokenKind.IDENT)
            if self.lookahead.kind is not TokenKind.SEMI:
                self.check_lexical()
                raise PlangSyntaxError(
                    f"Expected ';' after declaration of '{ident.text}'",
                    ident.line,
                    ident.end_column + 1,
                )
            self.match(TokenKind.SEMI)

    def statement_list(self) -> None:
        logger.debug("Entering statement_list")
        while self.lookahead.kind not in (TokenKind.RBRACE, TokenKind.EOF):
            logger.debug(
                "Current token: %s (line %d)",
                describe(self.lookahead.kind),
                self.lookahead.line,
            )
            self.statement()
        logger.debug("Exiting statement_list")

    def statement(self) -> None:
        kind = self.lookahead.kind
        with self.nested():
            if kind is TokenKind.IDENT:
                self.assignment_stmt()
            elif kind is TokenKind.IF:
                self.selection_stmt()
            elif kind is TokenKind.WHILE:
                self.iteration_stmt()
            elif kind is TokenKind.LBRACE:
                self.compound_stmt()
            else:
                raise self.error("Unexpected token in statement")

    def assignment_stmt(self) -> None:
        self.match(TokenKind.IDENT)
        self.match(TokenKind.ASSIGN)
        self.expression()
        self.match(TokenKind.SEMI)

    def selection_stmt(self) -> None:
        self.match(TokenKind.IF)
        self.match(TokenKind.LPAREN)
        self.expression()
        self.match(TokenKind.RPAREN)
        self.statement()
        if self.lookahead.kind is TokenKind.ELSE:
            self.match(TokenKind.ELSE)
            self.statement()

    def iteration_stmt(self) -> None:
        self.match(TokenKind.WHILE)
        self.match(TokenKind.LPAREN)
        self.expression()
        self.match(TokenKind.RPAREN)
        self.statement()

    def compound_stmt(self) -> None:
        self.match(TokenKind.LBRACE)
        self.statement_list()
        self.match(TokenKind.RBRACE)

    def expression(self) -> None:
        with self.nested():
            self.additive_expression()
            if self.lookahead.kind in RELATIONAL_OPS:
                logger.debug(
                    "Found relational operator: %s", describe(self.lookahead.kind)
                )
                self.match(self.lookahead.kind)
                self.additive_expression()

    def additive_expression(self) -> None:
        self.term()
        while self.lookahead.kind in ADDITIVE_OPS:
            self.match(self.lookahead.kind)
            self.term()

    def term(self) -> None:
        self.factor()
        while self.lookahead.kind in MULTIPLICATIVE_OPS:
            self.match(self.lookahead.kind)
            self.factor()

    def factor(self) -> None:
        kind = self.lookahead.kind
        if kind is TokenKind.IDENT or kind is TokenKind.NUMBER:
            self.match(kind)
        elif kind is TokenKind.LPAREN:
            self.match(TokenKind.LPAREN)
            self.expression()
            self.match(TokenKind.RPAREN)
        else:
            raise self.error("Unexpected token in factor")


__all__ = ["Parser"]
