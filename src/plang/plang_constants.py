"""
Token kinds and lexical tables for the PLANG teaching language.

This module is the single source of truth shared by the scanner and the parser:

Exports:
    - TokenKind: closed enumeration of every token kind the scanner can produce.
    - TOKEN_DESCRIPTIONS: human-readable name of each kind, used in diagnostics.
    - KEYWORDS: reserved words (case-sensitive) mapped to their kinds.
    - token_hashmap: operator and punctuation lexemes mapped to their kinds,
      consulted by the scanner's longest-match operator rule.
    - TYPE_NAMES, RELATIONAL_OPS, ADDITIVE_OPS, MULTIPLICATIVE_OPS: kind groups
      used by the grammar.

`TOKEN_DESCRIPTIONS` is checked against `TokenKind` when the module is imported,
so adding a kind without a description fails immediately instead of producing
a placeholder name in an error message.
"""

from enum import Enum


class TokenKind(str, Enum):
    # Keywords
    PROGRAM = "PROGRAM"
    INT = "INT"
    FLOAT = "FLOAT"
    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULT = "MULT"
    DIV = "DIV"
    ASSIGN = "ASSIGN"
    LT = "LT"
    GT = "GT"
    LE = "LE"
    GE = "GE"
    EQ = "EQ"
    NE = "NE"
    # Punctuation
    SEMI = "SEMI"
    COMMA = "COMMA"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    # Identifiers and literals
    IDENT = "IDENT"
    NUMBER = "NUMBER"
    # Special
    EOF = "EOF"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


TOKEN_DESCRIPTIONS: dict[TokenKind, str] = {
    TokenKind.PROGRAM: "Program",
    TokenKind.INT: "int",
    TokenKind.FLOAT: "float",
    TokenKind.IF: "if",
    TokenKind.ELSE: "else",
    TokenKind.WHILE: "while",
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.MULT: "*",
    TokenKind.DIV: "/",
    TokenKind.ASSIGN: "=",
    TokenKind.LT: "<",
    TokenKind.GT: ">",
    TokenKind.LE: "<=",
    TokenKind.GE: ">=",
    TokenKind.EQ: "==",
    TokenKind.NE: "!=",
    TokenKind.SEMI: ";",
    TokenKind.COMMA: ",",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.LBRACE: "{",
    TokenKind.RBRACE: "}",
    TokenKind.IDENT: "identifier",
    TokenKind.NUMBER: "number",
    TokenKind.EOF: "end-of-input",
    TokenKind.ERROR: "lexical-error",
}

_missing = set(TokenKind) - set(TOKEN_DESCRIPTIONS)
if _missing:
    raise RuntimeError(
        f"TOKEN_DESCRIPTIONS is missing entries for: {sorted(k.name for k in _missing)}"
    )
del _missing


KEYWORDS: dict[str, TokenKind] = {
    "Program": TokenKind.PROGRAM,
    "int": TokenKind.INT,
    "float": TokenKind.FLOAT,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
}

token_hashmap: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "=": TokenKind.ASSIGN,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "<=": TokenKind.LE,
    ">=": TokenKind.GE,
    "==": TokenKind.EQ,
    "!=": TokenKind.NE,
    ";": TokenKind.SEMI,
    ",": TokenKind.COMMA,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# Deepest combined nesting of statements and parenthesized expressions.
MAX_NESTING_DEPTH = 100

# Longest lexeme in token_hashmap; bounds the operator lookahead.
MAX_OPERATOR_LENGTH = max(len(k) for k in token_hashmap)

TYPE_NAMES: frozenset[TokenKind] = frozenset({TokenKind.INT, TokenKind.FLOAT})

RELATIONAL_OPS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.LT,
        TokenKind.GT,
        TokenKind.LE,
        TokenKind.GE,
        TokenKind.EQ,
        TokenKind.NE,
    }
)

ADDITIVE_OPS: frozenset[TokenKind] = frozenset({TokenKind.PLUS, TokenKind.MINUS})

MULTIPLICATIVE_OPS: frozenset[TokenKind] = frozenset({TokenKind.MULT, TokenKind.DIV})


def describe(kind: TokenKind) -> str:
    """Returns the diagnostic name of a token kind (e.g. `identifier`, `;`)."""
    return TOKEN_DESCRIPTIONS[kind]


__all__ = [
    "ADDITIVE_OPS",
    "KEYWORDS",
    "MAX_NESTING_DEPTH",
    "MAX_OPERATOR_LENGTH",
    "MULTIPLICATIVE_OPS",
    "RELATIONAL_OPS",
    "TOKEN_DESCRIPTIONS",
    "TYPE_NAMES",
    "TokenKind",
    "describe",
    "token_hashmap",
]
