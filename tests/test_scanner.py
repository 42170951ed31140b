import pytest
from hypothesis import given
from hypothesis import strategies as st

from plang.plang_constants import TokenKind
from plang.plang_scanner import CharacterStream, Scanner, Token, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in tokenize(source)]


def test_assignment_token_sequence() -> None:
    assert tokenize("x12 = 3.5e-2;") == [
        Token(TokenKind.IDENT, "x12", 1, 1, 3),
        Token(TokenKind.ASSIGN, "=", 1, 5, 5),
        Token(TokenKind.NUMBER, "3.5e-2", 1, 7, 12),
        Token(TokenKind.SEMI, ";", 1, 13, 13),
        Token(TokenKind.EOF, "", 1, 14, 14),
    ]


def test_keywords_are_case_sensitive() -> None:
    assert kinds("program Program INT int float if else while whilex") == [
        TokenKind.IDENT,
        TokenKind.PROGRAM,
        TokenKind.IDENT,
        TokenKind.INT,
        TokenKind.FLOAT,
        TokenKind.IF,
        TokenKind.ELSE,
        TokenKind.WHILE,
        TokenKind.IDENT,
        TokenKind.EOF,
    ]


def test_operators_use_longest_match() -> None:
    assert kinds("<= >= == != < > = <<= ===") == [
        TokenKind.LE,
        TokenKind.GE,
        TokenKind.EQ,
        TokenKind.NE,
        TokenKind.LT,
        TokenKind.GT,
        TokenKind.ASSIGN,
        TokenKind.LT,
        TokenKind.LE,
        TokenKind.EQ,
        TokenKind.ASSIGN,
        TokenKind.EOF,
    ]


def test_single_char_tokens() -> None:
    assert kinds("+-*/;,(){}") == [
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.MULT,
        TokenKind.DIV,
        TokenKind.SEMI,
        TokenKind.COMMA,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.EOF,
    ]


def test_two_char_operator_span() -> None:
    tok = tokenize("a <= b")[1]
    assert (tok.kind, tok.start_column, tok.end_column) == (TokenKind.LE, 3, 4)


@pytest.mark.parametrize(
    "source", ["0", "42", "3.25", "1e10", "1E+10", "6.02e23", "9.9e-9"]
)  # type: ignore[misc]
def test_number_literals(source: str) -> None:
    tok = tokenize(source)[0]
    assert tok.kind is TokenKind.NUMBER
    assert tok.text == source
    assert tok.end_column == len(source)


@pytest.mark.parametrize("source", ["3.", "3e", "3e+", "12.5E-"])  # type: ignore[misc]
def test_malformed_numbers_are_error_tokens(source: str) -> None:
    tok = tokenize(source)[0]
    assert tok.kind is TokenKind.ERROR
    assert tok.text == source
    assert tok.message == "Malformed number"


def test_dot_without_fraction_stops_the_number() -> None:
    toks = tokenize("3.e5")
    assert toks[0].kind is TokenKind.ERROR
    assert toks[0].text == "3."
    assert toks[1] == Token(TokenKind.IDENT, "e5", 1, 3, 4)


def test_bang_without_equals_is_lexical_error() -> None:
    toks = tokenize("!x")
    assert toks[0].kind is TokenKind.ERROR
    assert toks[0].text == "!"
    assert toks[0].message == "Expected '=' after '!'"
    assert toks[1].kind is TokenKind.IDENT


@pytest.mark.parametrize("source", ["@", "$", "~", ".", "é", "_"])  # type: ignore[misc]
def test_unrecognized_character(source: str) -> None:
    tok = tokenize(source)[0]
    assert tok.kind is TokenKind.ERROR
    assert tok.text == source
    assert tok.message == "Unrecognized character"
    assert (tok.start_column, tok.end_column) == (1, 1)


def test_unclosed_comment_reports_start_line() -> None:
    toks = tokenize("x\n\n  /* abc\n def")
    assert toks[1].kind is TokenKind.ERROR
    assert toks[1].message == "Unclosed comment"
    assert toks[1].text == "/*"
    assert (toks[1].line, toks[1].start_column) == (3, 3)
    assert toks[2].kind is TokenKind.EOF


def test_unclosed_comment_alone() -> None:
    tok = tokenize("/* abc")[0]
    assert tok.kind is TokenKind.ERROR
    assert "comment" in (tok.message or "").lower()
    assert tok.line == 1


def test_comments_are_skipped() -> None:
    toks = tokenize("/* one */ a /* two\n lines */ b /**/c")
    assert [t.text for t in toks] == ["a", "b", "c", ""]
    assert toks[1].line == 2
    assert toks[2].start_column == 17


def test_whitespace_and_comments_only() -> None:
    tok = tokenize("  \n/* c */\r\n\t")[0]
    assert tok.kind is TokenKind.EOF
    assert (tok.line, tok.start_column) == (3, 2)


@pytest.mark.parametrize(
    "source,line",
    [
        ("a\nb", 2),
        ("a\r\nb", 2),
        ("a\rb", 2),
        ("a\n\rb", 3),
        ("a\r\n\nb", 3),
        ("a\r\n\r\nb", 3),
    ],
)  # type: ignore[misc]
def test_line_endings_count_once(source: str, line: int) -> None:
    tok = tokenize(source)[1]
    assert tok.text == "b"
    assert (tok.line, tok.start_column) == (line, 1)


def test_eof_is_idempotent() -> None:
    scanner = Scanner.from_source("x")
    assert scanner.next_token().kind is TokenKind.IDENT
    eofs = [scanner.next_token() for _ in range(3)]
    assert all(t == Token(TokenKind.EOF, "", 1, 2, 2) for t in eofs)
    assert scanner.stream.position == 1


def test_eof_on_empty_input() -> None:
    assert tokenize("") == [Token(TokenKind.EOF, "", 1, 1, 1)]


def test_reset_starts_over() -> None:
    scanner = Scanner.from_source("a\nb")
    list(scanner)
    scanner.reset("c")
    assert scanner.next_token() == Token(TokenKind.IDENT, "c", 1, 1, 1)


def test_iteration_stops_after_eof() -> None:
    toks = list(Scanner(CharacterStream("a b")))
    assert [t.kind for t in toks] == [TokenKind.IDENT, TokenKind.IDENT, TokenKind.EOF]


def test_token_is_immutable() -> None:
    tok = Token(TokenKind.NUMBER, "42", 1, 1, 2)
    with pytest.raises(AttributeError):
        tok.text = "43"  # type: ignore[misc]
    assert repr(tok) == "Token(NUMBER, '42', 1:1-2)"
    assert {tok, Token(TokenKind.NUMBER, "42", 1, 1, 2)} == {tok}


def test_character_stream_treats_crlf_as_one_step() -> None:
    stream = CharacterStream("\r\nx")
    assert stream.next() == "\r\n"
    assert (stream.line, stream.column, stream.position) == (2, 1, 2)
    assert stream.peek() == "x"
    assert stream.peek(5) == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError, match="past end of source"):
        stream.next()


@given(st.text(max_size=200))  # type: ignore[misc]
def test_scanner_terminates_without_raising(source: str) -> None:
    toks = tokenize(source)
    assert toks[-1].kind is TokenKind.EOF
    assert all(t.kind is not TokenKind.EOF for t in toks[:-1])
    assert len(toks) <= len(source) + 1


comments = st.text(alphabet="ab */\t\r\n", max_size=20).filter(
    lambda body: "*/" not in body
).map(lambda body: "/*" + body + "*/")


@given(
    st.lists(
        st.one_of(
            st.sampled_from([" ", "\t", "\r", "\n", "\r\n", "/* x\r\n y */"]),
            comments,
        ),
        max_size=30,
    )
)  # type: ignore[misc]
def test_whitespace_and_comments_reach_trailing_line(chunks: list[str]) -> None:
    source = "".join(chunks)
    normalized = source.replace("\r\n", "\n")
    expected_line = 1 + normalized.count("\n") + normalized.count("\r")
    tok = tokenize(source)[0]
    assert tok.kind is TokenKind.EOF
    assert tok.line == expected_line


@given(
    st.lists(
        st.sampled_from(["a1", "42", "<=", "(", "}", "x", "7.5"]), min_size=1, max_size=20
    )
)  # type: ignore[misc]
def test_token_columns_follow_the_source(parts: list[str]) -> None:
    source = " ".join(parts)
    toks = tokenize(source)[:-1]
    assert [t.text for t in toks] == parts
    for tok in toks:
        assert source[tok.start_column - 1 : tok.end_column] == tok.text
