import pytest
from hypothesis import given
from hypothesis import strategies as st

from pratt.pratt_constants import TokenKind
from pratt.pratt_errors import LexError
from pratt.pratt_lexer import CharacterStream, Lexer, Token, TokenStream, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    assert kinds("+ - * / ^ ! ( )") == [
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.STAR,
        TokenKind.SLASH,
        TokenKind.CARET,
        TokenKind.BANG,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.EOF,
    ]


def test_number_token() -> None:
    tok = Lexer(CharacterStream("123")).next_token()
    assert tok.kind is TokenKind.NUMBER
    assert tok.text == "123"


def test_tokens_without_whitespace() -> None:
    assert [t.text for t in tokenize("(12+3)!")] == ["(", "12", "+", "3", ")", "!", ""]


def test_line_and_column_tracking() -> None:
    toks = tokenize("1 +\n  22")
    assert (toks[0].line, toks[0].col) == (1, 1)
    assert (toks[1].line, toks[1].col) == (1, 3)
    assert (toks[2].line, toks[2].col) == (2, 3)


def test_token_eof() -> None:
    toks = tokenize("   ")
    assert toks == [Token(TokenKind.EOF, "", 1, 4)]


def test_eof_is_repeated_once_exhausted() -> None:
    lexer = Lexer(CharacterStream("7"))
    lexer.next_token()
    assert lexer.next_token().kind is TokenKind.EOF
    assert lexer.next_token().kind is TokenKind.EOF


@pytest.mark.parametrize(
    "source,char,col",
    [
        ("1 % 2", "%", 3),
        ("x", "x", 1),
        ("1.5", ".", 2),
        ("2 + ²", "²", 5),
        ("١٢", "١", 1),
        ("1_000", "_", 2),
    ],
)
def test_invalid_character_raises(source: str, char: str, col: int) -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize(source)
    assert excinfo.value.char == char
    assert excinfo.value.col == col
    assert isinstance(excinfo.value, SyntaxError)


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("a")
    assert stream.advance() == "a"
    assert stream.current() == ""
    with pytest.raises(EOFError):
        stream.advance()


def test_character_stream_take_while() -> None:
    stream = CharacterStream("120 +")
    assert stream.take_while(frozenset("0123456789")) == "120"
    assert stream.location == (1, 4)
    assert stream.take_while(frozenset("0123456789")) == ""
    assert stream.current() == " "


def test_character_stream_tracks_newlines() -> None:
    stream = CharacterStream(" \n\n  1")
    stream.take_while(frozenset(" \n"))
    assert stream.location == (3, 3)
    assert stream.current() == "1"


def test_token_is_immutable() -> None:
    tok = Token(TokenKind.NUMBER, "1")
    with pytest.raises(AttributeError):
        tok.text = "2"  # type: ignore[misc]


@given(st.integers(min_value=0, max_value=10**30))  # type: ignore[misc]
def test_numbers_lex_to_their_decimal_text(n: int) -> None:
    toks = tokenize(str(n))
    assert toks[0] == Token(TokenKind.NUMBER, str(n), 1, 1)
    assert toks[1].kind is TokenKind.EOF


# TokenStream


def test_stream_requires_eof_terminator() -> None:
    with pytest.raises(ValueError):
        TokenStream([Token(TokenKind.NUMBER, "1")])
    with pytest.raises(ValueError):
        TokenStream([])


def test_stream_peek_does_not_advance() -> None:
    stream = TokenStream(tokenize("1 +"))
    assert stream.peek() == stream.peek()
    assert stream.position == 0


def test_stream_next_returns_pre_advance_token() -> None:
    toks = tokenize("1 +")
    stream = TokenStream(toks)
    assert stream.next() == toks[0]
    assert stream.position == 1
    assert stream.peek() == toks[1]


def test_stream_exhaustion_is_none() -> None:
    stream = TokenStream([Token(TokenKind.EOF)])
    assert stream.next() == Token(TokenKind.EOF)
    assert stream.peek() is None
    assert stream.next() is None
    assert stream.position == 1


@given(st.lists(st.sampled_from(list(TokenKind)), max_size=20), st.integers(0, 30))  # type: ignore[misc]
def test_stream_position_is_monotonic(token_kinds: list[TokenKind], steps: int) -> None:
    stream = TokenStream([Token(k) for k in token_kinds] + [Token(TokenKind.EOF)])
    last = stream.position
    for _ in range(steps):
        stream.peek()
        assert stream.position == last
        stream.next()
        assert stream.position >= last
        last = stream.position
    assert stream.position <= len(stream)
