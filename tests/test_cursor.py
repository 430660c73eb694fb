import pytest

from kscope.kscope_cursor import TokenCursor, UnexpectedTokenError
from kscope.kscope_lexer import Token, tokenize


def test_accept_matching_kind_consumes() -> None:
    cursor = TokenCursor(tokenize("x 1"))
    tok = cursor.accept("IDENT")
    assert tok is not None and tok.value == "x"
    assert cursor.peek() == Token("NUMBER", 1.0, 1, 3)


def test_failed_accept_leaves_cursor_in_place() -> None:
    cursor = TokenCursor(tokenize("return x"))
    assert cursor.accept("IF") is None
    first = cursor.peek()
    assert cursor.accept("IF") is None
    assert cursor.peek() is first
    assert cursor.consumed == 0
    assert cursor.accept("RETURN") is first


def test_accept_any_of() -> None:
    cursor = TokenCursor(tokenize("if"))
    assert cursor.accept_any_of(("RETURN", "DEF")) is None
    tok = cursor.accept_any_of(["RETURN", "IF"])
    assert tok is not None and tok.type == "IF"
    assert cursor.is_at_end()


def test_accept_at_end_returns_none() -> None:
    cursor = TokenCursor([])
    assert cursor.is_at_end()
    assert cursor.accept("IDENT") is None
    assert cursor.accept_any_of(("IDENT", "NUMBER")) is None


def test_expect_returns_token() -> None:
    cursor = TokenCursor(tokenize("("))
    assert cursor.expect("LPAREN").value == "("
    assert cursor.consumed == 1


def test_expect_mismatch_reports_actual_kind() -> None:
    cursor = TokenCursor(tokenize("x\n  42"))
    cursor.expect("IDENT")
    with pytest.raises(UnexpectedTokenError) as excinfo:
        cursor.expect("RPAREN")
    err = excinfo.value
    assert err.expected == ("RPAREN",)
    assert err.actual == "NUMBER"
    assert err.token == Token("NUMBER", 42.0, 2, 3)
    assert str(err) == "Expected token RPAREN but found NUMBER at line 2, col 3"
    # The offending token is still available.
    assert cursor.expect("NUMBER").value == 42.0


def test_expect_at_end_reports_end_of_input() -> None:
    cursor = TokenCursor(tokenize("f"))
    cursor.expect("IDENT")
    with pytest.raises(UnexpectedTokenError) as excinfo:
        cursor.expect("LPAREN")
    err = excinfo.value
    assert err.actual is None
    assert err.token is None
    assert str(err) == "Expected token LPAREN but found end of input"


def test_expect_any_of_reports_full_expected_set() -> None:
    cursor = TokenCursor(tokenize("def"))
    with pytest.raises(UnexpectedTokenError) as excinfo:
        cursor.expect_any_of(("IF", "RETURN"))
    err = excinfo.value
    assert err.expected == ("IF", "RETURN")
    assert err.actual == "DEF"
    assert str(err).startswith("Expected one of (IF, RETURN) but found DEF")


def test_expect_any_of_at_end() -> None:
    with pytest.raises(UnexpectedTokenError, match="found end of input"):
        TokenCursor([]).expect_any_of(("IDENT", "NUMBER", "LPAREN"))


def test_expect_end() -> None:
    TokenCursor([]).expect_end()
    with pytest.raises(UnexpectedTokenError) as excinfo:
        TokenCursor(tokenize(")")).expect_end()
    assert excinfo.value.expected == ("EOF",)
    assert excinfo.value.actual == "RPAREN"


def test_unexpected_token_error_is_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        TokenCursor([]).expect("IDENT")


def test_cursor_pulls_lazily_from_iterator() -> None:
    pulled: list[Token] = []

    def source():  # type: ignore[no-untyped-def]
        for tok in [Token("IDENT", "a"), Token("IDENT", "b")]:
            pulled.append(tok)
            yield tok

    cursor = TokenCursor(source())
    assert pulled == []
    cursor.peek()
    cursor.peek()
    assert len(pulled) == 1
    cursor.expect("IDENT")
    cursor.expect("IDENT")
    assert cursor.is_at_end()
    assert len(pulled) == 2
