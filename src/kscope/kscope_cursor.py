"""
Single-lookahead reader over a KSCOPE token sequence.

The parser never indexes into the token list directly; every production goes
through a `TokenCursor`, which can only look at the next token and either take it
or leave it in place.

Classes:
    UnexpectedTokenError: Raised when a required token kind is missing.
    TokenCursor: Wraps any iterable of tokens with one token of lookahead.

Example:
    >>> cursor = TokenCursor(tokenize("return x"))
    >>> cursor.accept("IF") is None
    True
    >>> cursor.expect_any_of(("IF", "RETURN"))
    Token(RETURN, return)
"""

from collections.abc import Iterable, Iterator

from kscope.kscope_constants import EOF
from kscope.kscope_lexer import Token


class UnexpectedTokenError(SyntaxError):
    """Raised when the cursor cannot supply a required token kind.

    Attributes:
        expected (tuple[str, ...]): Every token kind that would have been accepted.
        actual (str | None): The kind that was found, or None at end of input.
        token (Token | None): The offending token, or None at end of input.
    """

    def __init__(self, expected: Iterable[str], token: Token | None):
        self.expected: tuple[str, ...] = tuple(expected)
        self.token = token
        self.actual: str | None = token.type if token is not None else None
        super().__init__(self._describe())

    def _describe(self) -> str:
        if len(self.expected) == 1:
            wanted = f"Expected token {self.expected[0]}"
        else:
            wanted = f"Expected one of ({', '.join(self.expected)})"
        if self.token is None:
            return f"{wanted} but found end of input"
        message = f"{wanted} but found {self.actual}"
        if self.token.line:
            message += f" at line {self.token.line}, col {self.token.col}"
        return message


class TokenCursor:
    """Peekable token stream used by the KSCOPE parser.

    No method consumes a token unless it matches, so a failed `accept` can be
    followed by another attempt with a different kind.

    Attributes:
        consumed (int): Number of tokens taken from the stream so far.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Token | None = None
        self._exhausted = False
        self.consumed = 0

    def peek(self) -> Token | None:
        """Returns the next token without consuming it, or None at end of input."""
        if self._lookahead is None and not self._exhausted:
            self._lookahead = next(self._tokens, None)
            self._exhausted = self._lookahead is None
        return self._lookahead

    def is_at_end(self) -> bool:
        return self.peek() is None

    def _take(self) -> Token:
        tok = self._lookahead
        assert tok is not None  # for mypy
        self._lookahead = None
        self.consumed += 1
        return tok

    def accept(self, kind: str) -> Token | None:
        """Consumes and returns the next token if it is of `kind`, else returns None."""
        tok = self.peek()
        if tok is not None and tok.type == kind:
            return self._take()
        return None

    def accept_any_of(self, kinds: Iterable[str]) -> Token | None:
        """Consumes and returns the next token if its kind is one of `kinds`."""
        tok = self.peek()
        if tok is not None and tok.type in tuple(kinds):
            return self._take()
        return None

    def expect(self, kind: str) -> Token:
        """Consumes the next token, which must be of `kind`.

        Raises:
            UnexpectedTokenError: If the next token is of another kind or the input is exhausted.
        """
        tok = self.accept(kind)
        if tok is None:
            raise UnexpectedTokenError((kind,), self.peek())
        return tok

    def expect_any_of(self, kinds: Iterable[str]) -> Token:
        """Consumes the next token, whose kind must be one of `kinds`.

        Raises:
            UnexpectedTokenError: Reporting the full set of acceptable kinds.
        """
        kinds = tuple(kinds)
        tok = self.accept_any_of(kinds)
        if tok is None:
            raise UnexpectedTokenError(kinds, self.peek())
        return tok

    def expect_end(self) -> None:
        """Requires the token stream to be exhausted.

        Raises:
            UnexpectedTokenError: With `EOF` as the expected kind if tokens remain.
        """
        if not self.is_at_end():
            raise UnexpectedTokenError((EOF,), self.peek())


__all__ = ["TokenCursor", "UnexpectedTokenError"]
