"""
Lexical analyzer for the KSCOPE toy language.

This module converts raw source text into a sequence of tokens using an explicit
finite-state machine that reads one character at a time.

Classes:
    CharacterStream: Character reader with line/column tracking and a single-slot pushback buffer.
    Token: Represents a single token with kind, payload, and source location.
    ScannerState: The states of the scanning automaton.
    LexError: Raised when the input cannot be tokenized.
    Lexer: Converts a CharacterStream into Token objects.

Features:
    - Skips whitespace between tokens
    - Recognizes:
        * Identifiers and the keywords `def`, `extern`, `if`, `then`, `else`, `return`
        * Numbers (`12`, `12.5`), always carried as floats
        * Punctuation `(`, `)`, `,`
        * Binary operators `+ - * /`
        * Relational operators `< <= == > >=` and the assignment token `=`
    - When a character ends the token being built it is pushed back and re-read
      by the next call, so at most one character is ever un-consumed.

Raises:
    LexError: On an unrecognized character, a `.` not followed by a digit, or a
        numeric literal that cannot be converted to a finite float.

Example:
    >>> tokenize("f(x) >= 2")
    [Token(IDENT, f), Token(LPAREN, (), Token(IDENT, x), Token(RPAREN, )), Token(REL_OP, >=), Token(NUMBER, 2.0)]

Exports:
    - CharacterStream
    - LexError
    - Lexer
    - ScannerState
    - Token
    - tokenize
"""

import logging
import math
from collections.abc import Iterator
from enum import Enum
from typing import Any

from kscope import kscope_constants as K

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Besides forward reading, the stream can take back exactly one character. The
    lexer uses this when a character terminates the token being accumulated: the
    character is handed back and becomes the first character of the next read.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Line of the next unread source character (1-indexed).
        column (int): Column of the next unread source character (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        """
        Initializes the character stream.

        Args:
            source (str): The input source code.
            position (int, optional): Starting position index. Defaults to 0.
            line (int, optional): Starting line number. Defaults to 1.
            column (int, optional): Starting column number. Defaults to 1.
        """
        self.source = source
        self.position = position
        self.line = line
        self.column = column
        self._pending: tuple[str, int, int] | None = None

    def location(self) -> tuple[int, int]:
        """Returns the (line, column) of the character the next `next()` call will return."""
        if self._pending is not None:
            return self._pending[1], self._pending[2]
        return self.line, self.column

    def next(self) -> str:
        """
        Consumes and returns the next character, preferring a pushed-back one.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self._pending is not None:
            char = self._pending[0]
            self._pending = None
            return char
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def push_back(self, char: str, line: int, column: int) -> None:
        """
        Restores one character so that the next `next()` call returns it again.

        Args:
            char (str): The character to restore.
            line (int): Line where the character was read.
            column (int): Column where the character was read.

        Raises:
            RuntimeError: If a pushed-back character is still waiting to be read.
        """
        if self._pending is not None:
            raise RuntimeError(
                f"Pushback slot already holds {self._pending[0]!r}; cannot push back {char!r}"
            )
        self._pending = (char, line, column)

    def peek(self) -> str:
        """Returns the next character without consuming it, or an empty string at EOF."""
        if self._pending is not None:
            return self._pending[0]
        if self.position >= len(self.source):
            return ""
        return self.source[self.position]

    def end_of_file(self) -> bool:
        """Checks whether every character, including a pushed-back one, has been consumed."""
        return self._pending is None and self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the KSCOPE language.

    Tokens are immutable once created.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'NUMBER', 'REL_OP').
        value (Any): The payload: identifier text, float value, operator symbol,
            or the literal text for keywords and punctuation.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_: str, value: Any, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class ScannerState(Enum):
    START = 0
    IN_IDENTIFIER = 1
    IN_NUMBER = 2
    IN_NUMBER_AFTER_DOT = 3
    IN_FLOAT = 4
    AFTER_GREATER_THAN = 5
    AFTER_LESS_THAN = 6
    AFTER_EQUALS = 7


class LexError(SyntaxError):
    """Raised when the scanner meets input it cannot turn into a token.

    Attributes:
        reason (str): Human-readable description of the failure.
        line (int): Line where the offending character or literal starts.
        col (int): Column where the offending character or literal starts.
    """

    def __init__(self, reason: str, line: int = 0, col: int = 0):
        super().__init__(f"{reason} at line {line}, col {col}")
        self.reason = reason
        self.line = line
        self.col = col


class Lexer:
    """Finite-state lexical analyzer for the KSCOPE language.

    Each call to `next_token` starts in `ScannerState.START` and feeds characters
    through the state machine until exactly one token is complete, or the input
    runs out.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok is None:
                return
            yield tok

    def next_token(self) -> Token | None:
        """Scans and returns the next Token, or None once the input is exhausted.

        Raises:
            LexError: If the input at the current position is not a valid token.
        """
        state = ScannerState.START
        text = ""
        line, col = self.stream.location()

        while not self.stream.end_of_file():
            ch_line, ch_col = self.stream.location()
            ch = self.stream.next()

            if state is ScannerState.START:
                if ch.isspace():
                    continue
                line, col = ch_line, ch_col
                if ch.isalpha():
                    text = ch
                    state = ScannerState.IN_IDENTIFIER
                elif ch.isdigit():
                    text = ch
                    state = ScannerState.IN_NUMBER
                elif ch in K.punctuation_hashmap:
                    return Token(K.punctuation_hashmap[ch], ch, line, col)
                elif ch in K.binary_operator_hashmap:
                    return Token(K.binary_operator_hashmap[ch], ch, line, col)
                elif ch == ">":
                    state = ScannerState.AFTER_GREATER_THAN
                elif ch == "<":
                    state = ScannerState.AFTER_LESS_THAN
                elif ch == "=":
                    state = ScannerState.AFTER_EQUALS
                else:
                    raise LexError(f"Unrecognized character {ch!r}", line, col)

            elif state is ScannerState.IN_IDENTIFIER:
                if ch.isalnum():
                    text += ch
                else:
                    self.stream.push_back(ch, ch_line, ch_col)
                    return self._word(text, line, col)

            elif state is ScannerState.IN_NUMBER:
                if ch.isdigit():
                    text += ch
                elif ch == ".":
                    text += ch
                    state = ScannerState.IN_NUMBER_AFTER_DOT
                else:
                    self.stream.push_back(ch, ch_line, ch_col)
                    return self._number(text, line, col)

            elif state is ScannerState.IN_NUMBER_AFTER_DOT:
                if not ch.isdigit():
                    raise LexError(
                        f"Invalid float {text!r}: expected digit after '.', got {ch!r}",
                        line,
                        col,
                    )
                text += ch
                state = ScannerState.IN_FLOAT

            elif state is ScannerState.IN_FLOAT:
                if ch.isdigit():
                    text += ch
                else:
                    self.stream.push_back(ch, ch_line, ch_col)
                    return self._number(text, line, col)

            elif state is ScannerState.AFTER_GREATER_THAN:
                if ch == "=":
                    return Token(K.REL_OP, K.GE, line, col)
                self.stream.push_back(ch, ch_line, ch_col)
                return Token(K.REL_OP, K.GT, line, col)

            elif state is ScannerState.AFTER_LESS_THAN:
                if ch == "=":
                    return Token(K.REL_OP, K.LE, line, col)
                self.stream.push_back(ch, ch_line, ch_col)
                return Token(K.REL_OP, K.LT, line, col)

            elif state is ScannerState.AFTER_EQUALS:
                if ch in K.after_equals_hashmap:
                    return Token(K.REL_OP, K.after_equals_hashmap[ch], line, col)
                self.stream.push_back(ch, ch_line, ch_col)
                return Token(K.ASSIGN, "=", line, col)

        return self._finish(state, text, line, col)

    def _finish(self, state: ScannerState, text: str, line: int, col: int) -> Token | None:
        """Completes whatever token is in progress when the input runs out."""
        if state is ScannerState.START:
            return None
        if state is ScannerState.IN_IDENTIFIER:
            return self._word(text, line, col)
        if state in (ScannerState.IN_NUMBER, ScannerState.IN_FLOAT):
            return self._number(text, line, col)
        if state is ScannerState.IN_NUMBER_AFTER_DOT:
            raise LexError(
                f"Invalid float {text!r}: expected digit after '.', got end of input",
                line,
                col,
            )
        if state is ScannerState.AFTER_GREATER_THAN:
            return Token(K.REL_OP, K.GT, line, col)
        if state is ScannerState.AFTER_LESS_THAN:
            return Token(K.REL_OP, K.LT, line, col)
        return Token(K.ASSIGN, "=", line, col)

    @staticmethod
    def _word(text: str, line: int, col: int) -> Token:
        if text in K.keyword_hashmap:
            return Token(K.keyword_hashmap[text], text, line, col)
        return Token(K.IDENT, text, line, col)

    @staticmethod
    def _number(text: str, line: int, col: int) -> Token:
        try:
            value = float(text)
        except ValueError:
            raise LexError(f"Invalid numeric literal {text!r}", line, col) from None
        if math.isinf(value):
            raise LexError(f"Invalid numeric literal {text!r}: too large", line, col)
        return Token(K.NUMBER, value, line, col)


def tokenize(source: str) -> list[Token]:
    """Scans the whole source text and returns its tokens in order.

    Raises:
        LexError: If any part of the source is not a valid token.
    """
    tokens = list(Lexer(CharacterStream(source)))
    logger.debug("Scanned %d token(s) from %d character(s)", len(tokens), len(source))
    return tokens


__all__ = ["CharacterStream", "LexError", "Lexer", "ScannerState", "Token", "tokenize"]
