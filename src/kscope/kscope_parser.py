"""
KSCOPE Language Parser

Parses KSCOPE tokens into a typed abstract syntax tree (AST).

This module implements a recursive-descent parser over a `TokenCursor`. Each
grammar production is one method; the cursor provides one token of lookahead
and never consumes a token that does not match.

Grammar
-------
    program      := primary*
    primary      := 'extern' funcDecl
                  | 'def' funcDecl statement
    funcDecl     := IDENTIFIER '(' ( IDENTIFIER ( ',' IDENTIFIER )* )? ')'
    statement    := 'if' '(' expression ')' statement ( 'else' statement )?
                  | 'return' expression
    expression   := relational
    relational   := sum ( REL_OP relational )?
    sum          := mult ( SUM_OP sum )?
    mult         := factor ( MUL_OP mult )?
    factor       := IDENTIFIER callSuffix? | NUMBER | '(' expression ')'
    callSuffix   := '(' ( expression ( ',' expression )* )? ')'

Parser Behavior
---------------
- Every binary layer parses its operand, then on seeing its own operator parses
  the *same* layer again for the right-hand side. All operators are therefore
  right-associative: `1 - 2 - 3` parses as `1 - (2 - 3)`.
- The first error aborts the parse. Errors from the cursor propagate unchanged;
  there is no recovery and no partial tree.

Entry Points
------------
- `parse()`: Parse a full program into a list of top-level declarations.
- `parse_primary()`: Parse one `extern` or `def` declaration.
- `parse_statement()`: Parse one `if`/`return` statement.
- `parse_expression()`: Parse one expression.
- `parse_statement_entrypoint()` / `parse_expr_entrypoint()`: Parse one
  statement or expression and require the input to end there.

Raises
------
UnexpectedTokenError
    Raised when a required token is missing or of the wrong kind.
NestingTooDeepError
    Raised by the entry points when the input nests deeper than the Python
    stack allows (e.g. a long chain of right-associative operators).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from kscope import kscope_constants as K
from kscope.kscope_ast import (
    BinaryNode,
    Conditional,
    Definition,
    Expression,
    Extern,
    FunctionDeclaration,
    Grouped,
    Identifier,
    NumericLiteral,
    Primary,
    Return,
    Statement,
)
from kscope.kscope_cursor import TokenCursor
from kscope.kscope_lexer import Token

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NestingTooDeepError(SyntaxError):
    """Raised when the input nests deeper than the interpreter stack can follow.

    Attributes:
        consumed (int): Number of tokens taken before the parse was abandoned.
    """

    def __init__(self, consumed: int):
        super().__init__(f"Input nested too deeply to parse (after {consumed} tokens)")
        self.consumed = consumed


class Parser:
    """
    KSCOPE Parser Class

    Responsible for transforming a token sequence into `ASTNode` trees.

    Attributes
    ----------
    cursor : TokenCursor
        The single-lookahead reader all productions consume tokens through.

    Methods
    -------
    parse() -> list[Primary]
        Parse a complete program.
    parse_primary() -> Primary
        Parse an `extern` or `def` declaration.
    parse_function_decl() -> FunctionDeclaration
        Parse a function name and its parameter list.
    parse_statement() -> Statement
        Parse an `if` or `return` statement.
    parse_expression() -> Expression
        Parse an expression (the relational layer).
    parse_relational(), parse_sum(), parse_mult() -> Expression
        Parse one precedence layer.
    parse_factor() -> Expression
        Parse an identifier or call, a number, or a parenthesized expression.
    parse_call_suffix() -> list[Expression] | None
        Parse call arguments if a `(` follows an identifier.
    """

    def __init__(self, tokens: Iterable[Token] | TokenCursor) -> None:
        self.cursor: TokenCursor = (
            tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)
        )

    def parse(self) -> list[Primary]:
        """Parse a full KSCOPE program and return its top-level declarations."""
        program: list[Primary] = []
        while not self.cursor.is_at_end():
            node = self._within_depth(self.parse_primary)
            logger.debug("Parsed top-level %s at line %d", node.label(), node.line)
            program.append(node)
        return program

    def parse_statement_entrypoint(self) -> Statement:
        """Parse exactly one statement spanning the whole input."""
        stmt = self._within_depth(self.parse_statement)
        self.cursor.expect_end()
        return stmt

    def parse_expr_entrypoint(self) -> Expression:
        """Parse exactly one expression spanning the whole input."""
        expr = self._within_depth(self.parse_expression)
        self.cursor.expect_end()
        return expr

    def _within_depth(self, production: Callable[[], T]) -> T:
        """Run `production`, reporting stack exhaustion as a NestingTooDeepError."""
        try:
            return production()
        except RecursionError:
            raise NestingTooDeepError(self.cursor.consumed) from None

    # Declarations

    def parse_primary(self) -> Primary:
        """Parse `extern funcDecl` or `def funcDecl statement`."""
        tok = self.cursor.expect_any_of((K.EXTERN, K.DEF))
        decl = self.parse_function_decl()
        if tok.type == K.EXTERN:
            return Extern(decl, line=tok.line, col=tok.col)
        body = self.parse_statement()
        return Definition(decl, body, line=tok.line, col=tok.col)

    def parse_function_decl(self) -> FunctionDeclaration:
        """Parse `name(a, b, ...)`, consuming exactly one closing parenthesis."""
        name_tok = self.cursor.expect(K.IDENT)
        self.cursor.expect(K.LPAREN)
        parameters: list[str] = []

        if self.cursor.accept(K.RPAREN) is None:
            while True:
                parameters.append(self.cursor.expect(K.IDENT).value)
                if self.cursor.accept(K.COMMA) is None:
                    break
            self.cursor.expect(K.RPAREN)

        return FunctionDeclaration(
            name_tok.value, parameters, line=name_tok.line, col=name_tok.col
        )

    # Statements

    def parse_statement(self) -> Statement:
        """Parse an `if` statement with optional `else`, or a `return` statement."""
        tok = self.cursor.expect_any_of((K.IF, K.RETURN))

        if tok.type == K.RETURN:
            return Return(self.parse_expression(), line=tok.line, col=tok.col)

        self.cursor.expect(K.LPAREN)
        condition = self.parse_expression()
        self.cursor.expect(K.RPAREN)

        then_branch = self.parse_statement()
        else_branch = None
        if self.cursor.accept(K.ELSE) is not None:
            else_branch = self.parse_statement()

        return Conditional(
            condition, then_branch, else_branch, line=tok.line, col=tok.col
        )

    # Expressions

    def parse_expression(self) -> Expression:
        return self.parse_relational()

    def parse_relational(self) -> Expression:
        return self._binary_layer(K.REL_OP, self.parse_sum, self.parse_relational)

    def parse_sum(self) -> Expression:
        return self._binary_layer(K.SUM_OP, self.parse_mult, self.parse_sum)

    def parse_mult(self) -> Expression:
        return self._binary_layer(K.MUL_OP, self.parse_factor, self.parse_mult)

    def _binary_layer(
        self,
        op_type: str,
        operand: Callable[[], Expression],
        layer: Callable[[], Expression],
    ) -> Expression:
        """Parse `operand (op_type layer)?`, recursing into `layer` for the right side."""
        left = operand()
        op_tok = self.cursor.accept(op_type)
        if op_tok is None:
            return left
        right = layer()
        return BinaryNode(left, op_tok.value, right, line=op_tok.line, col=op_tok.col)

    def parse_factor(self) -> Expression:
        """Parse an identifier (optionally called), a number, or `( expression )`."""
        tok = self.cursor.expect_any_of((K.IDENT, K.NUMBER, K.LPAREN))

        if tok.type == K.IDENT:
            arguments = self.parse_call_suffix()
            return Identifier(tok.value, arguments, line=tok.line, col=tok.col)

        if tok.type == K.NUMBER:
            return NumericLiteral(tok.value, line=tok.line, col=tok.col)

        inner = self.parse_expression()
        self.cursor.expect(K.RPAREN)
        return Grouped(inner, line=tok.line, col=tok.col)

    def parse_call_suffix(self) -> list[Expression] | None:
        """Parse `( args )` after an identifier; None when no `(` follows."""
        if self.cursor.accept(K.LPAREN) is None:
            return None

        args: list[Expression] = []
        if self.cursor.accept(K.RPAREN) is not None:
            return args

        while True:
            args.append(self.parse_expression())
            if self.cursor.accept(K.COMMA) is None:
                break
        self.cursor.expect(K.RPAREN)
        return args


__all__ = ["NestingTooDeepError", "Parser"]
