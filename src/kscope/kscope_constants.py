"""
Token kinds and lookup tables shared by the KSCOPE lexer and parser.

The lexer uses these tables to classify characters and finished words; the
parser uses the kind names and operator groups to drive its productions.

Token kinds are plain strings so they read naturally in error messages and
in test expectations (e.g. ``Token("IDENT", "x")``).
"""

# Token kinds
IDENT = "IDENT"
NUMBER = "NUMBER"

DEF = "DEF"
EXTERN = "EXTERN"
IF = "IF"
THEN = "THEN"
ELSE = "ELSE"
RETURN = "RETURN"

LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"

SUM_OP = "SUM_OP"
MUL_OP = "MUL_OP"
REL_OP = "REL_OP"
ASSIGN = "ASSIGN"

# Pseudo-kind reported when the parser requires the input to be exhausted.
EOF = "EOF"

# Keywords are matched case-sensitively against a finished identifier.
keyword_hashmap: dict[str, str] = {
    "def": DEF,
    "extern": EXTERN,
    "if": IF,
    "then": THEN,
    "else": ELSE,
    "return": RETURN,
}

punctuation_hashmap: dict[str, str] = {
    "(": LPAREN,
    ")": RPAREN,
    ",": COMMA,
}

binary_operator_hashmap: dict[str, str] = {
    "+": SUM_OP,
    "-": SUM_OP,
    "*": MUL_OP,
    "/": MUL_OP,
}

# Relational operator sub-kinds, by symbol.
LT = "<"
LE = "<="
EQ = "=="
GT = ">"
GE = ">="

# Second character accepted after '=' and the operator it completes.
after_equals_hashmap: dict[str, str] = {
    "=": EQ,
    "<": LE,
    ">": GE,
}

__all__ = [
    "ASSIGN",
    "COMMA",
    "DEF",
    "ELSE",
    "EOF",
    "EQ",
    "EXTERN",
    "GE",
    "GT",
    "IDENT",
    "IF",
    "LE",
    "LPAREN",
    "LT",
    "MUL_OP",
    "NUMBER",
    "REL_OP",
    "RETURN",
    "RPAREN",
    "SUM_OP",
    "THEN",
    "after_equals_hashmap",
    "binary_operator_hashmap",
    "keyword_hashmap",
    "punctuation_hashmap",
]
