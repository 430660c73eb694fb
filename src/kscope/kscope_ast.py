"""
Defines the abstract syntax tree (AST) node classes for the KSCOPE toy language.

Class hierarchy:
    ASTNode
        Expression
            BinaryNode       `left <op> right`
            Grouped          a parenthesized sub-expression
            Terminal
                Identifier       a name, optionally followed by call arguments
                NumericLiteral   a number
        Statement
            Conditional      `if (cond) stmt [else stmt]`
            Return           `return expr`
        FunctionDeclaration  `name(param, ...)`
        Primary
            Extern           `extern name(...)`
            Definition       `def name(...) stmt`

Every node can describe itself to a visualizer through two methods:
    label(): A short display string.
    children(): The node's immediate child nodes, in source order.

Nodes own their children exclusively and are never mutated once the parser has
built them, so the tree is strict: no sharing, no cycles.

Each node also tracks:
    line (int): Source line of the token that starts the construct.
    col (int): Source column of the token that starts the construct.

Example:
    node = BinaryNode(NumericLiteral(1.0), "+", Identifier("x"))
"""

from typing import Any, TypedDict


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Only `kind`, `line` and `col` are present on every node; the remaining
    fields depend on the node's kind.
    """

    kind: str
    line: int
    col: int
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    inner: "ASTDict"
    name: str
    arguments: list["ASTDict"] | None
    value: Any
    condition: "ASTDict"
    then_branch: "ASTDict"
    else_branch: "ASTDict | None"
    parameters: list[str]
    decl: "ASTDict"
    body: "ASTDict"


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ASTNode:
    """
    Base class for every node in the KSCOPE syntax tree.

    Subclasses set `kind` and implement `label`, `children` and `_fields`. The
    base class derives equality, `repr` and dictionary conversion from those.

    Attributes:
        kind (str): The type of node (e.g. "binary", "identifier", "if").
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
    """

    kind = "node"

    def __init__(self, line: int = 0, col: int = 0):
        self.line = line
        self.col = col

    def label(self) -> str:
        """Returns the short display label used when drawing the tree."""
        raise NotImplementedError(f"{type(self).__name__} does not define a label")

    def children(self) -> list["ASTNode"]:
        """Returns the node's immediate children, in source order."""
        return []

    def _fields(self) -> dict[str, Any]:
        return {}

    def __repr__(self) -> str:
        parts = [f"{k}={v!r}" for k, v in self._fields().items()]
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return (
            self.line == other.line
            and self.col == other.col
            and self._fields() == other._fields()
        )

    def to_dict(self) -> ASTDict:
        """Converts the node and all of its descendants into nested dictionaries."""
        result: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for key, val in self._fields().items():
            if isinstance(val, ASTNode):
                val = val.to_dict()
            elif isinstance(val, list):
                val = [v.to_dict() if isinstance(v, ASTNode) else v for v in val]
            result[key] = val
        return result  # type: ignore[return-value]


class Expression(ASTNode):
    """Base class for nodes produced by the expression grammar."""


class BinaryNode(Expression):
    """A binary operation. `operator` is the operator's symbol, e.g. '+' or '<='."""

    kind = "binary"

    def __init__(self, left: Expression, operator: str, right: Expression, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.left = left
        self.operator = operator
        self.right = right

    def label(self) -> str:
        return self.operator

    def children(self) -> list[ASTNode]:
        return [self.left, self.right]

    def _fields(self) -> dict[str, Any]:
        return {"left": self.left, "operator": self.operator, "right": self.right}


class Grouped(Expression):
    kind = "grouped"

    def __init__(self, inner: Expression, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.inner = inner

    def label(self) -> str:
        return "( )"

    def children(self) -> list[ASTNode]:
        return [self.inner]

    def _fields(self) -> dict[str, Any]:
        return {"inner": self.inner}


class Terminal(Expression):
    """Base class for leaf expressions."""


class Identifier(Terminal):
    """
    A reference to a name, or a call when `arguments` is a list.

    Args:
        name (str): The identifier text.
        arguments (list[Expression] | None): Call arguments in source order, an
            empty list for `f()`, or None for a bare reference.
    """

    kind = "identifier"

    def __init__(self, name: str, arguments: list[Expression] | None = None, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name
        self.arguments = arguments

    @property
    def is_call(self) -> bool:
        return self.arguments is not None

    def label(self) -> str:
        return f"Call: {self.name}" if self.is_call else f"Id: {self.name}"

    def children(self) -> list[ASTNode]:
        return list(self.arguments or [])

    def _fields(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


class NumericLiteral(Terminal):
    kind = "number"

    def __init__(self, value: float, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.value = value

    def label(self) -> str:
        return _format_number(self.value)

    def _fields(self) -> dict[str, Any]:
        return {"value": self.value}


class Statement(ASTNode):
    """Base class for `if` and `return` statements."""


class Conditional(Statement):
    """`if (condition) then_branch [else else_branch]`; `else_branch` is None when absent."""

    kind = "if"

    def __init__(
        self,
        condition: Expression,
        then_branch: Statement,
        else_branch: Statement | None = None,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def label(self) -> str:
        return "if"

    def children(self) -> list[ASTNode]:
        nodes: list[ASTNode] = [self.condition, self.then_branch]
        if self.else_branch is not None:
            nodes.append(self.else_branch)
        return nodes

    def _fields(self) -> dict[str, Any]:
        return {
            "condition": self.condition,
            "then_branch": self.then_branch,
            "else_branch": self.else_branch,
        }


class Return(Statement):
    kind = "return"

    def __init__(self, value: Expression, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.value = value

    def label(self) -> str:
        return "return"

    def children(self) -> list[ASTNode]:
        return [self.value]

    def _fields(self) -> dict[str, Any]:
        return {"value": self.value}


class FunctionDeclaration(ASTNode):
    """A function's name and parameter names, shared by `extern` and `def`."""

    kind = "func_decl"

    def __init__(self, name: str, parameters: list[str] | None = None, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name
        self.parameters: list[str] = parameters or []

    def label(self) -> str:
        return f"{self.name}({', '.join(self.parameters)})"

    def _fields(self) -> dict[str, Any]:
        return {"name": self.name, "parameters": self.parameters}


class Primary(ASTNode):
    """Base class for top-level declarations."""


class Extern(Primary):
    kind = "extern"

    def __init__(self, decl: FunctionDeclaration, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.decl = decl

    def label(self) -> str:
        return "extern"

    def children(self) -> list[ASTNode]:
        return [self.decl]

    def _fields(self) -> dict[str, Any]:
        return {"decl": self.decl}


class Definition(Primary):
    kind = "def"

    def __init__(self, decl: FunctionDeclaration, body: Statement, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.decl = decl
        self.body = body

    def label(self) -> str:
        return "def"

    def children(self) -> list[ASTNode]:
        return [self.decl, self.body]

    def _fields(self) -> dict[str, Any]:
        return {"decl": self.decl, "body": self.body}


__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryNode",
    "Conditional",
    "Definition",
    "Expression",
    "Extern",
    "FunctionDeclaration",
    "Grouped",
    "Identifier",
    "NumericLiteral",
    "Primary",
    "Return",
    "Statement",
    "Terminal",
]
