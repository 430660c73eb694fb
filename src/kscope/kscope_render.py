"""
Provides the `Renderer` class and emitter interface for serializing KSCOPE ASTs.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `__init__`,
      `emit_tree` and `get_output`.
    - DotEmitter: Draws the trees as a Graphviz digraph.
    - JsonEmitter: Dumps the trees' dictionary form as JSON.
    - Renderer: Picks the emitter for the requested format and feeds it every root.

Usage:
    The Renderer takes a list of `ASTNode` roots and returns the serialized text.

Example:
    >>> renderer = Renderer("dot")
    >>> dot_source = renderer.render(Parser(tokenize(source)).parse())

Raises:
    ValueError: If the output format is not supported.
    TypeError: If the list contains something other than AST nodes.
"""

from collections.abc import Sequence
from typing import Protocol

from kscope.emitters.dot_emitter import DotEmitter
from kscope.emitters.json_emitter import JsonEmitter
from kscope.kscope_ast import ASTNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all KSCOPE output emitters.

    Methods:
        __init__(): Initializes the emitter.
        emit_tree(node): Adds one root to the output.
        get_output(): Returns the complete serialized text.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def emit_tree(self, node: ASTNode) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""


class Renderer:
    """Dispatches KSCOPE AST roots to the emitter for an output format.

    Attributes:
        emitter (Emitter): The selected emitter instance.
    """

    def __init__(self, fmt: str) -> None:
        """Initializes the renderer with the desired output format.

        Args:
            fmt: The output format name ("dot", "graphviz" or "json"), case-insensitive.

        Raises:
            ValueError: If the format is not supported.
        """
        emitters: dict[str, EmitterType] = {
            "dot": DotEmitter,
            "graphviz": DotEmitter,
            "json": JsonEmitter,
        }
        fmt = fmt.lower()
        if fmt not in emitters:
            raise ValueError(f"Unknown output format: {fmt!r}")
        self.emitter: Emitter = emitters[fmt]()

    def render(self, nodes: Sequence[ASTNode]) -> str:
        """Serializes the given roots.

        Raises:
            TypeError: If any element is not an ASTNode.
        """
        if not all(isinstance(node, ASTNode) for node in nodes):
            raise TypeError("All items to render must be ASTNode instances.")
        for node in nodes:
            self.emitter.emit_tree(node)
        return self.emitter.get_output()


__all__ = ["Emitter", "EmitterType", "Renderer"]
