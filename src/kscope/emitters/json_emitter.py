"""
Renders KSCOPE syntax trees as JSON, using each node's `to_dict()` form.
"""

import json

from kscope.kscope_ast import ASTDict, ASTNode


class JsonEmitter:
    """Emits a JSON array holding the dictionary form of every emitted tree."""

    def __init__(self, indent: int = 2) -> None:
        self.trees: list[ASTDict] = []
        self.indent = indent

    def emit_tree(self, node: ASTNode) -> None:
        self.trees.append(node.to_dict())

    def get_output(self) -> str:
        return json.dumps(self.trees, indent=self.indent)
