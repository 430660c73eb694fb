"""
Renders KSCOPE syntax trees as Graphviz DOT source.

This module defines the `DotEmitter` class, the default backend of the
`Renderer`. Every root handed to `emit_tree` is collected, and `get_output`
draws them all in one `digraph`, using the node names and labels produced by
`collect_graph`.

Output shape:
    digraph ast {
      node [shape=box];
      _0 [label="def"];
      _1 [label="f(x)"];
      _0 -> _1;
    }
"""

from kscope.kscope_ast import ASTNode
from kscope.kscope_graph import GraphListing, collect_graph


def escape_label(label: str) -> str:
    """Escapes backslashes and double quotes for a quoted DOT attribute."""
    return label.replace("\\", "\\\\").replace('"', '\\"')


def listing_to_dot(listing: GraphListing, graph_name: str = "ast") -> str:
    lines = [f"digraph {graph_name} {{", "  node [shape=box];"]
    for name, label in listing.labels.items():
        lines.append(f'  {name} [label="{escape_label(label)}"];')
    for parent, child in listing.edges:
        lines.append(f"  {parent} -> {child};")
    lines.append("}")
    return "\n".join(lines)


class DotEmitter:
    """Emits one Graphviz digraph covering every tree passed to `emit_tree`.

    Attributes:
        roots (list[ASTNode]): The trees collected so far, in emission order.
    """

    def __init__(self) -> None:
        self.roots: list[ASTNode] = []

    def emit_tree(self, node: ASTNode) -> None:
        self.roots.append(node)

    def get_output(self) -> str:
        return listing_to_dot(collect_graph(self.roots))
