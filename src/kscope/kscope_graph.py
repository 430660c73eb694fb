"""
Builds a node/edge listing from any tree of describable nodes.

A node is describable when it offers `label()` and `children()`, which every
`ASTNode` does. `collect_graph` walks the tree with a FIFO work-list, names each
distinct node object once (`_0`, `_1`, ...) in the order it is discovered, and
records one edge per parent/child reference.

Deduplication is by object identity, not by value: two equal subtrees that are
separate objects are listed separately.

Example:
    >>> listing = collect_graph(Return(NumericLiteral(1.0)))
    >>> listing.labels
    {'_0': 'return', '_1': '1'}
    >>> listing.edges
    [('_0', '_1')]
"""

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, Union


class Describable(Protocol):
    def label(self) -> str: ...  # pragma: no cover

    def children(self) -> Sequence["Describable"]: ...  # pragma: no cover


@dataclass
class GraphListing:
    """Node labels keyed by generated name, plus directed (parent, child) edges."""

    labels: dict[str, str] = field(default_factory=dict)
    edges: list[tuple[str, str]] = field(default_factory=list)


def collect_graph(roots: Union[Describable, Sequence[Describable]]) -> GraphListing:
    """Walks one root or a sequence of roots and returns their combined listing."""
    start = list(roots) if isinstance(roots, Sequence) else [roots]
    pending: deque[Describable] = deque()
    listing = GraphListing()
    names: dict[int, str] = {}

    def name_of(node: Describable) -> str:
        key = id(node)
        if key not in names:
            name = f"_{len(names)}"
            names[key] = name
            listing.labels[name] = node.label()
            pending.append(node)
        return names[key]

    for root in start:
        name_of(root)

    while pending:
        node = pending.popleft()
        parent = names[id(node)]
        for child in node.children():
            listing.edges.append((parent, name_of(child)))

    return listing


__all__ = ["Describable", "GraphListing", "collect_graph"]
