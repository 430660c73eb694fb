from hypothesis import given
from hypothesis import strategies as st

from kscope.kscope_ast import (
    BinaryNode,
    Conditional,
    Definition,
    FunctionDeclaration,
    Identifier,
    NumericLiteral,
    Return,
)
from kscope.kscope_graph import GraphListing, collect_graph
from kscope.kscope_lexer import tokenize
from kscope.kscope_parser import Parser


def test_single_leaf() -> None:
    listing = collect_graph(NumericLiteral(7.0))
    assert listing == GraphListing(labels={"_0": "7"}, edges=[])


def test_names_follow_discovery_order() -> None:
    tree = BinaryNode(Identifier("a"), "+", BinaryNode(NumericLiteral(1.0), "*", Identifier("b")))
    listing = collect_graph(tree)
    assert listing.labels == {
        "_0": "+",
        "_1": "Id: a",
        "_2": "*",
        "_3": "1",
        "_4": "Id: b",
    }
    assert listing.edges == [("_0", "_1"), ("_0", "_2"), ("_2", "_3"), ("_2", "_4")]


def test_full_definition() -> None:
    (program,) = Parser(tokenize("def f(x) if (x) return 1 else return f(x)")).parse()
    listing = collect_graph(program)
    assert list(listing.labels.values()) == [
        "def",
        "f(x)",
        "if",
        "Id: x",
        "return",
        "return",
        "1",
        "Call: f",
        "Id: x",
    ]
    assert ("_0", "_1") in listing.edges
    assert ("_7", "_8") in listing.edges
    assert len(listing.edges) == len(listing.labels) - 1


def test_shared_node_is_named_once() -> None:
    shared = NumericLiteral(1.0)
    tree = BinaryNode(shared, "+", shared)
    listing = collect_graph(tree)
    assert listing.labels == {"_0": "+", "_1": "1"}
    assert listing.edges == [("_0", "_1"), ("_0", "_1")]


def test_equal_but_distinct_nodes_are_separate() -> None:
    tree = BinaryNode(NumericLiteral(1.0), "+", NumericLiteral(1.0))
    listing = collect_graph(tree)
    assert len(listing.labels) == 3


def test_multiple_roots_share_one_namespace() -> None:
    roots = [
        Definition(FunctionDeclaration("f"), Return(NumericLiteral(1.0))),
        Return(Identifier("y")),
    ]
    listing = collect_graph(roots)
    assert listing.labels["_0"] == "def"
    assert listing.labels["_1"] == "return"
    assert len(set(listing.labels)) == 6


def test_conditional_without_else_has_two_edges() -> None:
    node = Conditional(Identifier("c"), Return(NumericLiteral(0.0)))
    listing = collect_graph(node)
    assert [edge for edge in listing.edges if edge[0] == "_0"] == [("_0", "_1"), ("_0", "_2")]


@given(st.lists(st.integers(min_value=0, max_value=50), min_size=1, max_size=10))  # type: ignore[misc]
def test_tree_listing_has_one_edge_per_child(values: list[int]) -> None:
    source = "f(" + ", ".join(str(v) for v in values) + ")"
    tree = Parser(tokenize(source)).parse_expr_entrypoint()
    listing = collect_graph(tree)
    assert len(listing.labels) == len(values) + 1
    assert listing.edges == [("_0", f"_{i + 1}") for i in range(len(values))]
