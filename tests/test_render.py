import json
from typing import Any

import pytest

from kscope.emitters.dot_emitter import DotEmitter, escape_label, listing_to_dot
from kscope.emitters.json_emitter import JsonEmitter
from kscope.kscope_ast import ASTNode, Identifier, NumericLiteral, Return
from kscope.kscope_graph import GraphListing
from kscope.kscope_render import Emitter, Renderer


class DummyEmitter:
    def __init__(self) -> None:
        self.calls: list[ASTNode] = []

    def emit_tree(self, node: ASTNode) -> None:
        self.calls.append(node)

    def get_output(self) -> str:
        return "result"


def test_force_protocol_reference() -> None:
    assert hasattr(Emitter, "emit_tree")


@pytest.mark.parametrize("fmt,cls", [("dot", DotEmitter), ("GRAPHVIZ", DotEmitter), ("Json", JsonEmitter)])  # type: ignore[misc]
def test_renderer_selects_emitter(fmt: str, cls: type) -> None:
    assert isinstance(Renderer(fmt).emitter, cls)


def test_renderer_invalid_format_raises() -> None:
    with pytest.raises(ValueError, match="Unknown output format"):
        Renderer("svg")


def test_renderer_rejects_non_ast(monkeypatch: Any) -> None:
    monkeypatch.setattr("kscope.kscope_render.DotEmitter", DummyEmitter)
    with pytest.raises(TypeError, match="ASTNode"):
        Renderer("dot").render(["not-an-ast"])  # type: ignore


def test_renderer_feeds_every_root(monkeypatch: Any) -> None:
    dummy = DummyEmitter()
    monkeypatch.setattr("kscope.kscope_render.JsonEmitter", lambda: dummy)
    roots = [Identifier("a"), Identifier("b")]
    assert Renderer("json").render(roots) == "result"
    assert dummy.calls == roots


def test_escape_label() -> None:
    assert escape_label('say "hi"') == 'say \\"hi\\"'
    assert escape_label("a\\b") == "a\\\\b"


def test_listing_to_dot() -> None:
    listing = GraphListing(labels={"_0": "return", "_1": "1"}, edges=[("_0", "_1")])
    assert listing_to_dot(listing) == "\n".join(
        [
            "digraph ast {",
            "  node [shape=box];",
            '  _0 [label="return"];',
            '  _1 [label="1"];',
            "  _0 -> _1;",
            "}",
        ]
    )


def test_dot_render_of_tree() -> None:
    out = Renderer("dot").render([Return(Identifier("f", [NumericLiteral(2.0)]))])
    assert out.startswith("digraph ast {")
    assert out.endswith("}")
    assert '_1 [label="Call: f"];' in out
    assert "_1 -> _2;" in out


def test_dot_render_of_empty_program() -> None:
    assert Renderer("dot").render([]) == "digraph ast {\n  node [shape=box];\n}"


def test_json_render() -> None:
    out = Renderer("json").render([Return(NumericLiteral(1.5, line=1, col=8), line=1, col=1)])
    data = json.loads(out)
    assert data == [
        {
            "kind": "return",
            "line": 1,
            "col": 1,
            "value": {"kind": "number", "line": 1, "col": 8, "value": 1.5},
        }
    ]


def test_json_emitter_indent() -> None:
    emitter = JsonEmitter(indent=0)
    emitter.emit_tree(Identifier("x"))
    assert emitter.get_output().startswith("[\n{")
