"""
Tests for the member filter stage.
"""

from __future__ import annotations

import pytest

from prune_dts.pipeline.analyzer import TreeSymbolResolver
from prune_dts.pipeline.config import PruneConfig
from prune_dts.pipeline.declaration_ast import DeclarationParser, MemberKind, Visibility
from prune_dts.pipeline.pruner import MemberFilter, PruneContext


def _filter(members, config=None, kind="class"):
    tree = DeclarationParser().parse({"statements": [{"kind": kind, "name": "Api", "exported": True, "members": members}]})
    context = PruneContext(original=tree, resolver=TreeSymbolResolver(tree), config=config or PruneConfig())
    return MemberFilter(context).transform(tree).statements[0]


def _hidden_constructor(payload):
    return {
        "kind": "constructor",
        "parameters": [{"name": "secret", "type": "string"}],
        "documentation": {"text": "Do not use.", "tags": {"hideconstructor": payload}},
    }


def test_hidden_prefix_members_dropped():
    """Test that members starting with the hidden prefix are removed."""
    node = _filter(
        [
            {"kind": "property", "name": "_cache", "type": "object"},
            {"kind": "method", "name": "_flush"},
            {"kind": "method", "name": "flush"},
            {"kind": "property", "name": "name_", "type": "string"},
        ]
    )

    assert [m.name for m in node.members] == ["flush", "name_"]


def test_hidden_prefix_is_configurable():
    """Test a custom hidden prefix; the match is case-sensitive."""
    node = _filter(
        [{"kind": "method", "name": "internalReset"}, {"kind": "method", "name": "InternalReset"}, {"kind": "method", "name": "_kept"}],
        config=PruneConfig(hidden_prefix="internal"),
    )

    assert [m.name for m in node.members] == ["InternalReset", "_kept"]


def test_empty_hidden_prefix_hides_nothing():
    """Test that an empty prefix keeps every member."""
    node = _filter([{"kind": "method", "name": "_a"}], config=PruneConfig(hidden_prefix=""))
    assert [m.name for m in node.members] == ["_a"]


def test_interface_members_filtered():
    """Test that interfaces are filtered like classes."""
    node = _filter([{"kind": "property", "name": "_id", "type": "string"}], kind="interface")
    assert node.members == []


@pytest.mark.parametrize(
    "payload,visibility",
    [
        ("protected", Visibility.PROTECTED),
        (" protected ", Visibility.PROTECTED),
        ("", Visibility.PRIVATE),
        ("internal", Visibility.PRIVATE),
    ],
)
def test_hide_constructor(payload, visibility):
    """Test that a tagged constructor is narrowed to a parameterless one."""
    node = _filter([_hidden_constructor(payload), {"kind": "method", "name": "run"}])

    constructor, run = node.members
    assert constructor.kind == MemberKind.CONSTRUCTOR
    assert constructor.visibility == visibility
    assert constructor.signature.parameters == []
    assert constructor.documentation is None
    assert run.name == "run"


def test_untagged_constructor_unchanged():
    """Test that constructors without the tag are left alone."""
    constructor = {"kind": "constructor", "parameters": [{"name": "url", "type": "string"}], "documentation": "Creates a client."}
    node = _filter([constructor])

    assert node.members[0].signature.parameters[0].name == "url"
    assert node.members[0].documentation.text == "Creates a client."


def test_hide_constructor_with_custom_policy():
    """Test custom tag name, marker and visibilities."""
    config = PruneConfig(
        hide_constructor_tag="internal",
        default_visibility=Visibility.PROTECTED,
        alternate_visibility=Visibility.PRIVATE,
        alternate_marker="sealed",
    )
    constructor = {"kind": "constructor", "documentation": {"tags": {"internal": "sealed"}}}

    node = _filter([constructor], config=config)
    assert node.members[0].visibility == Visibility.PRIVATE

    node = _filter([_hidden_constructor("protected")], config=config)
    assert node.members[0].signature.parameters[0].name == "secret"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
