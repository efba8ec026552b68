"""
Tests for the reference rewriter stage.
"""

from __future__ import annotations

import pytest

from prune_dts.pipeline.analyzer import TreeSymbolResolver
from prune_dts.pipeline.config import PruneConfig
from prune_dts.pipeline.declaration_ast import DeclarationParser
from prune_dts.pipeline.diagnostics import DiagnosticKind
from prune_dts.pipeline.pruner import PruneContext, ReferenceRewriter


def _rewrite(statements):
    """Run the reference rewriter alone; returns (context, nodes by name)."""
    tree = DeclarationParser().parse({"statements": statements})
    context = PruneContext(original=tree, resolver=TreeSymbolResolver(tree), config=PruneConfig())
    pruned = ReferenceRewriter(context).transform(tree)
    return context, {node.name: node for node in pruned.statements}


def _function(name, parameter_type, return_type="void"):
    return {"kind": "function", "name": name, "exported": True, "parameters": [{"name": "x", "type": parameter_type}], "returnType": return_type}


def test_public_references_unchanged():
    """Test that exported and out-of-tree references are left alone."""
    context, nodes = _rewrite(
        [
            {"kind": "interface", "name": "Point", "exported": True},
            _function("move", {"ref": "Array", "args": ["Point"]}, "Promise"),
        ]
    )

    signature = nodes["move"].signature
    assert signature.parameters[0].type_annotation.name == "Array"
    assert signature.parameters[0].type_annotation.type_arguments[0].name == "Point"
    assert context.diagnostics == []


def test_same_name_beats_subtype():
    """Test substitution priority: same-name export before exported subtype."""
    context, nodes = _rewrite(
        [
            {"kind": "interface", "name": "Config"},
            {"kind": "interface", "name": "FullConfig", "exported": True, "heritage": [{"target": "Config"}]},
            {"kind": "namespace", "name": "v2", "exported": True, "body": [{"kind": "interface", "name": "Config", "exported": True}]},
            _function("load", "Config"),
        ]
    )

    assert nodes["load"].signature.parameters[0].type_annotation.name == "v2.Config"


def test_subtype_beats_ancestor():
    """Test substitution priority: exported subtype before public ancestor."""
    context, nodes = _rewrite(
        [
            {"kind": "class", "name": "Base", "exported": True},
            {"kind": "class", "name": "Impl", "heritage": [{"target": "Base"}]},
            {"kind": "class", "name": "Public", "exported": True, "heritage": [{"target": "Impl"}]},
            _function("make", "string", "Impl"),
        ]
    )

    assert nodes["make"].signature.return_type.name == "Public"


def test_first_exported_subtype_in_declaration_order():
    """Test that the first exported subtype is chosen when there are several."""
    context, nodes = _rewrite(
        [
            {"kind": "class", "name": "Impl"},
            {"kind": "class", "name": "First", "exported": True, "heritage": [{"target": "Impl"}]},
            {"kind": "class", "name": "Second", "exported": True, "heritage": [{"target": "Impl"}]},
            _function("make", "Impl"),
        ]
    )

    assert nodes["make"].signature.parameters[0].type_annotation.name == "First"


def test_external_ancestor_substitutes():
    """Test that an out-of-tree ancestor is an acceptable substitute."""
    context, nodes = _rewrite(
        [
            {"kind": "class", "name": "StoreError", "heritage": [{"target": "Error"}]},
            _function("fail", "string", "StoreError"),
        ]
    )

    assert nodes["fail"].signature.return_type.name == "Error"
    assert context.diagnostics == []


def test_nested_references_rewritten():
    """Test rewriting inside unions, arrays, generics and function types."""
    context, nodes = _rewrite(
        [
            {"kind": "class", "name": "Impl"},
            {"kind": "class", "name": "Item", "exported": True, "heritage": [{"target": "Impl"}]},
            {
                "kind": "typeAlias",
                "name": "Handler",
                "exported": True,
                "type": {
                    "function": {
                        "parameters": [{"name": "items", "type": {"array": {"union": ["Impl", "null"]}}}],
                        "returnType": {"ref": "Promise", "args": ["Impl"]},
                    }
                },
            },
        ]
    )

    function = nodes["Handler"].type_annotation
    assert function.parameters[0].type_annotation.element_type.types[0].name == "Item"
    assert function.return_type.type_arguments[0].name == "Item"


def test_unresolved_reported_at_each_site():
    """Test that every unresolved use site gets its own diagnostic."""
    context, nodes = _rewrite(
        [
            {"kind": "interface", "name": "Hidden"},
            {
                "kind": "class",
                "name": "Api",
                "exported": True,
                "typeParameters": [{"name": "T", "constraint": "Hidden"}],
                "heritage": [{"kind": "implements", "target": {"ref": "Iterable", "args": ["Hidden"]}}],
                "members": [
                    {"kind": "constructor", "parameters": [{"name": "h", "type": "Hidden"}]},
                    {"kind": "property", "name": "current", "type": "Hidden"},
                    {"kind": "method", "name": "get", "returnType": "Hidden"},
                ],
            },
            {"kind": "variable", "name": "instance", "exported": True, "type": "Hidden"},
        ]
    )

    assert all(d.kind == DiagnosticKind.UNRESOLVED_REFERENCE for d in context.diagnostics)
    assert [d.location for d in context.diagnostics] == [
        "Api<T>",
        "Api:implements Iterable",
        "Api.constructor(h)",
        "Api.current",
        "Api.get():return",
        "instance",
    ]
    # References are kept as they were
    assert nodes["instance"].type_annotation.name == "Hidden"


def test_references_inside_namespace():
    """Test that locations inside namespaces are qualified."""
    context, nodes = _rewrite(
        [
            {"kind": "interface", "name": "Hidden"},
            {"kind": "namespace", "name": "Ns", "exported": True, "body": [_function("use", "Hidden")]},
        ]
    )

    assert [d.location for d in context.diagnostics] == ["Ns.use(x)"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
