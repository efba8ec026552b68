"""
Functional tests for the pruning pipeline.

Each test case in test_data/functional is a declaration document, the
declarations expected after pruning and the diagnostics expected on the way.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from prune_dts.pipeline import DeclarationParser, DtsPrinter, PruneConfig, TreeSymbolResolver, prune


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = Path(__file__).parent / "test_data" / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _prune(document, config_dict=None):
    """Helper to prune a declaration document with the given config."""
    config = PruneConfig.from_dict(config_dict or {})
    tree = DeclarationParser().parse(document, source_path="test.json")
    return prune(tree, TreeSymbolResolver(tree), config)


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda c: c["name"])
def test_functional_pruning(test_case):
    """Test pruned output and diagnostics of a functional case."""
    result = _prune(test_case["document"], test_case.get("config"))

    output = DtsPrinter().print(result.tree)
    expected = "\n".join(test_case["expected"]) + "\n"

    assert output == expected, f"{test_case['_source_file']}:{test_case['name']}: {test_case['description']}"
    assert [str(d) for d in result.diagnostics] == test_case["diagnostics"]


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda c: c["name"])
def test_functional_idempotence(test_case):
    """Test that pruning an already pruned tree changes nothing."""
    first = _prune(test_case["document"], test_case.get("config"))
    second = prune(first.tree, TreeSymbolResolver(first.tree), PruneConfig.from_dict(test_case.get("config") or {}))

    assert second.tree == first.tree
    assert DtsPrinter().print(second.tree) == DtsPrinter().print(first.tree)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
