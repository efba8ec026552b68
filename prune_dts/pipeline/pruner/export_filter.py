"""
Export filter: the first pruning stage.

Replaces every top-level declaration that is not exported with an empty
placeholder. Placeholders keep statement positions stable for line-oriented
post-processing.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..declaration_ast.nodes import DeclarationNode, DeclarationTree, NotEmittedStatement
from .visitor import DeclarationTransformer

logger = logging.getLogger(__name__)


class ExportFilter(DeclarationTransformer):
    """Removes non-exported top-level declarations."""

    name = "export filter"

    def transform(self, tree: DeclarationTree) -> DeclarationTree:
        # Top level only; namespace bodies are visible through their namespace
        return replace(tree, statements=[self._filter(node) for node in tree.statements])

    def _filter(self, node: DeclarationNode) -> DeclarationNode:
        if node.exported or isinstance(node, NotEmittedStatement):
            return node
        logger.debug("Hiding non-exported %s %s", node.kind.value, node.name)
        return NotEmittedStatement(name=node.name, source_path=node.source_path, original=node)
