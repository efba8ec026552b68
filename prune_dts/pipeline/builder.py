"""
Tree builder: loads a declaration document from disk.

The document is the already-parsed declaration surface serialized as JSON.
Building binds a symbol resolver to the resulting tree so that symbol
identity survives the pruning stages.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .analyzer import TreeSymbolResolver
from .declaration_ast import DeclarationParser, DeclarationTree
from .errors import ParseError

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds declaration trees and their resolvers from JSON documents."""

    def __init__(self):
        self.parser = DeclarationParser()

    def build(self, source_path: str | Path) -> tuple[DeclarationTree, TreeSymbolResolver]:
        """
        Build the declaration tree of a document.

        Args:
            source_path: Path of the JSON declaration document

        Returns:
            Tuple of (tree, resolver bound to the tree)

        Raises:
            ParseError: If the document cannot be read or is ill-formed
        """
        path = Path(source_path)
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}", str(path)) from e
        except OSError as e:
            raise ParseError(f"cannot read document: {e.strerror or e}", str(path)) from e

        tree = self.parser.parse(document, source_path=str(path))
        logger.debug("Built %s: %d statement(s), %d import(s)", path, len(tree.statements), len(tree.imports))
        return tree, TreeSymbolResolver(tree)
