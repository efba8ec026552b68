"""
Tree-walk plumbing shared by the pruning stages.

Each stage is a DeclarationTransformer: a single top-down walk that builds a
new tree and dispatches on the closed DeclarationKind tag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ...utils import qualify
from ..analyzer.symbol_resolver import Symbol, SymbolResolver
from ..config import PruneConfig
from ..declaration_ast.nodes import (
    ClassDeclaration,
    DeclarationKind,
    DeclarationNode,
    DeclarationTree,
    EnumDeclaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    NamespaceDeclaration,
    NotEmittedStatement,
    TypeAliasDeclaration,
    VariableStatement,
)
from ..diagnostics import Diagnostic

logger = logging.getLogger(__name__)


@dataclass
class PruneContext:
    """State shared by the stages of one prune call."""

    original: DeclarationTree
    resolver: SymbolResolver
    config: PruneConfig
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        """Record a recoverable condition."""
        logger.warning("%s", diagnostic)
        self.diagnostics.append(diagnostic)

    def is_public(self, symbol: Symbol) -> bool:
        """Check whether a symbol is exported from the original tree."""
        return self.resolver.is_exported(symbol, self.original)


class DeclarationTransformer:
    """Base class for pruning stages.

    Subclasses override the visit_* methods for the kinds they rewrite; the
    defaults return the node unchanged, except namespaces, whose bodies are
    walked with the namespace pushed onto `scope`.
    """

    # Stage name used in log messages
    name = "transform"

    _VISITORS = {
        DeclarationKind.CLASS: "visit_class",
        DeclarationKind.INTERFACE: "visit_interface",
        DeclarationKind.FUNCTION: "visit_function",
        DeclarationKind.TYPE_ALIAS: "visit_type_alias",
        DeclarationKind.NAMESPACE: "visit_namespace",
        DeclarationKind.ENUM: "visit_enum",
        DeclarationKind.VARIABLE: "visit_variable",
        DeclarationKind.NOT_EMITTED: "visit_not_emitted",
    }

    def __init__(self, context: PruneContext):
        self.context = context
        self.resolver = context.resolver
        self.config = context.config

        # Namespace path of the node being visited
        self.scope: tuple[str, ...] = ()

    def transform(self, tree: DeclarationTree) -> DeclarationTree:
        """Return a new tree with every statement visited."""
        logger.debug("Running %s on %d statement(s)", self.name, len(tree.statements))
        self.scope = ()
        return replace(tree, statements=[self.visit(node) for node in tree.statements])

    def visit(self, node: DeclarationNode) -> DeclarationNode:
        return getattr(self, self._VISITORS[node.kind])(node)

    def location(self, node: DeclarationNode) -> str:
        """Qualified name of a node, for diagnostics."""
        return qualify(self.scope, node.name or "default")

    def visit_class(self, node: ClassDeclaration) -> DeclarationNode:
        return node

    def visit_interface(self, node: InterfaceDeclaration) -> DeclarationNode:
        return node

    def visit_function(self, node: FunctionDeclaration) -> DeclarationNode:
        return node

    def visit_type_alias(self, node: TypeAliasDeclaration) -> DeclarationNode:
        return node

    def visit_enum(self, node: EnumDeclaration) -> DeclarationNode:
        return node

    def visit_variable(self, node: VariableStatement) -> DeclarationNode:
        return node

    def visit_not_emitted(self, node: NotEmittedStatement) -> DeclarationNode:
        return node

    def visit_namespace(self, node: NamespaceDeclaration) -> DeclarationNode:
        outer_scope = self.scope
        self.scope = (*outer_scope, node.name)
        try:
            body = [self.visit(child) for child in node.body]
        finally:
            self.scope = outer_scope
        return replace(node, body=body)
