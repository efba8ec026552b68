"""
Declaration pruner.

Runs the four pruning stages in order. Each stage consumes the previous
stage's tree plus the resolver bound to the original tree, since symbol
identity must stay resolvable even as nodes are pruned:

1. Export filter: hide non-exported top-level declarations
2. Member filter: drop hidden members, narrow tagged constructors
3. Heritage resolver: inline members of hidden supertypes
4. Reference rewriter: substitute public types for hidden ones
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from ..analyzer.symbol_resolver import SymbolResolver
from ..config import PruneConfig, UnresolvedPolicy
from ..declaration_ast.nodes import DeclarationTree
from ..diagnostics import Diagnostic, DiagnosticKind
from ..errors import UnresolvedReferenceError
from .export_filter import ExportFilter
from .heritage_resolver import HeritageResolver
from .member_filter import MemberFilter
from .reference_rewriter import ReferenceRewriter
from .visitor import PruneContext

logger = logging.getLogger(__name__)

STAGES = (ExportFilter, MemberFilter, HeritageResolver, ReferenceRewriter)


class PruneResult(NamedTuple):
    """The pruned tree and the recoverable conditions found on the way."""

    tree: DeclarationTree
    diagnostics: list[Diagnostic]

    @property
    def unresolved(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == DiagnosticKind.UNRESOLVED_REFERENCE]


def prune(tree: DeclarationTree, resolver: SymbolResolver, config: PruneConfig | None = None) -> PruneResult:
    """
    Prune a declaration tree down to its public surface.

    The input tree is not modified.

    Args:
        tree: The original declaration tree
        resolver: Symbol resolver bound to `tree`
        config: Pruning policy (defaults to PruneConfig())

    Returns:
        PruneResult with the pruned tree and diagnostics

    Raises:
        UnsupportedNodeKind: If a hidden heritage target is neither a class nor an interface
        UnresolvedReferenceError: If the unresolved policy is "error" and a reference has no substitute
    """
    config = config or PruneConfig()
    context = PruneContext(original=tree, resolver=resolver, config=config)

    pruned = tree
    for stage in STAGES:
        pruned = stage(context).transform(pruned)

    result = PruneResult(tree=pruned, diagnostics=list(context.diagnostics))
    logger.info("Pruned %s with %d diagnostic(s)", tree.source_path or "declaration tree", len(result.diagnostics))

    if config.unresolved_policy == UnresolvedPolicy.ERROR and result.unresolved:
        raise UnresolvedReferenceError(result.unresolved)

    return result
