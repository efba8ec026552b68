"""
Pruner module.

Contains the four pruning stages, their visitor plumbing and `prune`.
"""

from __future__ import annotations

from .export_filter import ExportFilter
from .heritage_resolver import HeritageResolver
from .member_filter import MemberFilter
from .pruner import STAGES, PruneResult, prune
from .reference_rewriter import ReferenceRewriter
from .visitor import DeclarationTransformer, PruneContext

__all__ = [
    "prune",
    "PruneResult",
    "PruneContext",
    "DeclarationTransformer",
    "ExportFilter",
    "MemberFilter",
    "HeritageResolver",
    "ReferenceRewriter",
    "STAGES",
]
