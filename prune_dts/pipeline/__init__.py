"""
Pipeline - declaration surface pruning.

This module provides a multi-phase architecture for narrowing a wide
declaration surface down to a library's public contract:

1. Phase 1 (Builder): Load a declaration document into a Declaration AST
2. Phase 2 (Analyzer): Bind a symbol resolver to the original tree
3. Phase 3 (Pruner): Export filter, member filter, heritage resolver, reference rewriter
4. Phase 4 (Printer): Render the pruned tree as .d.ts source
5. Phase 5 (Writer): Atomic write with validation
6. Phase 6 (Formatter): Best-effort fix-up (unused imports, prettier)
"""

from __future__ import annotations

from .analyzer import Symbol, SymbolResolver, TreeSymbolResolver
from .builder import TreeBuilder
from .config import FormatterConfig, OutputConfig, OutputMode, PruneConfig, UnresolvedPolicy
from .declaration_ast import DeclarationParser, DeclarationTree
from .diagnostics import Diagnostic, DiagnosticKind
from .errors import OutputValidationError, ParseError, PruneError, UnresolvedReferenceError, UnsupportedNodeKind
from .generator import PruneGenerator
from .printer import DtsPrinter
from .pruner import PruneResult, prune
from .writer import AtomicWriter

__all__ = [
    "prune",
    "PruneResult",
    "PruneGenerator",
    "PruneConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "UnresolvedPolicy",
    "TreeBuilder",
    "DeclarationParser",
    "DeclarationTree",
    "Symbol",
    "SymbolResolver",
    "TreeSymbolResolver",
    "DtsPrinter",
    "AtomicWriter",
    "Diagnostic",
    "DiagnosticKind",
    "PruneError",
    "ParseError",
    "UnsupportedNodeKind",
    "UnresolvedReferenceError",
    "OutputValidationError",
]
