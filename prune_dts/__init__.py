"""Declaration Surface Pruner

A Python package for narrowing TypeScript declaration rollups down to a
library's public contract. Hidden types are removed, their members are
inlined into public subtypes, and dangling references are substituted
by public types or reported.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (
    AtomicWriter,
    Diagnostic,
    DiagnosticKind,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PruneConfig,
    PruneError,
    PruneGenerator,
    PruneResult,
    UnresolvedPolicy,
    prune,
)

__all__ = [
    "prune",
    "PruneResult",
    "PruneGenerator",
    "PruneConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "UnresolvedPolicy",
    "Diagnostic",
    "DiagnosticKind",
    "PruneError",
    "AtomicWriter",
]
