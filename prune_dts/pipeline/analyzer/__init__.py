"""
Analyzer module.

Contains symbol resolution over the original declaration tree.
"""

from __future__ import annotations

from .symbol_resolver import Symbol, SymbolResolver, TreeSymbolResolver

__all__ = [
    "Symbol",
    "SymbolResolver",
    "TreeSymbolResolver",
]
