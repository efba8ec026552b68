"""
Post-write fix-up formatters for pruned declarations.
"""

from __future__ import annotations

from .base import Formatter
from .prettier_formatter import PrettierFormatter
from .unused_imports import UnusedImportsFormatter

__all__ = [
    "Formatter",
    "PrettierFormatter",
    "UnusedImportsFormatter",
]
