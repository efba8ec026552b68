"""
Printers turning pruned declaration trees into source text.
"""

from __future__ import annotations

from .base import Printer
from .dts_printer import DtsPrinter

__all__ = [
    "Printer",
    "DtsPrinter",
]
