"""
Recoverable conditions reported by the pruning stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """Kind of recoverable pruning condition."""

    UNRESOLVED_REFERENCE = "unresolved-reference"  # Substitute search exhausted
    AMBIGUOUS_OVERLOAD_DOC = "ambiguous-overload-doc"  # Overload documentation not mapped


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable condition found while pruning.

    Attributes:
        kind: What went wrong
        location: Use site, e.g. ``f(x)`` or ``Derived.get():return``
        message: Human readable description
    """

    kind: DiagnosticKind
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.location}: {self.message}"


def unresolved_reference(name: str, location: str) -> Diagnostic:
    """Create a diagnostic for a reference with no public substitute."""
    return Diagnostic(
        kind=DiagnosticKind.UNRESOLVED_REFERENCE,
        location=location,
        message=f"Reference to non-exported type '{name}' has no public substitute",
    )


def ambiguous_overload_doc(owner: str, member: str, overloads: int, comments: int) -> Diagnostic:
    """Create a diagnostic for documentation that cannot be mapped onto overloads."""
    return Diagnostic(
        kind=DiagnosticKind.AMBIGUOUS_OVERLOAD_DOC,
        location=f"{owner}.{member}",
        message=f"{comments} documentation comment(s) for {overloads} overload(s); copied without documentation",
    )
