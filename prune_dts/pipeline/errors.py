"""
Exceptions raised by the pruning pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .diagnostics import Diagnostic


class PruneError(Exception):
    """Base class for all fatal pruning errors."""

    pass


class ParseError(PruneError):
    """Raised when a declaration document cannot be built into a well-formed tree.

    No partial tree is available when this is raised.
    """

    def __init__(self, message: str, source_path: str = ""):
        self.source_path = source_path
        if source_path:
            message = f"{source_path}: {message}"
        super().__init__(message)


class UnsupportedNodeKind(PruneError):
    """Raised when a declaration kind is not covered by the pruning rules.

    Passing such a node through could leak a private type, so this is fatal.
    """

    pass


class UnresolvedReferenceError(PruneError):
    """Raised when unresolved references are configured to fail the build."""

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = diagnostics
        names = ", ".join(d.location for d in diagnostics)
        super().__init__(f"{len(diagnostics)} unresolved reference(s) to non-exported types: {names}")


class OutputValidationError(PruneError):
    """Raised when printed declarations fail validation before being written.

    This can happen when:
    - Braces in the output are unbalanced
    - The output contains no declarations while the tree had exports
    """

    pass
