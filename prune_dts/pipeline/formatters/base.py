"""
Fix-up passes applied to a written .d.ts rollup.

Fix-ups run after the atomic write and rewrite the whole file text: the
unused-import pass drops names that pruning left unreferenced, prettier
re-lays out the declarations. A pass that is unavailable is skipped.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """A text-to-text pass over pruned .d.ts output."""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Rewrite the text of a pruned rollup.

        Implementations must leave every exported declaration in place; they
        may only drop imports or change whitespace and line breaks.

        Args:
            code: The printed .d.ts text, generation comment included
            config: Fix-up settings (prettier command, line length)

        Returns:
            The rewritten .d.ts text
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check whether this pass can run here (e.g. prettier is on PATH).

        Returns:
            True if the pass can be used
        """
