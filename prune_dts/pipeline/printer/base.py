"""
Base class for declaration printers.

Defines the interface that all output printers must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..declaration_ast.nodes import DeclarationTree


class Printer(ABC):
    """Abstract base class for declaration printers."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self):
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            autoescape=False,
        )
        self.file_template = self.jinja_env.get_template(f"file.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def print(self, tree: DeclarationTree, generation_comment: str = "") -> str:
        """
        Print a declaration tree.

        Args:
            tree: The (pruned) declaration tree
            generation_comment: Optional comment placed at the top of the output

        Returns:
            Declarations as source text
        """
