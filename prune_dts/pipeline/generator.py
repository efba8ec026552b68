"""
End-to-end pruning pipeline.

Ties the phases together for one declaration document:
build, prune, print, write, then a best-effort fix-up of the written file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .builder import TreeBuilder
from .config import OutputMode, PruneConfig
from .diagnostics import Diagnostic
from .errors import PruneError
from .formatters import PrettierFormatter, UnusedImportsFormatter
from .printer import DtsPrinter
from .pruner import prune
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PruneGenerator:
    """Prunes a declaration document and writes the public surface."""

    def __init__(self, config: PruneConfig | None = None):
        self.config = config or PruneConfig()
        self.builder = TreeBuilder()
        self.printer = DtsPrinter()
        self.writer = AtomicWriter()

    def generate(self, source_path: str | Path) -> tuple[str, list[Diagnostic]]:
        """
        Prune a document and print the result.

        Args:
            source_path: Path of the JSON declaration document

        Returns:
            Tuple of (declaration text, diagnostics)

        Raises:
            PruneError: On any fatal pruning condition
        """
        tree, resolver = self.builder.build(source_path)
        result = prune(tree, resolver, self.config)
        text = self.printer.print(result.tree, self._generation_comment())
        return text, result.diagnostics

    def write(self, source_path: str | Path, output_path: str | Path) -> list[Diagnostic]:
        """
        Prune a document and write the declarations to a file.

        The fix-up pass runs after the declarations are written; its failures
        are logged and leave the written file in place.

        Args:
            source_path: Path of the JSON declaration document
            output_path: Path of the .d.ts file to write

        Returns:
            Diagnostics found while pruning

        Raises:
            PruneError: On any fatal pruning condition or failed validation
            FileExistsError: If the output exists and the mode is "error"
        """
        text, diagnostics = self.generate(source_path)
        output = Path(output_path)
        output_config = self.config.output

        if output_config.mode == OutputMode.ERROR_IF_EXISTS:
            self.writer.write_if_not_exists(output, text, validate=output_config.validate_before_write)
        elif output_config.atomic_write:
            self.writer.write(output, text, validate=output_config.validate_before_write)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text, encoding="utf-8")

        logger.info("Wrote %s", output)
        self._fix_up(output)
        return diagnostics

    def _fix_up(self, output: Path) -> None:
        """Post-process the written file (unused imports, prettier)."""
        formatter_config = self.config.formatter
        formatters = []
        if formatter_config.remove_unused_imports:
            formatters.append(UnusedImportsFormatter())
        if formatter_config.enabled:
            formatters.append(PrettierFormatter(formatter_config.prettier_command))
        if not formatters:
            return

        try:
            code = output.read_text(encoding="utf-8")
            fixed = code
            for formatter in formatters:
                fixed = formatter.format(fixed, formatter_config)
            if fixed != code:
                self.writer.write(output, fixed, validate=self.config.output.validate_before_write)
        except (OSError, PruneError) as e:
            logger.warning("Fix-up of %s failed, keeping declarations as written: %s", output, e)

    def _generation_comment(self) -> str:
        """Generate a command line comment for the output file."""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line

        try:
            from ..prune_dts import prune_dts as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "prune_dts"

        return f"// Generated by prune_dts v{__version__} : {command_line}"
