"""
Prettier formatter for TypeScript declarations.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class PrettierFormatter(Formatter):
    """Formatter using prettier for .d.ts output."""

    def __init__(self, command: str = "prettier"):
        self.command = command
        self._available = None

    def is_available(self) -> bool:
        """Check if prettier is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.command, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format declarations using prettier.

        Args:
            code: Declaration source to format
            config: Formatter configuration

        Returns:
            Formatted declarations, or the original code if prettier fails
        """
        if not self.is_available():
            logger.warning("%s is not available, declarations left unformatted", self.command)
            return code

        cmd = [self.command, "--parser", "typescript", "--stdin-filepath", "index.d.ts"]
        if config.line_length:
            cmd.extend(["--print-width", str(config.line_length)])

        try:
            # Run prettier via stdin/stdout
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            logger.warning("%s failed: %s", self.command, e)
            return code

        if result.returncode != 0:
            logger.warning("%s exited with code %d: %s", self.command, result.returncode, result.stderr.strip())
            return code
        return result.stdout
