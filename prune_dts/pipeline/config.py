"""
Configuration for the pruning pipeline.

Pruning policy (what counts as hidden) is supplied here rather than computed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .declaration_ast.nodes import Visibility


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Default: overwrite, once per build artifact


class UnresolvedPolicy(str, Enum):
    """What to do with references that have no public substitute."""

    REPORT = "report"  # Keep the reference, return a diagnostic
    ERROR = "error"  # Fail the run with UnresolvedReferenceError


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate declarations before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the post-write fix-up pass."""

    # Whether external formatting (prettier) is enabled
    enabled: bool = False

    # Remove import names no longer referenced by the pruned declarations
    remove_unused_imports: bool = True

    # Command used to run prettier
    prettier_command: str = "prettier"

    # Line length for the formatter
    line_length: int = 80


@dataclass
class PruneConfig:
    """Configuration options for pruning."""

    # Members whose name starts with this prefix are hidden
    hidden_prefix: str = "_"

    # Documentation tag that hides a constructor
    hide_constructor_tag: str = "hideconstructor"

    # Visibility of a hidden constructor
    default_visibility: Visibility = Visibility.PRIVATE

    # Visibility used instead when the tag payload equals alternate_marker
    alternate_visibility: Visibility = Visibility.PROTECTED
    alternate_marker: str = "protected"

    # Report unresolved references or fail the run
    unresolved_policy: UnresolvedPolicy = UnresolvedPolicy.REPORT

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Fix-up pass configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> PruneConfig:
        """Create a config from a dictionary."""
        config = PruneConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(
                    mode=OutputMode(v.get("mode", OutputMode.FORCE)),
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k in ("default_visibility", "alternate_visibility"):
                setattr(config, k, Visibility(v))
            elif k == "unresolved_policy":
                config.unresolved_policy = UnresolvedPolicy(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "hidden_prefix": self.hidden_prefix,
            "hide_constructor_tag": self.hide_constructor_tag,
            "default_visibility": self.default_visibility.value,
            "alternate_visibility": self.alternate_visibility.value,
            "alternate_marker": self.alternate_marker,
            "unresolved_policy": self.unresolved_policy.value,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "remove_unused_imports": self.formatter.remove_unused_imports,
                "prettier_command": self.formatter.prettier_command,
                "line_length": self.formatter.line_length,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
