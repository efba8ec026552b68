"""
Tests for the fix-up formatters.
"""

from __future__ import annotations

import subprocess

import pytest

from prune_dts.pipeline.config import FormatterConfig
from prune_dts.pipeline.formatters import PrettierFormatter, UnusedImportsFormatter


def test_unused_import_names_removed():
    """Test that only names still referenced are kept."""
    code = (
        "// Generated by prune_dts v1.0.0 : prune_dts api.json\n"
        "\n"
        "import { Timestamp, Duration, Blob as Bytes } from './types';\n"
        "\n"
        "export declare class Doc {\n"
        "    createdAt: Timestamp;\n"
        "    data(): Bytes;\n"
        "}\n"
    )

    result = UnusedImportsFormatter().format(code, FormatterConfig())

    assert "import { Timestamp, Blob as Bytes } from './types';" in result
    assert "Duration" not in result


def test_fully_unused_import_dropped():
    """Test that an import line with no used names disappears without leaving a gap."""
    code = "import { Duration } from './types';\n" "\n" "export declare const now: number;\n"

    result = UnusedImportsFormatter().format(code, FormatterConfig())

    assert result == "export declare const now: number;\n"


def test_names_in_comments_do_not_count():
    """Test that a name mentioned only in documentation is still unused."""
    code = "import { Duration } from './types';\n" "\n" "/**\n" " * Returns a Duration.\n" " */\n" "export declare function wait(): number;\n"

    result = UnusedImportsFormatter().format(code, FormatterConfig())

    assert "import" not in result


def test_side_effect_imports_kept():
    """Test that `import 'module';` is never removed."""
    code = "import 'reflect-metadata';\n" "\n" "export declare const x: number;\n"
    assert UnusedImportsFormatter().format(code, FormatterConfig()) == code


def test_unused_imports_disabled():
    """Test that the formatter does nothing when disabled."""
    code = "import { Duration } from './types';\n"
    assert UnusedImportsFormatter().format(code, FormatterConfig(remove_unused_imports=False)) == code


def test_prettier_unavailable_returns_code():
    """Test that a missing prettier leaves the code unformatted."""
    formatter = PrettierFormatter(command="prune-dts-no-such-prettier")
    code = "export declare const x:number;\n"

    assert not formatter.is_available()
    assert formatter.format(code, FormatterConfig(enabled=True)) == code


def test_prettier_output_used(monkeypatch):
    """Test that prettier's stdout replaces the code on success."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="formatted\n", stderr="")

    formatter = PrettierFormatter()
    formatter._available = True
    monkeypatch.setattr(subprocess, "run", fake_run)

    assert formatter.format("code", FormatterConfig(enabled=True, line_length=100)) == "formatted\n"
    assert calls[0][:3] == ["prettier", "--parser", "typescript"]
    assert calls[0][-2:] == ["--print-width", "100"]


def test_prettier_failure_returns_code(monkeypatch, caplog):
    """Test that a failing prettier run keeps the original code and logs a warning."""
    formatter = PrettierFormatter()
    formatter._available = True
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 2, stdout="", stderr="SyntaxError"))

    assert formatter.format("code", FormatterConfig(enabled=True)) == "code"
    assert "SyntaxError" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
