"""
Tests for the end-to-end pruning pipeline.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from prune_dts import __version__
from prune_dts.pipeline import OutputMode, ParseError, PruneConfig, PruneGenerator, UnsupportedNodeKind
from prune_dts.pipeline.formatters import UnusedImportsFormatter

TEST_DATA_DIR = Path(__file__).parent / "test_data"

EXPECTED_API = (
    "import { Timestamp, Duration } from './timestamp';\n"
    "\n"
    "/**\n"
    " * A database client.\n"
    " */\n"
    "export declare class Client {\n"
    "    private constructor();\n"
    "    createdAt: Timestamp;\n"
    "    /**\n"
    "     * Closes the client.\n"
    "     */\n"
    "    close(): Promise<void>;\n"
    "}\n"
)


def _generator():
    """Helper to build a generator without the generation comment."""
    return PruneGenerator(PruneConfig(add_generation_comment=False))


def test_generate():
    """Test pruning and printing a document."""
    text, diagnostics = _generator().generate(TEST_DATA_DIR / "api.json")

    assert text == EXPECTED_API
    assert diagnostics == []


def test_generation_comment():
    """Test the header added by default."""
    text, _ = PruneGenerator().generate(TEST_DATA_DIR / "api.json")

    assert text.startswith(f"// Generated by prune_dts v{__version__} : prune_dts\n\n")


def test_write_removes_unused_imports(tmp_path):
    """Test that the fix-up pass drops imports left unused by pruning."""
    output = tmp_path / "index.d.ts"
    diagnostics = _generator().write(TEST_DATA_DIR / "api.json", output)

    assert diagnostics == []
    assert output.read_text(encoding="utf-8") == EXPECTED_API.replace("{ Timestamp, Duration }", "{ Timestamp }")


def test_write_returns_diagnostics(tmp_path):
    """Test that recoverable conditions do not prevent writing."""
    output = tmp_path / "index.d.ts"
    diagnostics = _generator().write(TEST_DATA_DIR / "unresolved.json", output)

    assert [d.location for d in diagnostics] == ["f(x)"]
    assert output.read_text(encoding="utf-8") == "export declare function f(x: Hidden): void;\n"


def test_error_if_exists_mode(tmp_path):
    """Test that the error mode refuses to overwrite."""
    output = tmp_path / "index.d.ts"
    output.write_text("keep me", encoding="utf-8")
    generator = _generator()
    generator.config.output.mode = OutputMode.ERROR_IF_EXISTS

    with pytest.raises(FileExistsError):
        generator.write(TEST_DATA_DIR / "api.json", output)
    assert output.read_text(encoding="utf-8") == "keep me"


def test_non_atomic_write(tmp_path):
    """Test the plain write path."""
    output = tmp_path / "out" / "index.d.ts"
    generator = _generator()
    generator.config.output.atomic_write = False
    generator.config.formatter.remove_unused_imports = False

    generator.write(TEST_DATA_DIR / "api.json", output)
    assert output.read_text(encoding="utf-8") == EXPECTED_API


def test_fix_up_failure_keeps_written_file(tmp_path, monkeypatch, caplog):
    """Test that a failing fix-up is logged and the declarations stay written."""

    def broken_format(self, code, config):
        raise OSError("disk full")

    monkeypatch.setattr(UnusedImportsFormatter, "format", broken_format)
    output = tmp_path / "index.d.ts"

    with caplog.at_level(logging.WARNING):
        _generator().write(TEST_DATA_DIR / "api.json", output)

    assert output.read_text(encoding="utf-8") == EXPECTED_API
    assert "disk full" in caplog.text


def test_parse_errors(tmp_path):
    """Test unreadable and ill-formed documents."""
    with pytest.raises(ParseError, match="invalid JSON"):
        _generator().generate(TEST_DATA_DIR / "invalid.json")

    with pytest.raises(ParseError, match="cannot read document"):
        _generator().generate(tmp_path / "missing.json")


def test_unsupported_heritage_is_fatal(tmp_path):
    """Test that nothing is written when pruning fails."""
    output = tmp_path / "index.d.ts"

    with pytest.raises(UnsupportedNodeKind):
        _generator().write(TEST_DATA_DIR / "unsupported.json", output)
    assert not output.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
