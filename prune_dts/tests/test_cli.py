"""
Tests for the prune_dts command line.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from prune_dts.prune_dts import prune_dts

TEST_DATA_DIR = Path(__file__).parent / "test_data"


@pytest.fixture
def runner():
    return CliRunner()


def test_prune_to_file(runner, tmp_path):
    """Test a plain run."""
    output = tmp_path / "index.d.ts"
    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "api.json"), str(output), "--no-generation-comment"])

    assert result.exit_code == 0, result.output
    text = output.read_text(encoding="utf-8")
    assert text.startswith("import { Timestamp } from './timestamp';\n")
    assert "export declare class Client {" in text
    assert "_pending" not in text
    assert "Settings" not in text


def test_generation_comment_records_command(runner, tmp_path):
    """Test that the header records the command line."""
    output = tmp_path / "index.d.ts"
    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "api.json"), str(output)])

    assert result.exit_code == 0, result.output
    first_line = output.read_text(encoding="utf-8").splitlines()[0]
    assert first_line.startswith("// Generated by prune_dts v")
    assert ": prune_dts api.json " in first_line


def test_diagnostics_printed(runner, tmp_path):
    """Test that unresolved references are reported without failing."""
    output = tmp_path / "index.d.ts"
    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "unresolved.json"), str(output)])

    assert result.exit_code == 0
    assert "unresolved-reference: f(x):" in result.output
    assert output.exists()


def test_strict_fails_on_unresolved(runner, tmp_path):
    """Test that --strict turns unresolved references into a failure."""
    output = tmp_path / "index.d.ts"
    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "unresolved.json"), str(output), "--strict"])

    assert result.exit_code == 1
    assert "unresolved-reference: f(x):" in result.output
    assert "Error: 1 unresolved reference(s)" in result.output
    assert not output.exists()


def test_config_file(runner, tmp_path):
    """Test that a config file changes the pruning policy."""
    output = tmp_path / "index.d.ts"
    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "api.json"), str(output), "--config", str(TEST_DATA_DIR / "config.json")])

    assert result.exit_code == 0, result.output
    text = output.read_text(encoding="utf-8")
    assert not text.startswith("//")
    assert "    _pending: Duration;\n" in text


def test_hidden_prefix_option_overrides_config(runner, tmp_path):
    """Test that --hidden-prefix wins over the config file."""
    output = tmp_path / "index.d.ts"
    args = [str(TEST_DATA_DIR / "api.json"), str(output), "-c", str(TEST_DATA_DIR / "config.json"), "--hidden-prefix", "_"]
    result = runner.invoke(prune_dts, args)

    assert result.exit_code == 0, result.output
    text = output.read_text(encoding="utf-8")
    assert "_pending" not in text
    # Unused import removal is disabled by the config file
    assert "import { Timestamp, Duration } from './timestamp';" in text


def test_fatal_errors(runner, tmp_path):
    """Test that fatal pruning errors exit non-zero."""
    output = tmp_path / "index.d.ts"

    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "invalid.json"), str(output)])
    assert result.exit_code == 1
    assert "invalid JSON" in result.output

    result = runner.invoke(prune_dts, [str(TEST_DATA_DIR / "unsupported.json"), str(output)])
    assert result.exit_code == 1
    assert "Square" in result.output

    assert not output.exists()


def test_missing_input(runner, tmp_path):
    """Test that click rejects a missing input document."""
    result = runner.invoke(prune_dts, [str(tmp_path / "missing.json"), str(tmp_path / "index.d.ts")])
    assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
