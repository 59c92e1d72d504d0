# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the cndkit CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from cndkit.cli.main import main

_VALID = "<app = 'urn:app'>\n[app:Doc] > nt:base\n  - app:title (STRING) mandatory\n"

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Invoke the CLI with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["cndkit", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- check tests --------


def test_check_valid_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check exits with 0 and reports the node type count for a valid file."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", _VALID)
    assert _run(monkeypatch, "check", str(path)) == 0
    out = capsys.readouterr().out
    assert "PASS" in out
    assert "(1 node types)" in out


def test_check_reports_parse_error(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check exits with 1 and prints the located parse error."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "broken.cnd", "[A] > \n")
    assert _run(monkeypatch, "check", str(path)) == 1
    captured = capsys.readouterr()
    assert "FAIL" in captured.out
    assert "Error:" in captured.err
    assert "line 2" in captured.err
    assert "1 of 1 file(s) failed." in captured.err


def test_check_reports_validation_errors(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Schema consistency errors fail the check."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "dup.cnd", "[A]\n[A]\n")
    assert _run(monkeypatch, "check", str(path)) == 1
    out = capsys.readouterr().out
    assert "error: Node type 'A' is declared more than once." in out


def test_check_warnings_pass_unless_strict(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Warnings are reported but only fail the check in strict mode."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "warn.cnd", "[A] primaryitem missing\n")
    assert _run(monkeypatch, "check", str(path)) == 0
    assert "warning:" in capsys.readouterr().out

    _write(tmp_path / ".cndkit.yaml", "strict: true\n")
    assert _run(monkeypatch, "check", str(path)) == 1


def test_check_multiple_files_counts_failures(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    good = _write(tmp_path / "good.cnd", _VALID)
    bad = _write(tmp_path / "bad.cnd", "[A")
    assert _run(monkeypatch, "check", str(good), str(bad)) == 1
    assert "1 of 2 file(s) failed." in capsys.readouterr().err


def test_check_missing_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check", str(tmp_path / "absent.cnd")) == 1
    assert "not found" in capsys.readouterr().err


def test_check_uses_config_namespaces(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Prefixes declared in the config file are accepted without a mapping in the document."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", "[app:Doc]\n")
    assert _run(monkeypatch, "check", str(path)) == 1

    config = _write(tmp_path / "custom.yaml", "namespaces:\n  app: urn:app\n")
    assert _run(monkeypatch, "--config", str(config), "check", str(path)) == 0


def test_invalid_config_fails(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / ".cndkit.yaml", "unknown: 1\n")
    path = _write(tmp_path / "doc.cnd", _VALID)
    assert _run(monkeypatch, "check", str(path)) == 1
    assert "unknown field" in capsys.readouterr().err


# -------- export tests --------


def test_export_to_stdout(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Without an output path or directory the artifact goes to stdout."""
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", _VALID)
    assert _run(monkeypatch, "export", str(path)) == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["node_types"][0]["name"] == "app:Doc"


def test_export_to_output_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", _VALID)
    target = tmp_path / "out" / "schema.json"
    assert _run(monkeypatch, "export", str(path), "-o", str(target)) == 0
    assert json.loads(target.read_text(encoding="utf-8"))["namespaces"] == {"app": "urn:app"}


def test_export_to_configured_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The output directory from the config resolves against the config file's directory."""
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / ".cndkit.yaml", "output-directory: build\n")
    path = _write(tmp_path / "doc.cnd", _VALID)
    assert _run(monkeypatch, "export", str(path)) == 0
    assert (tmp_path / "build" / "doc.json").exists()


def test_export_parse_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", "[A] (")
    assert _run(monkeypatch, "export", str(path)) == 1


# -------- format tests --------


def test_format_prints_canonical_text(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", "[A]   mixin   orderable\n- p (string)")
    assert _run(monkeypatch, "format", str(path)) == 0
    assert capsys.readouterr().out == "[A]\n  orderable mixin\n  - p (STRING)\n"


def test_format_write_rewrites_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write(tmp_path / "doc.cnd", "[A]   mixin")
    assert _run(monkeypatch, "format", str(path), "--write") == 0
    assert path.read_text(encoding="utf-8") == "[A]\n  mixin\n"
