from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import yaml

from crackparams.cli.main import main


def test_cli_help() -> None:
    out = subprocess.check_output([sys.executable, "-m", "crackparams.cli", "--help"]).decode()
    assert "show" in out and "validate" in out and "schema" in out


def test_cli_missing_command() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "crackparams.cli"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode != 0


def test_cli_validate_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "crackparams.cli", "validate", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "--config" in result.stdout
    assert "--strict" in result.stdout


def test_show_defaults(capsys) -> None:
    assert main(["show"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("  Crack parameters:\n")
    assert "  Nasty hacks:" in out


def test_show_example(example_xml: Path, capsys) -> None:
    assert main(["show", "-c", str(example_xml)]) == 0
    out = capsys.readouterr().out
    assert "= TB Bowler" in out
    assert "= species pos hybrid nn" in out


def test_show_reports_diagnostics(write_xml, stanza, capsys) -> None:
    path = write_xml(stanza('<crack width="abc"/>'))
    assert main(["show", "-c", str(path)]) == 0
    captured = capsys.readouterr()
    assert "Warning: ParseError" in captured.err
    assert "crack width" in captured.err
    assert "200.0 A" in captured.out


def test_diagnostics_reported_once(write_xml, stanza, capsys) -> None:
    path = write_xml(stanza('<crack width="abc"/>'))

    assert main(["show", "-c", str(path)]) == 0
    assert capsys.readouterr().err.count("abc") == 1

    assert main(["validate", "-c", str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out.count("abc") == 1
    assert "abc" not in captured.err


def test_validate_clean(example_xml: Path, capsys) -> None:
    assert main(["validate", "-c", str(example_xml)]) == 0
    assert "OK" in capsys.readouterr().out


def test_validate_reports_problems(write_xml, stanza, capsys) -> None:
    path = write_xml(stanza('<crack width="abc"/><io verbosity="loud"/><md time_step="2"/>'))
    assert main(["validate", "-c", str(path)]) == 1
    out = capsys.readouterr().out
    assert "2 problem(s)" in out
    assert "'abc'" in out
    assert "unknown verbosity" in out


def test_validate_strict(write_xml, stanza, capsys) -> None:
    path = write_xml(stanza('<crack width="abc"/>'))
    assert main(["validate", "--strict", "-c", str(path)]) == 1
    assert "Error: ParseError" in capsys.readouterr().err


def test_validate_reject_unknown(write_xml, stanza, capsys) -> None:
    path = write_xml(stanza('<crack bogus="1"/>'))
    assert main(["validate", "-c", str(path)]) == 0
    assert main(["validate", "--reject-unknown", "-c", str(path)]) == 1
    assert "UnknownKeyError" in capsys.readouterr().out


def test_validate_unreadable(tmp_path: Path, write_xml, capsys) -> None:
    assert main(["validate", "-c", str(tmp_path / "missing.xml")]) == 2
    broken = write_xml("<crack_params><md></crack_params>")
    assert main(["validate", "-c", str(broken)]) == 2
    assert "MarkupError" in capsys.readouterr().err


def test_validate_fatal(write_xml, stanza, capsys) -> None:
    names = ":".join(f"p{i}" for i in range(200))
    path = write_xml(stanza(f'<io print_properties="{names}"/>'))
    assert main(["validate", "-c", str(path)]) == 2
    assert "FatalConfigError" in capsys.readouterr().err


def test_validate_log_file(tmp_path: Path, write_xml, stanza) -> None:
    path = write_xml(stanza('<crack width="abc"/>'))
    log_path = tmp_path / "logs" / "run.jsonl"
    assert main(["validate", "-c", str(path), "--log-file", str(log_path)]) == 1

    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    warnings = [r for r in records if r["level"] == "WARNING"]
    assert warnings and warnings[0]["key"] == "crack_width"
    assert warnings[0]["raw"] == "abc"


def test_schema_yaml(capsys) -> None:
    assert main(["schema", "-n", "md"]) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert list(data) == ["md"]
    assert data["md"]["time_step"]["key"] == "md_time_step"
    assert data["md"]["time_step"]["kind"] == "real"
    assert data["md"]["time_step"]["default"] == "1.0"
    assert data["md"]["time_step"]["unit"] == "fs"


def test_schema_all_namespaces(capsys) -> None:
    assert main(["schema"]) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["io"]["verbosity"]["default"] == "NORMAL"
    assert data["hack"]["qm_zero_z_force"]["default"] == "F"


def test_schema_unknown_namespace(capsys) -> None:
    assert main(["schema", "-n", "bogus"]) == 2
