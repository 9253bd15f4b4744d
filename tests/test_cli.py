from __future__ import annotations

import json

from conftest import make_raw_config
from ipredirect import cli


def _write_rules(tmp_path, payload):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_prints_decision(tmp_path, capsys):
    path = _write_rules(tmp_path, make_raw_config())

    code = cli.main(["--config", str(path), "--browser-language", "de", "--country", "DE", "--domain", "example.de"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["identifier"] == "1_1"
    assert out["language_parameter"] == 1
    assert out["used_fallback"] is False
    assert out["scores"] == {"1_0": 1, "1_1": 10, "1_2": 1}


def test_cli_reports_fallback(tmp_path, capsys):
    path = _write_rules(tmp_path, make_raw_config())

    assert cli.main(["--config", str(path), "--browser-language", "fr"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["identifier"] == "1_0"
    assert out["used_fallback"] is True


def test_cli_rejects_incomplete_rules(tmp_path, capsys):
    payload = make_raw_config()
    del payload["noMatchingConfiguration"]
    path = _write_rules(tmp_path, payload)

    assert cli.main(["--config", str(path)]) == 2
    assert capsys.readouterr().out == ""


def test_cli_missing_file(tmp_path):
    assert cli.main(["--config", str(tmp_path / "absent.json")]) == 2


def test_cli_rejects_non_utf8_rules(tmp_path):
    path = tmp_path / "rules.json"
    path.write_bytes(b'{"quantifier": "\xff\xfe"}')
    assert cli.main(["--config", str(path)]) == 2


def test_cli_rejects_directory_as_rules(tmp_path):
    assert cli.main(["--config", str(tmp_path)]) == 2
