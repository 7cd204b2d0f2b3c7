import json

import pytest

from builders import babel_jsx_text, babel_locale_ternary, babel_translation_call

from i18nscan import cli


def write_ast(directory, name, payload):
    directory.mkdir(parents=True, exist_ok=True)
    ast_path = directory / f"{name}.ast.json"
    ast_path.write_text(json.dumps(payload), encoding="utf-8")
    return ast_path


def test_cli_generates_json_report(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_ast(tmp_path / "src", "Login.tsx", babel_jsx_text())
    output_path = tmp_path / "artifacts" / "scan.json"

    exit_code = cli.main([str(tmp_path / "src"), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert "i18n Scan Summary" in captured.out
    assert "Report written to" in captured.out
    assert exit_code == 1
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["summary"]["warning"] == 1
    assert data["findings"][0]["rule_id"] == "jsx-text"
    assert data["passed"] is False


def test_cli_passes_on_translated_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_ast(tmp_path / "src", "Errors.ts", babel_translation_call())

    exit_code = cli.main([str(tmp_path / "src"), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["summary"]["info"] == 1
    assert data["findings"][0]["key"] == "errors.notFound"


def test_cli_fails_on_locale_ternary(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ast_path = write_ast(tmp_path, "Greeting.tsx", babel_locale_ternary())

    assert cli.main([str(ast_path)]) == 2


def test_cli_reports_unreadable_ast(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "Broken.tsx.ast.json").write_text("{not json", encoding="utf-8")

    exit_code = cli.main([str(tmp_path), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 2
    assert data["files"][0]["error"]
    assert data["diagnostics"][0]["kind"] == "malformed-tree"


def test_cli_disable_flag_turns_rule_off(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_ast(tmp_path, "Login.tsx", babel_jsx_text())

    assert cli.main([str(tmp_path), "--disable", "jsx-text"]) == 0


def test_cli_rule_flag_and_config_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_ast(tmp_path / "src", "Login.tsx", babel_jsx_text())
    write_ast(tmp_path / "src", "Greeting.tsx", babel_locale_ternary())
    config_path = tmp_path / "scan.yaml"
    config_path.write_text("rules:\n  ternary-locale: info\n", encoding="utf-8")

    exit_code = cli.main(
        [str(tmp_path / "src"), "--config", str(config_path), "--rule", "ternary-locale", "--format", "json"]
    )

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["summary"]["by_rule"] == {"ternary-locale": 1}


def test_cli_rejects_unknown_rule(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit):
        cli.main([str(tmp_path), "--rule", "no-such-rule"])


def test_cli_rejects_missing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit):
        cli.main([str(tmp_path), "--config", str(tmp_path / "missing.yaml")])
