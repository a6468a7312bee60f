import json

import pytest

from password_guard import cli, config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "SETTINGS_PATH", tmp_path / "config" / "strength_settings.json")
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(cli, "SETTINGS_PATH", tmp_path / "config" / "strength_settings.json")


def test_check_json(monkeypatch, capsys):
    monkeypatch.setenv("PG_TEST_PASSWORD", "password")
    assert cli.main(["check", "--password-env", "PG_TEST_PASSWORD", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["score"] == 40
    assert payload["strength"] == "medium"
    assert len(payload["suggestions"]) == 3


def test_check_text_without_suggestions(monkeypatch, capsys):
    monkeypatch.setenv("PG_TEST_PASSWORD", "Password123!")
    assert cli.main(["check", "--password-env", "PG_TEST_PASSWORD", "--no-suggestions"]) == 0
    out = capsys.readouterr().out
    assert "100% Very Strong" in out
    assert "[x] At least 1 special character" in out
    assert "Suggestions:" not in out


def test_suggest_prints_one_per_line(monkeypatch, capsys):
    monkeypatch.setenv("PG_TEST_PASSWORD", "abc")
    assert cli.main(["suggest", "--password-env", "PG_TEST_PASSWORD", "--count", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert "abc" not in lines


def test_suggest_empty_password(monkeypatch, capsys):
    monkeypatch.setattr(cli, "prompt_password", lambda *args, **kwargs: "   ")
    assert cli.main(["suggest"]) == 1
    assert "empty password" in capsys.readouterr().out


def test_requirements_listing(capsys):
    assert cli.main(["requirements"]) == 0
    out = capsys.readouterr().out
    assert "- length: At least 8 characters" in out
    assert len(out.splitlines()) == 5


def test_interactive_single_round(monkeypatch, capsys):
    monkeypatch.setattr(cli, "prompt_password", lambda *args, **kwargs: "abc")
    monkeypatch.setattr(cli, "prompt_continue", lambda *args, **kwargs: False)
    assert cli.main(["interactive", "--count", "1"]) == 0
    out = capsys.readouterr().out
    assert "20% Weak" in out
    assert "Suggestions:" in out


def test_init_writes_settings(tmp_path, capsys):
    assert cli.main(["init"]) == 0
    assert (tmp_path / "config" / "strength_settings.json").exists()
    assert "Wrote default settings" in capsys.readouterr().out
    assert cli.main(["init"]) == 0
    assert "already present" in capsys.readouterr().out


def test_remote_connection_error_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("PG_TEST_PASSWORD", "abc")
    code = cli.main(["check", "--password-env", "PG_TEST_PASSWORD", "--remote", "http://127.0.0.1:9"])
    assert code == 2
    assert capsys.readouterr().out.startswith("Error:")
