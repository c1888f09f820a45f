"""End-to-end tests through the argparse entry point."""

import json

import pytest

from kiro_best_practices.cli import _main


@pytest.fixture
def cli_env(monkeypatch, template_repo):
    monkeypatch.setenv("KIRO_REPO_URL", str(template_repo))
    return template_repo


def test_install_japanese_then_uninstall(monkeypatch, cli_env, home):
    monkeypatch.setenv("KIRO_LANG", "Japanese")

    assert _main(["install", "--no-interactive"]) == 0

    generated = home / ".kiro" / "steering" / "deployment-workflow.md"
    assert "Agent chat**: Japanese" in generated.read_text(encoding="utf-8")
    assert (home / ".kiro" / "hooks" / "run-tests.json").is_symlink()

    assert _main(["uninstall", "--yes"]) == 0

    for name in ("hooks", "settings", "steering", "scripts", "kiro-best-practices"):
        assert not (home / ".kiro" / name).exists()


def test_lang_flag_overrides_env(monkeypatch, cli_env, home):
    monkeypatch.setenv("KIRO_LANG", "Japanese")

    assert _main(["install", "--no-interactive", "--lang", "English"]) == 0

    generated = home / ".kiro" / "steering" / "deployment-workflow.md"
    assert "Agent chat**: English" in generated.read_text(encoding="utf-8")


def test_status_json(cli_env, capsys):
    assert _main(["install", "--no-interactive"]) == 0
    capsys.readouterr()

    assert _main(["status", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["healthy"] is True
    assert {p["state"] for p in data["paths"]} <= {"linked", "generated"}


def test_unknown_language_is_an_error(cli_env, capsys):
    assert _main(["install", "--no-interactive", "--lang", "Klingon"]) == 1
    assert "Unknown language" in capsys.readouterr().err


def test_setup_hooks_outside_project(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert _main(["setup-hooks"]) == 1
    assert ".husky directory not found" in capsys.readouterr().err


def test_sync_missing_giro_path(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert _main(["sync", "--yes", "--giro-path", str(tmp_path / "missing")]) == 1
    err = capsys.readouterr().err
    assert "giro repository not found" in err
    assert "git clone" in err


def test_no_command_prints_help(capsys):
    assert _main([]) == 0
    assert "usage: kiro-best-practices" in capsys.readouterr().out


def test_uninstall_ignores_stale_hosting(monkeypatch, cli_env, home):
    assert _main(["install", "--no-interactive"]) == 0
    monkeypatch.setenv("KIRO_HOSTING", "gcp")

    assert _main(["uninstall", "--yes"]) == 0
    assert not (home / ".kiro" / "kiro-best-practices").exists()


def test_invalid_conflict_choice_exits_1(monkeypatch, cli_env, home, scripted):
    from kiro_best_practices import tui

    existing = home / ".kiro" / "steering" / "project.md"
    existing.parent.mkdir(parents=True)
    existing.write_text("local\n", encoding="utf-8")
    monkeypatch.setenv("KIRO_LANG", "English")
    monkeypatch.setattr(tui, "get_prompter", lambda interactive: scripted(selects=["bogus"]))

    assert _main(["install"]) == 1
    assert existing.read_text(encoding="utf-8") == "local\n"
