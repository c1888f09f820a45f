"""Tests for install_service (standalone clone variant)."""

import os

import pytest

from kiro_best_practices.core.manifest import GENERATED_FILE, MANAGED_DIRS, MANAGED_FILES
from kiro_best_practices.core.types import Language, LanguageSettings
from kiro_best_practices.errors import PreconditionError
from kiro_best_practices.services.install_service import run_install
from kiro_best_practices.tui import DefaultPrompter

from conftest import commit_all

ENGLISH = LanguageSettings()


def _snapshot(root):
    """Map every path under root to ('link', target) or ('file', content)."""
    state = {}
    for dirpath, dirnames, filenames in os.walk(root):
        if "kiro-best-practices" in dirnames:
            dirnames.remove("kiro-best-practices")
        for name in dirnames + filenames:
            path = os.path.join(dirpath, name)
            rel = os.path.relpath(path, root)
            if os.path.islink(path):
                state[rel] = ("link", os.readlink(path))
            elif os.path.isfile(path):
                with open(path, encoding="utf-8") as f:
                    state[rel] = ("file", f.read())
    return state


def test_install_clones_and_links(config):
    """Fresh HOME -> repo cloned, every managed file is a symlink into it."""
    result = run_install(config, DefaultPrompter(), verbose=False)

    assert result.repo_action == "cloned"
    assert (config.repo_dir / ".git").exists()
    for managed in MANAGED_FILES:
        link = config.kiro_home / managed.path
        assert link.is_symlink(), managed.path
        assert link.resolve() == (config.template_dir / managed.path).resolve()
    for name in MANAGED_DIRS:
        assert (config.kiro_home / name).is_dir()


def test_install_writes_generated_file_not_symlink(config):
    """deployment-workflow.md is rendered from the repo template, not linked."""
    languages = LanguageSettings(chat=Language.JAPANESE)
    run_install(config, DefaultPrompter(), verbose=False, languages=languages)

    generated = config.kiro_home / GENERATED_FILE
    assert generated.is_file()
    assert not generated.is_symlink()
    text = generated.read_text(encoding="utf-8")
    assert "Agent chat**: Japanese" in text
    assert "Documentation**: English" in text
    assert "{{" not in text
    assert text.startswith("---\ninclusion: always\n---")


def test_install_uses_env_language(config):
    """KIRO_LANG preset on the config skips the language questions."""
    config = config.with_overrides(
        chat_lang=Language.JAPANESE, doc_lang=Language.JAPANESE, comment_lang=Language.JAPANESE
    )
    run_install(config, DefaultPrompter(), verbose=False)

    text = (config.kiro_home / GENERATED_FILE).read_text(encoding="utf-8")
    assert "Agent chat**: Japanese" in text
    assert "Code comments**: Japanese" in text


def test_install_twice_is_idempotent(config):
    """Second run leaves the same tree and reports no conflicts."""
    run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
    first = _snapshot(config.kiro_home)

    result = run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
    second = _snapshot(config.kiro_home)

    assert result.repo_action == "updated"
    assert result.overwritten == []
    assert result.skipped == []
    assert first == second


def test_skip_policy_keeps_existing_file(config):
    """SKIP never deletes a pre-existing regular file."""
    existing = config.kiro_home / "steering" / "project.md"
    existing.parent.mkdir(parents=True)
    existing.write_text("my own rules\n", encoding="utf-8")

    result = run_install(config.with_overrides(skip=True), DefaultPrompter(), verbose=False, languages=ENGLISH)

    assert "steering/project.md" in result.skipped
    assert not existing.is_symlink()
    assert existing.read_text(encoding="utf-8") == "my own rules\n"
    assert (config.kiro_home / "steering" / "tech.md").is_symlink()


def test_skip_wins_over_overwrite(config):
    """With both SKIP and OVERWRITE set, nothing is deleted."""
    existing = config.kiro_home / "hooks" / "run-tests.json"
    existing.parent.mkdir(parents=True)
    existing.write_text("{}", encoding="utf-8")

    run_install(config.with_overrides(skip=True, overwrite=True), DefaultPrompter(), verbose=False, languages=ENGLISH)

    assert existing.read_text(encoding="utf-8") == "{}"


def test_non_interactive_default_overwrites(config):
    """No policy, no terminal -> conflicting file becomes a symlink."""
    existing = config.kiro_home / "settings" / "mcp.json"
    existing.parent.mkdir(parents=True)
    existing.write_text("{}", encoding="utf-8")

    result = run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)

    assert "settings/mcp.json" in result.overwritten
    assert existing.is_symlink()


def test_interactive_ask_each_file(config, scripted):
    """'Ask for each file' overwrites only the confirmed paths."""
    for rel in ("steering/project.md", "steering/tech.md"):
        path = config.kiro_home / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("local\n", encoding="utf-8")

    prompter = scripted(selects=["ask"], confirms=[True, False])
    result = run_install(config, prompter, verbose=False, languages=ENGLISH)

    assert result.overwritten == ["steering/project.md"]
    assert result.skipped == ["steering/tech.md"]
    assert (config.kiro_home / "steering" / "project.md").is_symlink()
    assert (config.kiro_home / "steering" / "tech.md").read_text(encoding="utf-8") == "local\n"


def test_interactive_menu_cancel(config, scripted):
    """Dismissed conflict menu cancels the install and touches nothing."""
    existing = config.kiro_home / "steering" / "project.md"
    existing.parent.mkdir(parents=True)
    existing.write_text("local\n", encoding="utf-8")

    result = run_install(config, scripted(selects=[None]), verbose=False, languages=ENGLISH)

    assert result.cancelled is True
    assert existing.read_text(encoding="utf-8") == "local\n"
    assert not (config.kiro_home / "hooks" / "run-tests.json").exists()


def test_interactive_menu_overwrite_all(config, scripted):
    """'Overwrite all' replaces every conflicting file without per-file questions."""
    for rel in ("steering/project.md", "hooks/run-tests.json"):
        path = config.kiro_home / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("local\n", encoding="utf-8")

    prompter = scripted(selects=["overwrite"])
    result = run_install(config, prompter, verbose=False, languages=ENGLISH)

    assert sorted(result.overwritten) == ["hooks/run-tests.json", "steering/project.md"]
    assert result.skipped == []
    assert (config.kiro_home / "steering" / "project.md").is_symlink()
    assert (config.kiro_home / "hooks" / "run-tests.json").is_symlink()
    assert len(prompter.asked) == 1


def test_interactive_menu_invalid_answer(config, scripted):
    """An answer outside the menu cancels the install like a dismissed menu."""
    existing = config.kiro_home / "steering" / "project.md"
    existing.parent.mkdir(parents=True)
    existing.write_text("local\n", encoding="utf-8")

    result = run_install(config, scripted(selects=["replace-some"]), verbose=False, languages=ENGLISH)

    assert result.cancelled is True
    assert result.ok is False
    assert existing.read_text(encoding="utf-8") == "local\n"


def test_existing_symlink_is_not_a_conflict(config, scripted, tmp_path):
    """A symlink from an older install is replaced without asking."""
    elsewhere = tmp_path / "old.json"
    elsewhere.write_text("{}", encoding="utf-8")
    link = config.kiro_home / "hooks" / "run-tests.json"
    link.parent.mkdir(parents=True)
    link.symlink_to(elsewhere)

    prompter = scripted()
    run_install(config, prompter, verbose=False, languages=ENGLISH)

    assert prompter.asked == []
    assert link.resolve() == (config.template_dir / "hooks" / "run-tests.json").resolve()


def test_edited_generated_file_is_a_conflict(config):
    """A locally edited generated file is kept with SKIP and rewritten otherwise."""
    run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
    generated = config.kiro_home / GENERATED_FILE
    generated.write_text("edited\n", encoding="utf-8")

    result = run_install(config.with_overrides(skip=True), DefaultPrompter(), verbose=False, languages=ENGLISH)
    assert result.skipped == [GENERATED_FILE]
    assert generated.read_text(encoding="utf-8") == "edited\n"

    run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
    assert "Agent chat**: English" in generated.read_text(encoding="utf-8")


def test_scripts_are_executable(config):
    run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)

    script = config.kiro_home / "scripts" / "security-check.sh"
    assert os.access(script, os.X_OK)


def test_update_resets_to_remote_tip(config, template_repo):
    """Existing clone is fast-forwarded to the new remote commit."""
    run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
    (template_repo / ".kiro" / "steering" / "tech.md").write_text("# Tech v2\n", encoding="utf-8")
    commit_all(template_repo, "update tech")

    result = run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)

    assert result.repo_action == "updated"
    tech = config.kiro_home / "steering" / "tech.md"
    assert tech.read_text(encoding="utf-8") == "# Tech v2\n"


def test_repo_dir_not_a_repository(config):
    """A plain directory where the clone should be is a precondition failure."""
    config.repo_dir.mkdir(parents=True)

    with pytest.raises(PreconditionError, match="not a git repository"):
        run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)


def test_missing_git_is_precondition_error(config, monkeypatch):
    monkeypatch.setattr("kiro_best_practices.repo.git.shutil.which", lambda name: None)

    with pytest.raises(PreconditionError, match="Git is not installed"):
        run_install(config, DefaultPrompter(), verbose=False, languages=ENGLISH)
