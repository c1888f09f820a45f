"""Shared fixtures: isolated HOME, a real local template repository, scripted prompts."""

import subprocess
from pathlib import Path

import pytest

from kiro_best_practices.core.config import InstallerConfig
from kiro_best_practices.tui import Prompter

CLEARED_ENV = [
    "KIRO_BRANCH",
    "KIRO_REPO_URL",
    "KIRO_HOME",
    "KIRO_LANG",
    "KIRO_CHAT_LANG",
    "KIRO_DOC_LANG",
    "KIRO_COMMENT_LANG",
    "KIRO_HOSTING",
    "KIRO_MCP",
    "KIRO_YES",
    "OVERWRITE",
    "SKIP",
    "GIRO_PATH",
]

TEMPLATE_FILES = {
    ".kiro/hooks/pre-commit-security.json": '{"name": "Pre-commit security check"}\n',
    ".kiro/hooks/run-all-tests.json": '{"name": "Run all tests"}\n',
    ".kiro/hooks/run-tests.json": '{"name": "Run tests"}\n',
    ".kiro/settings/mcp.json": '{"mcpServers": {}}\n',
    ".kiro/settings/mcp.local.json.example": '{"mcpServers": {"aws-docs": {"command": "uvx"}}}\n',
    ".kiro/steering/project.md": "# Project\n",
    ".kiro/steering/tech.md": "# Tech\n",
    ".kiro/steering/deployment-workflow.md": (
        "---\ninclusion: always\n---\n\n# Deployment Workflow\n\n"
        "- **Agent chat**: {{CHAT_LANG}}\n"
        "- **Documentation**: {{DOC_LANG}}\n"
        "- **Code comments**: {{COMMENT_LANG}}\n\n"
        "{{CHAT_INSTRUCTIONS}}\n"
    ),
    ".kiro/steering/common/project.md": "# Common project standards\n",
    ".kiro/scripts/security-check.sh": "#!/bin/sh\necho security\n",
    ".kiro/scripts/setup-git-hooks.sh": "#!/bin/sh\necho hooks\n",
    ".kiro/giro/steering-examples/common/structure-default.md": "# Structure (default)\n",
    ".kiro/giro/steering-examples/common/structure-aws.md": "# Structure (AWS)\n",
    ".kiro/giro/husky/pre-commit": "#!/bin/sh\ngitleaks protect\n",
    ".kiro/giro/github/workflows/ci.yml": "name: CI\n",
    ".kiro/giro/Makefile.example": "test:\n\techo test\n",
    ".kiro/giro/.tool-versions.example": "python 3.12.0\n",
}


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout


def init_repo(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return path


def commit_all(path: Path, message: str = "init") -> None:
    git(path, "add", "-A")
    git(path, "commit", "-q", "-m", message)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Fake HOME, clean installer variables, git identity and local-file submodules."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in CLEARED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_COUNT", "1")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "protocol.file.allow")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "always")
    return home


@pytest.fixture
def home(isolated_env) -> Path:
    return isolated_env


@pytest.fixture
def template_repo(tmp_path) -> Path:
    """A committed template repository on branch main."""
    repo = init_repo(tmp_path / "template")
    for rel, content in TEMPLATE_FILES.items():
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    commit_all(repo)
    return repo


@pytest.fixture
def config(template_repo, home) -> InstallerConfig:
    return InstallerConfig.from_env(
        {"HOME": str(home), "KIRO_REPO_URL": str(template_repo)}
    )


@pytest.fixture
def project_repo(tmp_path) -> Path:
    """A project repository with one commit."""
    project = init_repo(tmp_path / "project")
    (project / "README.md").write_text("# Project\n", encoding="utf-8")
    commit_all(project)
    return project


class ScriptedPrompter(Prompter):
    """Interactive prompter answering from fixed lists; an unexpected question fails the test."""

    interactive = True

    def __init__(self, selects=(), confirms=()):
        self.selects = list(selects)
        self.confirms = list(confirms)
        self.asked = []

    def select(self, message, choices, default=None):
        self.asked.append(message)
        return self.selects.pop(0)

    def confirm(self, message, default=False):
        self.asked.append(message)
        return self.confirms.pop(0)


@pytest.fixture
def scripted():
    return ScriptedPrompter
