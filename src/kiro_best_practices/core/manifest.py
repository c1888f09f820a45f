"""
Fixed lists of everything the installers create.

The uninstallers and the status report read the same lists, so a path added
here is installed, reported and removed without further changes.
"""

from typing import List

from kiro_best_practices.core.types import ManagedFile, SymlinkSpec

REPO_DIR_NAME = "kiro-best-practices"
TEMPLATE_SUBDIR = ".kiro"

MANAGED_DIRS = ["hooks", "settings", "steering", "scripts"]

MANAGED_FILES: List[ManagedFile] = [
    ManagedFile("hooks/pre-commit-security.json"),
    ManagedFile("hooks/run-all-tests.json"),
    ManagedFile("hooks/run-tests.json"),
    ManagedFile("settings/mcp.json"),
    ManagedFile("settings/mcp.local.json.example"),
    ManagedFile("steering/project.md"),
    ManagedFile("steering/tech.md"),
    ManagedFile("scripts/security-check.sh"),
    ManagedFile("scripts/setup-git-hooks.sh"),
]

# Written, not linked: local edits survive until the next install.
GENERATED_FILE = "steering/deployment-workflow.md"

# --- submodule variant ---

SUBMODULE_DIR = ".kiro-template"
PROJECT_KIRO_DIR = ".kiro"
LANGUAGE_FILE = ".kiro/steering/language.md"

SUBMODULE_LINKS: List[SymlinkSpec] = [
    SymlinkSpec(".kiro/hooks", f"{SUBMODULE_DIR}/.kiro/hooks"),
    SymlinkSpec(".kiro/steering/common", f"{SUBMODULE_DIR}/.kiro/steering/common"),
    SymlinkSpec(".kiro/steering-examples", f"{SUBMODULE_DIR}/.kiro/giro/steering-examples"),
    SymlinkSpec(".kiro/scripts", f"{SUBMODULE_DIR}/.kiro/giro"),
    SymlinkSpec(".kiro/settings/mcp.json", f"{SUBMODULE_DIR}/.kiro/settings/mcp.json"),
    SymlinkSpec(
        ".kiro/settings/mcp.local.json.example",
        f"{SUBMODULE_DIR}/.kiro/settings/mcp.local.json.example",
    ),
    SymlinkSpec(".husky", f"{SUBMODULE_DIR}/.kiro/giro/husky"),
    SymlinkSpec(".github", f"{SUBMODULE_DIR}/.kiro/giro/github"),
]

# Paths staged by the submodule installer's commit step.
SUBMODULE_COMMIT_PATHS = [
    ".gitmodules",
    SUBMODULE_DIR,
    PROJECT_KIRO_DIR,
    ".husky",
    ".github",
    "Makefile",
    ".tool-versions",
]

# --- sync-to-template allow-list (relative to the project root) ---

SYNC_PATHS = [
    ".kiro/hooks",
    ".kiro/steering/common",
    ".kiro/steering-examples",
    ".kiro/settings/mcp.json",
    ".kiro/settings/mcp.local.json.example",
    ".kiro/scripts",
]

HUSKY_HOOKS = ["pre-commit", "pre-push", "_/husky.sh"]
