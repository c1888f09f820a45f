"""
Submodule variant: vendor the template as <project>/.kiro-template and link
the project's .kiro/, .husky and .github into it.

Three flows: install_submodule, update_submodule, uninstall_submodule.
"""

import os
import shutil
from pathlib import Path
from typing import Optional

from kiro_best_practices.core.config import InstallerConfig
from kiro_best_practices.core.manifest import (
    LANGUAGE_FILE,
    PROJECT_KIRO_DIR,
    SUBMODULE_COMMIT_PATHS,
    SUBMODULE_DIR,
    SUBMODULE_LINKS,
)
from kiro_best_practices.core.types import ConflictPolicy, LanguageSettings, SubmoduleResult, SymlinkSpec
from kiro_best_practices.errors import ConfigError, PreconditionError
from kiro_best_practices.repo import GitRepo, require_git
from kiro_best_practices.services.conflicts import apply_overwrites, find_conflicts, resolve_conflicts
from kiro_best_practices.services.language_service import render_language_file, write_language_file
from kiro_best_practices.services.mcp_service import MCP_CHOICES, validate_choice, write_mcp_local
from kiro_best_practices.tui import Prompter, ask_language_settings
from kiro_best_practices.utils import Colors

INSTALL_COMMIT_MESSAGE = "chore: Add giro configuration as submodule"
UPDATE_COMMIT_MESSAGE = "chore: Update giro template"

EXISTING_CHOICES = [
    ("Update submodule to latest", "update"),
    ("Reinstall (remove and re-add)", "reinstall"),
    ("Cancel", "cancel"),
]

HOSTING_CHOICES = [
    ("None (Generic structure)", "none"),
    ("AWS (Lambda, API Gateway, DynamoDB, S3, CloudFront)", "aws"),
]

STRUCTURE_TEMPLATES = {
    "none": "structure-default.md",
    "aws": "structure-aws.md",
}

PROJECT_PLACEHOLDER = """\
# Project Standards

Project-specific standards and conventions.

See `.kiro/steering/common/project.md` for common standards.

---

## Project-Specific Rules

Add your project-specific rules here.

## Team Conventions

Add your team conventions here.

## Workflow

Add your workflow here.
"""

TECH_PLACEHOLDER = """\
# Technical Details

Project-specific technical details and architecture.

See `.kiro/steering/common/tech.md` for common practices.

---

## Architecture

Describe your project architecture here.

## Technology Stack

List your technology stack here.

## Development Setup

Add development setup instructions here.
"""

# destination in project -> file under .kiro-template/.kiro/giro
PROJECT_TEMPLATES = {
    "Makefile": "Makefile.example",
    ".tool-versions": ".tool-versions.example",
}


def install_submodule(
    project: Path,
    config: InstallerConfig,
    prompter: Prompter,
    languages: Optional[LanguageSettings] = None,
    commit: Optional[bool] = None,
    verbose: bool = True,
) -> SubmoduleResult:
    """
    Add the template as a submodule and wire the project's .kiro/ to it.

    Args:
        project: project root (must contain .git)
        config: branch, URL, conflict policy, preset answers
        prompter: answers menus for anything not preset
        languages: skip the language questions
        commit: commit at the end; None asks (default yes)

    Returns:
        SubmoduleResult with action "installed", "updated", "cancelled" (menu)
        or "aborted" (conflict menu dismissed)
    """
    require_git()
    if not (project / ".git").exists():
        raise PreconditionError("Not a git repository. Please run 'git init' first.")
    if config.hosting is not None:
        validate_hosting(config.hosting)
    if config.mcp is not None:
        validate_choice(config.mcp)

    repo = GitRepo(project)
    result = SubmoduleResult()
    submodule = project / SUBMODULE_DIR

    if submodule.exists():
        if verbose:
            print(f"\n{Colors.YELLOW}⚠️  {SUBMODULE_DIR} submodule already exists.{Colors.ENDC}\n")
        mode = prompter.select("Choose update mode:", EXISTING_CHOICES, default="update")
        if mode == "reinstall":
            if verbose:
                print("📦 Removing old submodule...")
            repo.submodule_remove(SUBMODULE_DIR)
            if submodule.exists():
                shutil.rmtree(submodule)
            if verbose:
                print(f"{Colors.GREEN}✅ Old submodule removed{Colors.ENDC}")
        elif mode == "update":
            if verbose:
                print("📦 Updating submodule...")
            repo.submodule_update_remote(SUBMODULE_DIR)
            result.action = "updated"
            if verbose:
                print(f"{Colors.GREEN}✅ Submodule updated{Colors.ENDC}\n")
                print("💡 Commit the update:")
                print(f"   git add {SUBMODULE_DIR}")
                print(f"   git commit -m '{UPDATE_COMMIT_MESSAGE}'")
            return result
        else:
            if verbose:
                print("Installation cancelled.")
            result.action = "cancelled"
            return result

    if verbose:
        print("📦 Adding giro as submodule...")
    repo.submodule_add(config.submodule_url, SUBMODULE_DIR, config.branch)
    repo.submodule_init()
    if verbose:
        print(f"{Colors.GREEN}✅ Submodule added: {SUBMODULE_DIR}{Colors.ENDC}\n")
        print(f"📁 Setting up {PROJECT_KIRO_DIR} directory...")

    kiro_dir = project / PROJECT_KIRO_DIR
    (kiro_dir / "steering").mkdir(parents=True, exist_ok=True)
    (kiro_dir / "settings").mkdir(parents=True, exist_ok=True)

    conflicts = find_conflicts(project, [spec.link for spec in SUBMODULE_LINKS])
    # real project directories (e.g. a CI .github) are only replaced on request
    resolution = resolve_conflicts(
        conflicts, config.conflict_policy, prompter, f"{project}/", unattended=ConflictPolicy.SKIP
    )
    if resolution.cancelled:
        result.action = "aborted"
        return result
    apply_overwrites(project, resolution)
    result.skipped = resolution.skip

    if verbose:
        print("🔗 Creating symlinks for common files...")
    for spec in SUBMODULE_LINKS:
        if spec.link in resolution.skip:
            continue
        create_relative_link(project, spec)
        result.linked.append(spec.link)

    if languages is None:
        if verbose:
            print(f"\n{Colors.CYAN}🌐 Language Configuration{Colors.ENDC}\n")
        languages = ask_language_settings(
            prompter,
            config.language_defaults(),
            preset=(config.chat_lang, config.doc_lang, config.comment_lang),
        )
    write_language_file(project / LANGUAGE_FILE, render_language_file(languages))
    result.created.append(LANGUAGE_FILE)
    if verbose:
        print(f"{Colors.GREEN}✅ Language configuration complete{Colors.ENDC}")

    _setup_structure(project, config, prompter, result, verbose)
    _create_placeholders(project, result, verbose)
    _copy_project_templates(project, result, verbose)
    _setup_mcp(project, config, prompter, result, verbose)

    result.action = "installed"
    if verbose:
        print(f"\n{Colors.GREEN}✨ Installation complete!{Colors.ENDC}\n")

    if commit is None:
        commit = bool(prompter.confirm("Commit changes now?", default=True))
    if commit:
        existing = [p for p in SUBMODULE_COMMIT_PATHS if (project / p).exists() or (project / p).is_symlink()]
        repo.add(*existing)
        result.committed = repo.commit(INSTALL_COMMIT_MESSAGE)
        if verbose:
            if result.committed:
                print(f"{Colors.GREEN}✅ Changes committed{Colors.ENDC}")
            else:
                print(f"{Colors.YELLOW}⚠️  Commit failed. You may need to commit manually.{Colors.ENDC}")

    if verbose:
        print("\n📋 Next steps:\n")
        print("1. Install required tools:")
        print("   brew install gitleaks gh")
        print("   gh auth login\n")
        print("2. Customize for your project:")
        print("   - Edit Makefile")
        print("   - Edit .kiro/steering/project.md")
        print("   - Edit .kiro/steering/tech.md\n")
        print("📚 To update later:")
        print("   kiro-best-practices submodule update")
        print(f"\n📚 Documentation: {config.submodule_url}")
    return result


def validate_hosting(hosting: str) -> str:
    if hosting not in STRUCTURE_TEMPLATES:
        raise ConfigError(f"Unknown hosting platform '{hosting}'", hints=["Use none or aws"])
    return hosting


def create_relative_link(project: Path, spec: SymlinkSpec) -> Path:
    """Create project/spec.link pointing at spec.target, relative to the link's directory."""
    link = project / spec.link
    if link.is_symlink():
        link.unlink()
    link.parent.mkdir(parents=True, exist_ok=True)
    target = os.path.relpath(project / spec.target, link.parent)
    os.symlink(target, link)
    return link


def update_submodule(
    project: Path,
    prompter: Prompter,
    commit: Optional[bool] = None,
    verbose: bool = True,
) -> SubmoduleResult:
    if not (project / SUBMODULE_DIR).is_dir():
        raise PreconditionError(
            f"{SUBMODULE_DIR} submodule not found",
            hints=[
                "Maybe you used the standalone version?",
                "Try: kiro-best-practices install",
            ],
        )

    repo = GitRepo(project)
    result = SubmoduleResult()
    if verbose:
        print("📦 Updating submodule to latest...")
    repo.submodule_update_remote(SUBMODULE_DIR)

    if repo.is_clean(SUBMODULE_DIR):
        if verbose:
            print(f"{Colors.GREEN}✅ Already up to date{Colors.ENDC}")
        result.action = "up-to-date"
        return result

    result.action = "updated"
    changes = GitRepo(project / SUBMODULE_DIR).log_oneline("HEAD@{1}..HEAD")
    result.changes = changes or []
    if verbose:
        print(f"{Colors.GREEN}✅ Submodule updated{Colors.ENDC}\n")
        print("📋 Changes:")
        if changes is None:
            print("  (Unable to show changes)")
        for line in result.changes:
            print(f"  {line}")
        print()

    if commit is None:
        commit = bool(prompter.confirm("Commit changes now?", default=True))
    if commit:
        repo.add(SUBMODULE_DIR)
        result.committed = repo.commit(UPDATE_COMMIT_MESSAGE)
        if verbose:
            if result.committed:
                print(f"{Colors.GREEN}✅ Changes committed{Colors.ENDC}")
            else:
                print(f"{Colors.YELLOW}⚠️  Commit failed. You may need to commit manually.{Colors.ENDC}")
    elif verbose:
        print("ℹ️  To commit manually:")
        print(f"   git add {SUBMODULE_DIR}")
        print(f"   git commit -m '{UPDATE_COMMIT_MESSAGE}'")

    if verbose:
        print(f"\n{Colors.GREEN}✨ Update complete!{Colors.ENDC}")
    return result


def uninstall_submodule(
    project: Path,
    config: InstallerConfig,
    prompter: Prompter,
    assume_yes: bool = False,
    verbose: bool = True,
) -> SubmoduleResult:
    if not (project / SUBMODULE_DIR).is_dir():
        raise PreconditionError(
            f"{SUBMODULE_DIR} submodule not found",
            hints=[
                "Maybe you used the standalone version?",
                "Try: kiro-best-practices uninstall",
            ],
        )

    result = SubmoduleResult()
    if verbose:
        print(f"{Colors.YELLOW}⚠️  This will remove:{Colors.ENDC}")
        print(f"  - {SUBMODULE_DIR}/ (submodule)")
        print(f"  - {PROJECT_KIRO_DIR}/")
        print("  - .husky, .github (when they are links into the submodule)\n")

    confirmed = assume_yes or config.assume_yes
    if not confirmed and not prompter.confirm("Continue?", default=False):
        if verbose:
            print("Cancelled.")
        result.action = "cancelled"
        return result

    if verbose:
        print("📦 Removing submodule...")
    failed = GitRepo(project).submodule_remove(SUBMODULE_DIR)
    submodule = project / SUBMODULE_DIR
    if submodule.exists():
        shutil.rmtree(submodule, ignore_errors=True)
    result.removed.append(SUBMODULE_DIR)
    if verbose:
        for step in failed:
            print(f"  {Colors.YELLOW}⚠️  {step} failed (ignored){Colors.ENDC}")
        print(f"{Colors.GREEN}✅ Submodule removed{Colors.ENDC}")
        print("📁 Removing directories...")

    kiro_dir = project / PROJECT_KIRO_DIR
    if kiro_dir.is_symlink():
        kiro_dir.unlink()
        result.removed.append(PROJECT_KIRO_DIR)
    elif kiro_dir.is_dir():
        shutil.rmtree(kiro_dir, ignore_errors=True)
        result.removed.append(PROJECT_KIRO_DIR)

    for name in (".husky", ".github"):
        path = project / name
        if path.is_symlink():
            path.unlink()
            result.removed.append(name)
        elif path.exists() and verbose:
            print(f"  {Colors.YELLOW}⏭️  Kept {name}/ (not managed by the installer){Colors.ENDC}")
    if verbose:
        print(f"{Colors.GREEN}✅ Directories removed{Colors.ENDC}")

    for name in PROJECT_TEMPLATES:
        path = project / name
        if path.exists() and prompter.confirm(f"Remove {name}?", default=False):
            try:
                path.unlink()
            except OSError as e:
                print(f"  {Colors.YELLOW}⚠️  Could not remove {name}: {e}{Colors.ENDC}")
                continue
            result.removed.append(name)
            if verbose:
                print(f"{Colors.GREEN}✅ {name} removed{Colors.ENDC}")

    result.action = "removed"
    if verbose:
        print(f"\n{Colors.GREEN}✨ Uninstallation complete!{Colors.ENDC}\n")
        print("📋 Next steps:")
        print("  git add .")
        print("  git commit -m 'chore: Remove giro configuration'")
    return result


def _setup_structure(project: Path, config: InstallerConfig, prompter: Prompter,
                     result: SubmoduleResult, verbose: bool) -> None:
    hosting = config.hosting
    if hosting is None:
        if verbose:
            print(f"\n{Colors.CYAN}☁️  Hosting Platform{Colors.ENDC}")
        hosting = prompter.select("Select your hosting platform:", HOSTING_CHOICES, default="none") or "none"
    validate_hosting(hosting)

    source = (project / SUBMODULE_DIR / ".kiro" / "giro" / "steering-examples" / "common"
              / STRUCTURE_TEMPLATES[hosting])
    target = project / PROJECT_KIRO_DIR / "steering" / "structure.md"
    if not source.is_file():
        if verbose:
            print(f"  {Colors.YELLOW}⚠️  {source.name} not found in template, skipping structure.md{Colors.ENDC}")
        return
    shutil.copyfile(source, target)
    result.created.append(f"{PROJECT_KIRO_DIR}/steering/structure.md")
    if verbose:
        label = "AWS" if hosting == "aws" else "Default"
        print(f"  {Colors.GREEN}✅ {label} structure template copied{Colors.ENDC}")


def _create_placeholders(project: Path, result: SubmoduleResult, verbose: bool) -> None:
    steering = project / PROJECT_KIRO_DIR / "steering"
    for name, content in (("project.md", PROJECT_PLACEHOLDER), ("tech.md", TECH_PLACEHOLDER)):
        path = steering / name
        if path.exists():
            continue
        path.write_text(content, encoding="utf-8")
        result.created.append(f"{PROJECT_KIRO_DIR}/steering/{name}")
        if verbose:
            print(f"  {Colors.GREEN}✅ {name} created{Colors.ENDC}")


def _copy_project_templates(project: Path, result: SubmoduleResult, verbose: bool) -> None:
    giro_dir = project / SUBMODULE_DIR / ".kiro" / "giro"
    for dest_name, template_name in PROJECT_TEMPLATES.items():
        dest = project / dest_name
        source = giro_dir / template_name
        if dest.exists():
            if verbose:
                print(f"{Colors.YELLOW}⚠️  {dest_name} already exists. Skipping.{Colors.ENDC}")
            continue
        if not source.is_file():
            if verbose:
                print(f"{Colors.YELLOW}⚠️  {template_name} not found in template. Skipping.{Colors.ENDC}")
            continue
        shutil.copyfile(source, dest)
        result.created.append(dest_name)
        if verbose:
            print(f"{Colors.GREEN}✅ {dest_name} created from template{Colors.ENDC}")


def _setup_mcp(project: Path, config: InstallerConfig, prompter: Prompter,
               result: SubmoduleResult, verbose: bool) -> None:
    choice = config.mcp
    if choice is None:
        if verbose:
            print(f"\n{Colors.CYAN}🔧 MCP Server Configuration{Colors.ENDC}")
        if prompter.confirm("Do you want to enable optional MCP servers?", default=False):
            choice = prompter.select("Available optional MCP servers:", MCP_CHOICES, default="none")
        choice = choice or "none"

    settings_dir = project / PROJECT_KIRO_DIR / "settings"
    example = project / SUBMODULE_DIR / ".kiro" / "settings" / "mcp.local.json.example"
    written = write_mcp_local(settings_dir, choice, example)
    if written is None:
        if verbose:
            print("ℹ️  Skipping optional MCP servers")
        return
    result.created.append(f"{PROJECT_KIRO_DIR}/settings/{written.name}")
    if verbose:
        print(f"{Colors.GREEN}✅ {choice} enabled{Colors.ENDC}")
