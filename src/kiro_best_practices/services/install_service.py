"""
Business logic for 'kiro-best-practices install'.

Steps: 1) clone or fast-forward the template repository into ~/.kiro
       2) detect files that would be replaced and resolve them per policy
       3) link every managed file into the clone
       4) render the language-settings steering file
"""

import os
import stat
from pathlib import Path
from typing import Optional

from kiro_best_practices.core.config import InstallerConfig
from kiro_best_practices.core.manifest import GENERATED_FILE, MANAGED_DIRS, MANAGED_FILES
from kiro_best_practices.core.types import InstallResult, LanguageSettings
from kiro_best_practices.errors import PreconditionError
from kiro_best_practices.repo import GitRepo, clone, require_git
from kiro_best_practices.services.conflicts import apply_overwrites, find_conflicts, resolve_conflicts
from kiro_best_practices.services.language_service import render_language_file, write_language_file
from kiro_best_practices.tui import Prompter, ask_language_settings
from kiro_best_practices.utils import Colors


def run_install(
    config: InstallerConfig,
    prompter: Prompter,
    verbose: bool = True,
    languages: Optional[LanguageSettings] = None,
) -> InstallResult:
    """
    Install (or refresh) the shared configuration under config.kiro_home.

    Args:
        config: resolved environment/flag configuration
        prompter: answers conflict and language questions
        verbose: print progress
        languages: skip the language questions and use these settings

    Returns:
        InstallResult; cancelled=True when the conflict menu was dismissed
    """
    require_git()
    kiro_home = config.kiro_home
    result = InstallResult()

    if not kiro_home.is_dir():
        if verbose:
            print(f"📁 Creating {kiro_home} directory...")
        kiro_home.mkdir(parents=True, exist_ok=True)

    result.repo_action = _sync_repository(config, verbose)

    if languages is None:
        if verbose:
            print(f"\n{Colors.CYAN}🌐 Language Configuration{Colors.ENDC}\n")
        languages = ask_language_settings(
            prompter,
            config.language_defaults(),
            preset=(config.chat_lang, config.doc_lang, config.comment_lang),
        )
    generated_content = render_language_file(languages, _read_generated_template(config))

    if verbose:
        print(f"\n📋 Installing shared files to {kiro_home}/...")

    conflicts = find_conflicts(kiro_home, [m.path for m in MANAGED_FILES])
    if _generated_conflicts(kiro_home / GENERATED_FILE, generated_content):
        conflicts.append(GENERATED_FILE)

    resolution = resolve_conflicts(conflicts, config.conflict_policy, prompter, f"{kiro_home}/")
    if resolution.cancelled:
        result.cancelled = True
        return result
    apply_overwrites(kiro_home, resolution)
    result.overwritten = resolution.overwrite
    result.skipped = resolution.skip

    if verbose:
        print("  📁 Creating directory structure...")
    for name in MANAGED_DIRS:
        (kiro_home / name).mkdir(parents=True, exist_ok=True)

    if verbose:
        print("  🔗 Creating symlinks...")
    for managed in MANAGED_FILES:
        if managed.path in resolution.skip:
            continue
        source = config.template_dir / managed.source_path
        if not source.exists():
            result.missing_sources.append(managed.path)
            if verbose:
                print(f"  {Colors.YELLOW}⚠️  {managed.path}: not found in template repository{Colors.ENDC}")
        force_symlink(source, kiro_home / managed.path)
        if managed.is_script and source.exists():
            make_executable(source)
        result.linked.append(managed.path)

    if GENERATED_FILE not in resolution.skip:
        write_language_file(kiro_home / GENERATED_FILE, generated_content)
        result.generated.append(GENERATED_FILE)

    if verbose:
        _print_summary(config, result)
    return result


def force_symlink(source: Path, link: Path) -> None:
    """`ln -sf`: replace an existing link or file, then link."""
    if link.is_symlink() or link.is_file():
        link.unlink()
    link.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(source, link)


def make_executable(path: Path) -> None:
    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError:
        pass


def _sync_repository(config: InstallerConfig, verbose: bool) -> str:
    repo = GitRepo(config.repo_dir)
    if repo.exists:
        if verbose:
            print("📦 Repository already exists. Updating...")
        if not repo.is_repository:
            raise PreconditionError(
                f"{config.repo_dir} exists but is not a git repository",
                hints=[f"Please remove it manually: rm -rf {config.repo_dir}"],
            )
        repo.fetch_and_reset(config.branch)
        if verbose:
            print(f"{Colors.GREEN}✅ Repository updated to latest version{Colors.ENDC}")
        return "updated"

    if verbose:
        print("📦 Cloning repository...")
    clone(config.repo_url, config.repo_dir, config.branch)
    if verbose:
        print(f"{Colors.GREEN}✅ Repository cloned{Colors.ENDC}")
    return "cloned"


def _read_generated_template(config: InstallerConfig) -> Optional[str]:
    template = config.template_dir / GENERATED_FILE
    if template.is_file():
        return template.read_text(encoding="utf-8")
    return None


def _generated_conflicts(path: Path, content: str) -> bool:
    if path.is_symlink() or not path.exists():
        return False
    if path.is_dir():
        return True
    try:
        return path.read_text(encoding="utf-8") != content
    except (OSError, UnicodeDecodeError):
        return True


def _print_summary(config: InstallerConfig, result: InstallResult) -> None:
    kiro_home = config.kiro_home
    if result.skipped:
        print(f"\n{Colors.YELLOW}⏭️  Skipped files (existing files kept):{Colors.ENDC}")
        for item in result.skipped:
            print(f"  - {item}")

    print(f"\n{Colors.GREEN}✅ Installation complete!{Colors.ENDC}\n")
    print(f"📋 Installed to {kiro_home}/:")
    print("  ✓ hooks/          - Agent hooks (JSON)")
    print("  ✓ settings/       - MCP configuration templates")
    print("  ✓ steering/       - Common development guidelines")
    print("  ✓ scripts/        - Git hooks and utility scripts")
    print()
    print("📖 Next Steps:\n")
    print("1. Setup Git hooks in your project:")
    print("   cd /path/to/your/project")
    print("   kiro-best-practices setup-hooks\n")
    print("2. Copy project templates (optional):")
    print(f"   cp {config.template_dir}/templates/Makefile.example ./Makefile")
    print(f"   cp {config.template_dir}/templates/.tool-versions.example ./.tool-versions\n")
    print("3. MCP configuration:")
    print(f"   Common MCP settings are in {kiro_home}/settings/mcp.json")
    print("   For project-specific settings, create .kiro/settings/mcp.json\n")
    print(f"💡 Tip: Kiro reads from both {kiro_home}/ and .kiro/")
    print(f"📚 Documentation: {config.template_dir}/docs/")
