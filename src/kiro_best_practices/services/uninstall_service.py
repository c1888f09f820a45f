"""
Business logic for 'kiro-best-practices uninstall'.

Best-effort removal of everything run_install created under kiro_home.
A failed removal is recorded and reported, never raised: the goal is to
remove as much as possible. Project-local .kiro/ directories are not touched.
"""

import shutil

from kiro_best_practices.core.config import InstallerConfig
from kiro_best_practices.core.manifest import GENERATED_FILE, MANAGED_DIRS, MANAGED_FILES
from kiro_best_practices.core.types import UninstallResult
from kiro_best_practices.tui import Prompter
from kiro_best_practices.utils import Colors


def run_uninstall(
    config: InstallerConfig,
    prompter: Prompter,
    assume_yes: bool = False,
    verbose: bool = True,
) -> UninstallResult:
    kiro_home = config.kiro_home
    result = UninstallResult()

    if not kiro_home.is_dir():
        if verbose:
            print(f"ℹ️  {kiro_home} directory not found. Nothing to uninstall.")
        result.nothing_to_do = True
        return result

    if verbose:
        print(f"{Colors.YELLOW}⚠️  This will remove:{Colors.ENDC}")
        print(f"  - {config.repo_dir}")
        for name in MANAGED_DIRS:
            print(f"  - {kiro_home}/{name}/ (managed files)")
        print()
        print("⚠️  Your project-specific .kiro/ directories will NOT be affected.\n")

    if not (assume_yes or config.assume_yes):
        if not prompter.confirm("Continue?", default=False):
            if verbose:
                print("Cancelled.")
            result.cancelled = True
            return result

    if verbose:
        print("\n🗑️  Removing files...")

    if config.repo_dir.is_symlink() or config.repo_dir.is_file():
        _remove(config.repo_dir.unlink, "repository", result, verbose)
    elif config.repo_dir.is_dir():
        _remove(lambda: shutil.rmtree(config.repo_dir), "repository", result, verbose)

    for rel in [m.path for m in MANAGED_FILES] + [GENERATED_FILE]:
        path = kiro_home / rel
        if path.is_symlink() or path.is_file():
            _remove(path.unlink, rel, result, verbose)

    for name in MANAGED_DIRS:
        directory = kiro_home / name
        if directory.is_dir() and not directory.is_symlink() and not any(directory.iterdir()):
            _remove(directory.rmdir, f"{name} directory", result, verbose)

    if verbose:
        if result.failed:
            print(f"\n{Colors.YELLOW}⚠️  Could not remove:{Colors.ENDC}")
            for item in result.failed:
                print(f"  - {item}")
        print(f"\n{Colors.GREEN}✅ Uninstallation complete!{Colors.ENDC}\n")
        print("💡 Note: Your project-specific .kiro/ directories were not removed.")
        print("   You may want to clean up Git hooks in your projects manually.")
    return result


def _remove(action, label: str, result: UninstallResult, verbose: bool) -> None:
    try:
        action()
    except OSError as e:
        result.failed.append(f"{label}: {e}")
        return
    result.removed.append(label)
    if verbose:
        print(f"  ✓ Removed {label}")
