"""
Business logic for 'kiro-best-practices sync'.

One-way copy of the shared parts of a project's .kiro/ back into a local
checkout of the template repository, for upstream contribution.
Later copy wins; nothing is merged or committed.
"""

import shutil
from pathlib import Path

from kiro_best_practices.core.manifest import SYNC_PATHS
from kiro_best_practices.core.types import SyncResult
from kiro_best_practices.errors import PreconditionError
from kiro_best_practices.repo import GitRepo
from kiro_best_practices.tui import Prompter
from kiro_best_practices.utils import Colors

TEMPLATE_REPO_URL = "https://github.com/kumagaias/giro"


def run_sync(
    project: Path,
    giro_path: Path,
    prompter: Prompter,
    assume_yes: bool = False,
    verbose: bool = True,
) -> SyncResult:
    """
    Copy SYNC_PATHS from project into giro_path.

    Args:
        project: working project root (source)
        giro_path: template repository checkout (destination)
        prompter: asks for confirmation
        assume_yes: skip the confirmation

    Returns:
        SyncResult with copied/failed paths and `git status --short` lines
    """
    if not giro_path.is_dir():
        raise PreconditionError(
            f"giro repository not found at: {giro_path}",
            hints=[
                f"Clone giro: git clone {TEMPLATE_REPO_URL} {giro_path}",
                "Set custom path: GIRO_PATH=/path/to/giro kiro-best-practices sync",
            ],
        )
    dest_repo = GitRepo(giro_path)
    if not dest_repo.is_repository:
        raise PreconditionError(f"{giro_path} is not a git repository")

    result = SyncResult()
    if verbose:
        print(f"{Colors.HEADER}🔄 Syncing improvements to giro template...{Colors.ENDC}\n")
        print("📋 Files to sync:")
        for rel in SYNC_PATHS:
            print(f"  ✓ {rel}")
        print()

    if not assume_yes and not prompter.confirm("Continue?", default=False):
        if verbose:
            print("Cancelled.")
        result.cancelled = True
        return result

    if verbose:
        print("📁 Copying files...")
    for rel in SYNC_PATHS:
        if copy_into(project / rel, giro_path / rel):
            result.copied.append(rel)
        else:
            result.failed.append(rel)

    result.changes = dest_repo.status_short()
    if verbose:
        print(f"{Colors.GREEN}✅ Files synced to: {giro_path}{Colors.ENDC}\n")
        if not result.changes:
            print("ℹ️  No changes detected")
        else:
            print("📋 Changes detected:")
            for line in result.changes:
                print(f"  {line}")
            print("\n📋 Next steps:")
            print(f"  cd {giro_path}")
            print("  git diff          # Review changes")
            print("  git add .")
            print(f"  git commit -m 'feat: Improve from {project.resolve().name}'")
            print("  git push")
    return result


def copy_into(source: Path, dest: Path) -> bool:
    """Copy a file or merge a directory tree into dest, following symlinks.

    Returns False when the source is missing or the copy failed.
    """
    try:
        if source.is_dir():
            shutil.copytree(source, dest, dirs_exist_ok=True)
        elif source.is_file():
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, dest)
        else:
            return False
    except (OSError, shutil.Error):
        return False
    return True
