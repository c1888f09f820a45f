"""
Conflict detection and resolution for the symlink farm.

A conflict is a real file or directory sitting where a symlink should go.
Existing symlinks are never conflicts: they were made by a previous install
and are simply replaced.
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from kiro_best_practices.core.types import ConflictPolicy, ConflictResolution
from kiro_best_practices.tui import Prompter
from kiro_best_practices.utils import Colors

POLICY_CHOICES = [
    ("Overwrite all (replace with symlinks)", ConflictPolicy.OVERWRITE.value),
    ("Skip all (keep existing files)", ConflictPolicy.SKIP.value),
    ("Ask for each file", ConflictPolicy.ASK.value),
]


def find_conflicts(root: Path, rel_paths: Iterable[str]) -> List[str]:
    """Relative paths under root that exist and are not symlinks."""
    return [p for p in rel_paths if (root / p).exists() and not (root / p).is_symlink()]


def remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def resolve_conflicts(
    conflicts: List[str],
    forced: Optional[ConflictPolicy],
    prompter: Prompter,
    location: str,
    unattended: ConflictPolicy = ConflictPolicy.OVERWRITE,
) -> ConflictResolution:
    """
    Split conflicts into paths to overwrite and paths to keep.

    Args:
        conflicts: relative paths found by find_conflicts
        forced: policy from SKIP/OVERWRITE, or None
        prompter: asks the policy menu and per-file questions
        location: install root shown to the user (e.g. "~/.kiro/")
        unattended: policy used when nobody can answer the menu

    Returns:
        ConflictResolution; cancelled=True when the menu was dismissed
    """
    resolution = ConflictResolution()
    if not conflicts:
        return resolution

    print(f"\n{Colors.YELLOW}⚠️  Existing files found in {location}:{Colors.ENDC}")
    for item in conflicts:
        print(f"  - {item}")
    print()

    policy = forced
    if policy is None and not prompter.interactive:
        policy = unattended
        if policy == ConflictPolicy.SKIP:
            print(f"{Colors.YELLOW}⚠️  No terminal to ask. Keeping existing paths; set OVERWRITE=1 to replace them.{Colors.ENDC}")
    if policy is None:
        answer = prompter.select(
            "Choose how to handle existing files:",
            POLICY_CHOICES,
            default=ConflictPolicy.OVERWRITE.value,
        )
        try:
            policy = ConflictPolicy(answer)
        except ValueError:
            print(f"{Colors.RED}Invalid choice. Installation cancelled.{Colors.ENDC}")
            resolution.cancelled = True
            return resolution

    if policy == ConflictPolicy.OVERWRITE:
        print(f"{Colors.BLUE}🔄 Overwriting all existing files...{Colors.ENDC}")
        resolution.overwrite = list(conflicts)
    elif policy == ConflictPolicy.SKIP:
        print(f"{Colors.YELLOW}⏭️  Skipping all existing files...{Colors.ENDC}")
        resolution.skip = list(conflicts)
    else:
        for item in conflicts:
            if prompter.confirm(f"{item}: overwrite?", default=False):
                resolution.overwrite.append(item)
                print(f"  {Colors.GREEN}✓ Will overwrite{Colors.ENDC}")
            else:
                resolution.skip.append(item)
                print(f"  {Colors.YELLOW}⏭️  Skipped{Colors.ENDC}")
    return resolution


def apply_overwrites(root: Path, resolution: ConflictResolution) -> None:
    for item in resolution.overwrite:
        remove_path(root / item)
