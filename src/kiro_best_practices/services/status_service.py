"""Inspect an existing ~/.kiro install without changing it."""

import os
from pathlib import Path

from kiro_best_practices.core.config import InstallerConfig
from kiro_best_practices.core.manifest import GENERATED_FILE, MANAGED_FILES
from kiro_best_practices.core.types import InstallStatus, PathState, PathStatus
from kiro_best_practices.repo import GitRepo
from kiro_best_practices.services.language_service import split_frontmatter
from kiro_best_practices.utils import Colors

STATE_COLORS = {
    PathState.LINKED: Colors.GREEN,
    PathState.GENERATED: Colors.GREEN,
    PathState.FILE: Colors.YELLOW,
    PathState.FOREIGN: Colors.YELLOW,
    PathState.BROKEN: Colors.RED,
    PathState.MISSING: Colors.RED,
}


def collect_status(config: InstallerConfig) -> InstallStatus:
    repo = GitRepo(config.repo_dir)
    status = InstallStatus(
        kiro_home=str(config.kiro_home),
        repo_dir=str(config.repo_dir),
        repo_present=repo.is_repository,
        commit=repo.head_commit() if repo.is_repository else None,
    )
    repo_root = config.repo_dir.resolve()
    for managed in MANAGED_FILES:
        status.paths.append(_path_status(config.kiro_home / managed.path, managed.path, repo_root))

    generated = config.kiro_home / GENERATED_FILE
    if generated.is_file() and not generated.is_symlink():
        status.paths.append(PathStatus(GENERATED_FILE, _generated_state(generated)))
    else:
        status.paths.append(_path_status(generated, GENERATED_FILE, repo_root))
    return status


def _generated_state(path: Path) -> PathState:
    # a rendered file always carries front matter; without it the user replaced it
    try:
        frontmatter, _ = split_frontmatter(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return PathState.FILE
    return PathState.GENERATED if "inclusion" in frontmatter else PathState.FILE


def _path_status(path: Path, rel: str, repo_root: Path) -> PathStatus:
    if path.is_symlink():
        target = os.readlink(path)
        if not path.exists():
            return PathStatus(rel, PathState.BROKEN, target)
        resolved = path.resolve()
        if resolved == repo_root or repo_root in resolved.parents:
            return PathStatus(rel, PathState.LINKED, target)
        return PathStatus(rel, PathState.FOREIGN, target)
    if path.exists():
        return PathStatus(rel, PathState.FILE)
    return PathStatus(rel, PathState.MISSING)


def display_status(status: InstallStatus) -> None:
    print(f"{Colors.HEADER}Kiro Best Practices - Status{Colors.ENDC}\n")
    print(f"  Install root: {status.kiro_home}")
    if status.repo_present:
        print(f"  Repository:   {status.repo_dir} ({status.commit or 'unknown commit'})")
    else:
        print(f"  Repository:   {Colors.RED}not installed{Colors.ENDC}")
    print()
    for item in status.paths:
        color = STATE_COLORS[item.state]
        suffix = f" -> {item.target}" if item.target else ""
        print(f"  {color}{item.state.value:<10}{Colors.ENDC} {item.path}{suffix}")
    print()
    if status.healthy:
        print(f"{Colors.GREEN}✅ Everything is installed.{Colors.ENDC}")
    else:
        print(f"{Colors.YELLOW}⚠️  Run 'kiro-best-practices install' to repair.{Colors.ENDC}")
