"""
Thin wrapper over the git CLI.

Every call runs `git -C <path> ...` with captured output. `run` raises
GitError on a non-zero exit; `try_run` is for best-effort steps whose
failure is reported but tolerated.
"""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from kiro_best_practices.errors import GitError, PreconditionError


def git_available() -> bool:
    return shutil.which("git") is not None


def require_git() -> None:
    if not git_available():
        raise PreconditionError("Git is not installed. Please install git first.")


def clone(url: str, dest: Path, branch: str) -> "GitRepo":
    dest.parent.mkdir(parents=True, exist_ok=True)
    cmd = ["git", "clone", "-b", branch, url, str(dest)]
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        raise GitError(
            cmd,
            result.stderr,
            hints=[f"Repository URL: {url}", f"Branch: {branch}", "Internet connection"],
        )
    return GitRepo(dest)


class GitRepo:
    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    @property
    def is_repository(self) -> bool:
        # .git is a directory for clones and a file for submodule checkouts
        return (self.path / ".git").exists()

    def run(self, *args: str, hints: Optional[List[str]] = None) -> str:
        cmd = ["git", "-C", str(self.path), *args]
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise GitError(cmd, result.stderr, hints=hints)
        return result.stdout

    def try_run(self, *args: str) -> bool:
        result = subprocess.run(
            ["git", "-C", str(self.path), *args], capture_output=True, text=True
        )
        return result.returncode == 0

    # --- clone variant ---

    def fetch_and_reset(self, branch: str, remote: str = "origin") -> None:
        """Fast-forward the checkout to the remote branch tip, discarding local edits."""
        self.run("fetch", remote)
        self.run("reset", "--hard", f"{remote}/{branch}")

    def head_commit(self) -> Optional[str]:
        result = subprocess.run(
            ["git", "-C", str(self.path), "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
        )
        return result.stdout.strip() if result.returncode == 0 else None

    # --- working tree inspection ---

    def is_clean(self, *paths: str) -> bool:
        """`git diff --quiet`: True when tracked files under paths are unchanged."""
        return self.try_run("diff", "--quiet", "--", *paths)

    def status_short(self) -> List[str]:
        return [line for line in self.run("status", "--short").splitlines() if line.strip()]

    def log_oneline(self, revision_range: str) -> Optional[List[str]]:
        result = subprocess.run(
            ["git", "-C", str(self.path), "log", "--oneline", revision_range],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            return None
        return [line for line in result.stdout.splitlines() if line.strip()]

    def add(self, *paths: str) -> bool:
        return self.try_run("add", "--", *paths)

    def commit(self, message: str) -> bool:
        return self.try_run("commit", "-m", message)

    # --- submodules ---

    def submodule_add(self, url: str, path: str, branch: str) -> None:
        self.run(
            "submodule", "add", "-b", branch, url, path,
            hints=[f"Repository URL: {url}", f"Branch: {branch}", "Internet connection"],
        )

    def submodule_init(self) -> None:
        self.run("submodule", "update", "--init", "--recursive")

    def submodule_update_remote(self, path: str) -> None:
        self.run("submodule", "update", "--remote", path)

    def submodule_remove(self, path: str) -> List[str]:
        """Deinit and unstage a submodule; returns the steps that failed."""
        failed = []
        if not self.try_run("submodule", "deinit", "-f", path):
            failed.append(f"git submodule deinit -f {path}")
        if not self.try_run("rm", "-f", path):
            failed.append(f"git rm -f {path}")
        modules_dir = self.path / ".git" / "modules" / path
        if modules_dir.exists():
            shutil.rmtree(modules_dir, ignore_errors=True)
        return failed
