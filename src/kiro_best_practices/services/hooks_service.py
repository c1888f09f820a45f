"""Make the project's husky git hooks executable."""

from pathlib import Path
from typing import Dict, List

from kiro_best_practices.core.manifest import HUSKY_HOOKS
from kiro_best_practices.errors import PreconditionError
from kiro_best_practices.services.install_service import make_executable


def setup_git_hooks(project: Path) -> Dict[str, List[str]]:
    husky = project / ".husky"
    if not husky.is_dir():
        raise PreconditionError(
            ".husky directory not found",
            hints=["This should be in the repository root"],
        )
    result: Dict[str, List[str]] = {"enabled": [], "missing": []}
    for hook in HUSKY_HOOKS:
        path = husky / hook
        if path.is_file():
            make_executable(path)
            result["enabled"].append(hook)
        else:
            result["missing"].append(hook)
    return result
