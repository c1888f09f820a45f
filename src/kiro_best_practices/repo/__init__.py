"""Git access for template clones and submodules."""
from .git import GitRepo, clone, git_available, require_git

__all__ = ["GitRepo", "clone", "git_available", "require_git"]
