"""Core abstractions: types, fixed manifests and configuration."""

from .types import (
    ConflictPolicy,
    InstallResult,
    Language,
    LanguageSettings,
    ManagedFile,
    PathState,
    SymlinkSpec,
)
from .manifest import GENERATED_FILE, MANAGED_DIRS, MANAGED_FILES, SUBMODULE_LINKS
from .config import InstallerConfig, parse_language

__all__ = [
    "ConflictPolicy",
    "InstallResult",
    "Language",
    "LanguageSettings",
    "ManagedFile",
    "PathState",
    "SymlinkSpec",
    "GENERATED_FILE",
    "MANAGED_DIRS",
    "MANAGED_FILES",
    "SUBMODULE_LINKS",
    "InstallerConfig",
    "parse_language",
]
