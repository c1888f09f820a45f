"""Shared types and data structures for the installer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Language(Enum):
    ENGLISH = "English"
    JAPANESE = "Japanese"


class ConflictPolicy(Enum):
    OVERWRITE = "overwrite"
    SKIP = "skip"
    ASK = "ask"


class PathState(Enum):
    LINKED = "linked"
    BROKEN = "broken"
    FOREIGN = "foreign"
    FILE = "file"
    GENERATED = "generated"
    MISSING = "missing"


@dataclass(frozen=True)
class ManagedFile:
    """One file of the symlink farm, relative to the install root."""
    path: str
    source: str = ""  # relative to <repo>/.kiro, defaults to path

    @property
    def source_path(self) -> str:
        return self.source or self.path

    @property
    def is_script(self) -> bool:
        return self.path.endswith(".sh")


@dataclass(frozen=True)
class SymlinkSpec:
    """A link created inside a project for the submodule variant.

    Both paths are relative to the project root; the link itself stores a
    target relative to its own parent directory.
    """
    link: str
    target: str


@dataclass
class LanguageSettings:
    chat: Language = Language.ENGLISH
    docs: Language = Language.ENGLISH
    comments: Language = Language.ENGLISH


@dataclass
class ConflictResolution:
    overwrite: List[str] = field(default_factory=list)
    skip: List[str] = field(default_factory=list)
    cancelled: bool = False


@dataclass
class InstallResult:
    repo_action: str = ""  # "cloned" | "updated"
    linked: List[str] = field(default_factory=list)
    overwritten: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    missing_sources: List[str] = field(default_factory=list)
    generated: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.cancelled


@dataclass
class UninstallResult:
    removed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    nothing_to_do: bool = False
    cancelled: bool = False


@dataclass
class SubmoduleResult:
    action: str = ""  # "installed" | "updated" | "up-to-date" | "removed" | "cancelled" | "aborted"
    linked: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)
    committed: bool = False


@dataclass
class SyncResult:
    copied: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)
    cancelled: bool = False


@dataclass
class PathStatus:
    path: str
    state: PathState
    target: str = ""


@dataclass
class InstallStatus:
    kiro_home: str
    repo_dir: str
    repo_present: bool
    commit: Optional[str] = None
    paths: List[PathStatus] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return self.repo_present and all(
            p.state in (PathState.LINKED, PathState.GENERATED) for p in self.paths
        )
