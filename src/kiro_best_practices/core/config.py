"""
Installer configuration read from the environment.

Mirrors the variables the shell installers understood (KIRO_BRANCH,
KIRO_LANG, OVERWRITE, SKIP, GIRO_PATH, ...). Paths are resolved when the
config is built, not at import time, so HOME can be redirected.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from kiro_best_practices.core.manifest import REPO_DIR_NAME, TEMPLATE_SUBDIR
from kiro_best_practices.core.types import ConflictPolicy, Language, LanguageSettings
from kiro_best_practices.errors import ConfigError
from kiro_best_practices.utils import env_flag

DEFAULT_BRANCH = "main"
DEFAULT_REPO_URL = "https://github.com/kumagaias/kiro-best-practices"
DEFAULT_SUBMODULE_URL = "https://github.com/kumagaias/giro"

_LANGUAGE_ALIASES = {
    "english": Language.ENGLISH,
    "en": Language.ENGLISH,
    "1": Language.ENGLISH,
    "japanese": Language.JAPANESE,
    "ja": Language.JAPANESE,
    "jp": Language.JAPANESE,
    "日本語": Language.JAPANESE,
    "2": Language.JAPANESE,
}


def parse_language(value: str) -> Language:
    """Map 'Japanese', 'ja', '2', ... onto a Language."""
    key = value.strip().lower()
    if key not in _LANGUAGE_ALIASES:
        raise ConfigError(
            f"Unknown language '{value}'",
            hints=["Use English or Japanese"],
        )
    return _LANGUAGE_ALIASES[key]


@dataclass(frozen=True)
class InstallerConfig:
    kiro_home: Path
    branch: str = DEFAULT_BRANCH
    repo_url: str = DEFAULT_REPO_URL
    submodule_url: str = DEFAULT_SUBMODULE_URL
    chat_lang: Optional[Language] = None
    doc_lang: Optional[Language] = None
    comment_lang: Optional[Language] = None
    overwrite: bool = False
    skip: bool = False
    assume_yes: bool = False
    hosting: Optional[str] = None
    mcp: Optional[str] = None
    giro_path: Optional[Path] = None

    @property
    def repo_dir(self) -> Path:
        return self.kiro_home / REPO_DIR_NAME

    @property
    def template_dir(self) -> Path:
        return self.repo_dir / TEMPLATE_SUBDIR

    @property
    def conflict_policy(self) -> Optional[ConflictPolicy]:
        """Policy forced by SKIP/OVERWRITE, None when the user must choose.

        SKIP wins when both are set: it never deletes anything.
        """
        if self.skip:
            return ConflictPolicy.SKIP
        if self.overwrite:
            return ConflictPolicy.OVERWRITE
        return None

    @property
    def languages_preset(self) -> bool:
        return all(lang is not None for lang in (self.chat_lang, self.doc_lang, self.comment_lang))

    def language_defaults(self) -> LanguageSettings:
        return LanguageSettings(
            chat=self.chat_lang or Language.ENGLISH,
            docs=self.doc_lang or Language.ENGLISH,
            comments=self.comment_lang or Language.ENGLISH,
        )

    def with_overrides(self, **changes) -> "InstallerConfig":
        """Copy with CLI flags applied; None values keep the env setting."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InstallerConfig":
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home())

        base_lang = _optional_language(env.get("KIRO_LANG"))
        hosting = (env.get("KIRO_HOSTING") or "").strip().lower() or None

        giro_path = env.get("GIRO_PATH")

        return cls(
            kiro_home=Path(env["KIRO_HOME"]) if env.get("KIRO_HOME") else home / ".kiro",
            branch=env.get("KIRO_BRANCH") or DEFAULT_BRANCH,
            repo_url=env.get("KIRO_REPO_URL") or DEFAULT_REPO_URL,
            submodule_url=env.get("KIRO_REPO_URL") or DEFAULT_SUBMODULE_URL,
            chat_lang=_optional_language(env.get("KIRO_CHAT_LANG")) or base_lang,
            doc_lang=_optional_language(env.get("KIRO_DOC_LANG")) or base_lang,
            comment_lang=_optional_language(env.get("KIRO_COMMENT_LANG")) or base_lang,
            overwrite=env_flag("OVERWRITE", env),
            skip=env_flag("SKIP", env),
            assume_yes=env_flag("KIRO_YES", env),
            hosting=hosting,
            mcp=(env.get("KIRO_MCP") or "").strip().lower() or None,
            giro_path=Path(giro_path).expanduser() if giro_path else home / "projects" / "giro",
        )


def _optional_language(value: Optional[str]) -> Optional[Language]:
    if value is None or not value.strip():
        return None
    return parse_language(value)
