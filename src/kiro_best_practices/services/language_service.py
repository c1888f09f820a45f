"""
Generated language-settings steering file.

The template is plain Markdown with {{PLACEHOLDER}} tokens. Rendering
substitutes the three language names and their instruction blocks, and makes
sure the document starts with YAML front matter (`inclusion: always`) so the
agent always loads it.
"""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from kiro_best_practices.core.types import Language, LanguageSettings

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n?", re.DOTALL)

CHAT_INSTRUCTIONS = {
    Language.ENGLISH: (
        "- All chat conversations should be conducted in English\n"
        "- Provide error message explanations in English\n"
        "- Communicate with users in English"
    ),
    Language.JAPANESE: (
        "- すべてのチャットでの会話は日本語で行ってください\n"
        "- エラーメッセージの説明も日本語で提供してください\n"
        "- ユーザーとのコミュニケーションは日本語で行ってください"
    ),
}

DOC_INSTRUCTIONS = {
    Language.ENGLISH: (
        "- All project documentation should be written in English\n"
        "- This includes steering files, specs, and README files\n"
        "- Technical specifications and design documents should be in English"
    ),
    Language.JAPANESE: (
        "- プロジェクト内部のドキュメント（steering, specs など）は日本語で記述してください\n"
        "- ただし、README.md は英語で記述してください（国際標準）\n"
        "- 技術仕様書やデザインドキュメントは日本語で記述してください"
    ),
}

COMMENT_INSTRUCTIONS = {
    Language.ENGLISH: (
        "- All code comments should be written in English\n"
        "- This includes function, class, and inline comments\n"
        "- JSDoc, TSDoc, and similar documentation comments should be in English"
    ),
    Language.JAPANESE: (
        "- コード内のコメントは日本語で記述してください\n"
        "- 関数やクラスの説明コメントも日本語で記述してください\n"
        "- インラインコメントも日本語で記述してください"
    ),
}

LANGUAGE_TEMPLATE = """\
---
inclusion: always
---

# Language Settings

## Communication Standards

- **Agent chat**: {{CHAT_LANG}}
- **Documentation**: {{DOC_LANG}}
- **Code comments**: {{COMMENT_LANG}}
- **README files**: English (max 200 lines)
- **GitHub PRs/Issues**: English
- **Commit messages**: English

## Instructions for Agent

### Chat Language: {{CHAT_LANG}}

{{CHAT_INSTRUCTIONS}}

### Documentation Language: {{DOC_LANG}}

{{DOC_INSTRUCTIONS}}

### Code Comment Language: {{COMMENT_LANG}}

{{COMMENT_INSTRUCTIONS}}

## Fixed Rules (Unchangeable)

Always use English for:
- GitHub PR/Issue titles and descriptions
- Commit messages
- README.md (project root)
- Public API documentation

## File Naming Conventions

- All file names should use English
- Examples: `project.md`, `tech.md`, `structure.md`
"""

# Appended to a repository template that carries no language placeholders.
LANGUAGE_SECTION = LANGUAGE_TEMPLATE.split("---\n", 2)[2].replace("# Language Settings", "## Language Settings", 1)


def placeholders(settings: LanguageSettings) -> Dict[str, str]:
    return {
        "CHAT_LANG": settings.chat.value,
        "DOC_LANG": settings.docs.value,
        "COMMENT_LANG": settings.comments.value,
        "CHAT_INSTRUCTIONS": CHAT_INSTRUCTIONS[settings.chat],
        "DOC_INSTRUCTIONS": DOC_INSTRUCTIONS[settings.docs],
        "COMMENT_INSTRUCTIONS": COMMENT_INSTRUCTIONS[settings.comments],
    }


def split_frontmatter(text: str) -> Tuple[Dict, str]:
    """Return (front matter dict, body). Invalid YAML counts as no front matter."""
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end():]


def render_language_file(settings: LanguageSettings, template: Optional[str] = None) -> str:
    """
    Render the language-settings document.

    Args:
        settings: chosen chat / documentation / comment languages
        template: template text; the packaged LANGUAGE_TEMPLATE when None

    Returns:
        Markdown with substituted placeholders and `inclusion: always` front matter
    """
    text = LANGUAGE_TEMPLATE if template is None else template
    if "{{CHAT_LANG}}" not in text:
        text = text.rstrip("\n") + "\n\n" + LANGUAGE_SECTION

    for key, value in placeholders(settings).items():
        text = text.replace("{{" + key + "}}", value)

    frontmatter, body = split_frontmatter(text)
    frontmatter.setdefault("inclusion", "always")
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    body = body.lstrip("\n")
    return f"---\n{header}---\n\n{body}"


def write_language_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_symlink():
        path.unlink()
    path.write_text(content, encoding="utf-8")
