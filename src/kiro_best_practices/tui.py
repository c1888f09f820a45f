"""
Interactive prompts.

All questionary calls live here. Services only see the small Prompter
interface, so non-interactive runs (pipes, CI) and tests swap in
DefaultPrompter or a scripted prompter.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

import questionary
from questionary import Style

from kiro_best_practices.core.types import Language, LanguageSettings
from kiro_best_practices.utils import Colors

CUSTOM_STYLE = Style(
    [
        ("qmark", "fg:#00d4ff bold"),
        ("question", "bold"),
        ("answer", "fg:#00d4ff bold"),
        ("pointer", "fg:#00d4ff bold"),
        ("highlighted", "fg:#00d4ff bold bg:default"),
        ("selected", "fg:#00d4ff bold bg:default"),
    ]
)

# (label, value) pairs
Choices = Sequence[Tuple[str, str]]

LANGUAGE_CHOICES: Choices = [
    ("English", Language.ENGLISH.value),
    ("日本語 (Japanese)", Language.JAPANESE.value),
]


class Prompter(ABC):
    """Answers yes/no and menu questions.

    `select` returns the chosen value or None when the user cancelled;
    `confirm` returns None on cancel as well.
    """

    interactive = False

    @abstractmethod
    def select(self, message: str, choices: Choices, default: Optional[str] = None) -> Optional[str]: ...

    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> Optional[bool]: ...


class DefaultPrompter(Prompter):
    """Non-interactive: every question resolves to its default."""

    def select(self, message, choices, default=None):
        return default

    def confirm(self, message, default=False):
        return default


class QuestionaryPrompter(Prompter):
    interactive = True

    def select(self, message, choices, default=None):
        q_choices = [questionary.Choice(label, value=value) for label, value in choices]
        return questionary.select(
            message,
            choices=q_choices,
            default=default,
            style=CUSTOM_STYLE,
        ).ask()

    def confirm(self, message, default=False):
        return questionary.confirm(message, default=default, style=CUSTOM_STYLE).ask()


def get_prompter(interactive: bool) -> Prompter:
    return QuestionaryPrompter() if interactive else DefaultPrompter()


def ask_language_settings(prompter: Prompter, defaults: LanguageSettings,
                          preset: Tuple[Optional[Language], ...] = (None, None, None)) -> LanguageSettings:
    """Ask the three language questions, skipping any already preset.

    A cancelled question keeps its default.
    """
    questions: List[Tuple[str, str, Language]] = [
        ("1️⃣  Agent chat language:", "chat", defaults.chat),
        ("2️⃣  Documentation language (steering, specs):", "docs", defaults.docs),
        ("3️⃣  Code comment language:", "comments", defaults.comments),
    ]
    answers = {}
    for (message, key, default), fixed in zip(questions, preset):
        if fixed is not None:
            answers[key] = fixed
            continue
        value = prompter.select(message, LANGUAGE_CHOICES, default=default.value)
        answers[key] = Language(value) if value else default

    settings = LanguageSettings(**answers)
    print(f"  {Colors.GREEN}✅ Chat language: {settings.chat.value}{Colors.ENDC}")
    print(f"  {Colors.GREEN}✅ Documentation language: {settings.docs.value}{Colors.ENDC}")
    print(f"  {Colors.GREEN}✅ Code comment language: {settings.comments.value}{Colors.ENDC}")
    return settings
