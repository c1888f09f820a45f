"""
Kiro Best Practices - installer for shared Kiro configuration.

Links hooks, settings, steering documents and scripts from the template
repository into:
- ~/.kiro/ (standalone clone)
- <project>/.kiro/ (git submodule at .kiro-template/)
"""

__version__ = "0.4.0"

__all__ = [
    "cli",
    "core",
    "repo",
    "services",
    "tui",
    "utils",
]
