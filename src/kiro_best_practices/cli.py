"""
CLI entry point: thin dispatcher only.

Parse args -> call service -> print result -> exit code.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from kiro_best_practices.errors import InstallerError
from kiro_best_practices.utils import Colors, is_interactive, print_banner, print_error


def main():
    try:
        code = _main()
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Cancelled.{Colors.ENDC}")
        sys.exit(130)
    sys.exit(code)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kiro-best-practices",
        description="Kiro Best Practices - install shared Kiro configuration",
    )
    sub = parser.add_subparsers(dest="command", help="Command")

    # --- install ---
    p_install = sub.add_parser("install", help="Install shared configuration into ~/.kiro")
    _add_common_flags(p_install)
    p_install.add_argument("--lang", help="Language for chat, docs and comments (English/Japanese)")
    conflict = p_install.add_mutually_exclusive_group()
    conflict.add_argument("--overwrite", action="store_true", default=None, help="Replace existing files")
    conflict.add_argument("--skip", action="store_true", default=None, help="Keep existing files")

    # --- uninstall ---
    p_uninstall = sub.add_parser("uninstall", help="Remove the shared configuration from ~/.kiro")
    _add_common_flags(p_uninstall)
    p_uninstall.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    # --- submodule ---
    p_sub = sub.add_parser("submodule", help="Manage the template as a git submodule of this project")
    sub_actions = p_sub.add_subparsers(dest="submodule_action")
    p_sub_install = sub_actions.add_parser("install", help="Add .kiro-template and link .kiro/ into it")
    _add_common_flags(p_sub_install)
    p_sub_install.add_argument("--lang", help="Language for chat, docs and comments (English/Japanese)")
    p_sub_install.add_argument("--hosting", choices=["none", "aws"], help="Structure template")
    p_sub_install.add_argument("--mcp", choices=["aws-docs", "terraform", "playwright", "all", "none"])
    p_sub_install.add_argument("--no-commit", action="store_true", help="Do not commit the result")
    p_sub_update = sub_actions.add_parser("update", help="Update .kiro-template to the latest commit")
    p_sub_update.add_argument("--no-interactive", action="store_true", help="Never prompt")
    p_sub_update.add_argument("--no-commit", action="store_true", help="Do not commit the result")
    p_sub_uninstall = sub_actions.add_parser("uninstall", help="Remove .kiro-template and project links")
    p_sub_uninstall.add_argument("--no-interactive", action="store_true", help="Never prompt")
    p_sub_uninstall.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    # --- sync ---
    p_sync = sub.add_parser("sync", help="Copy shared .kiro/ files back into a giro checkout")
    p_sync.add_argument("--giro-path", type=Path, default=None, help="Template checkout (default: $GIRO_PATH)")
    p_sync.add_argument("--no-interactive", action="store_true", help="Never prompt")
    p_sync.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    # --- setup-hooks ---
    sub.add_parser("setup-hooks", help="Make .husky git hooks executable")

    # --- status ---
    p_status = sub.add_parser("status", help="Show what is installed in ~/.kiro")
    p_status.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--branch", default=None, help="Template branch (default: $KIRO_BRANCH or main)")
    p.add_argument("--no-interactive", action="store_true", help="Never prompt; use defaults")


def _main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "install": _handle_install,
        "uninstall": _handle_uninstall,
        "submodule": _handle_submodule,
        "sync": _handle_sync,
        "setup-hooks": _handle_setup_hooks,
        "status": _handle_status,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except InstallerError as e:
        print_error(str(e))
        for hint in e.hints:
            print(f"   {hint}", file=sys.stderr)
        return 1


def _load_config(args):
    from kiro_best_practices.core.config import InstallerConfig, parse_language

    config = InstallerConfig.from_env()
    lang = getattr(args, "lang", None)
    if lang:
        language = parse_language(lang)
        config = config.with_overrides(chat_lang=language, doc_lang=language, comment_lang=language)
    return config.with_overrides(
        branch=getattr(args, "branch", None),
        overwrite=getattr(args, "overwrite", None),
        skip=getattr(args, "skip", None),
        hosting=getattr(args, "hosting", None),
        mcp=getattr(args, "mcp", None),
        giro_path=getattr(args, "giro_path", None),
    )


def _prompter(args):
    from kiro_best_practices.tui import get_prompter

    return get_prompter(is_interactive() and not getattr(args, "no_interactive", False))


def _handle_install(args) -> int:
    from kiro_best_practices.services.install_service import run_install

    config = _load_config(args)
    print_banner("🚀 Kiro Best Practices Installer")
    result = run_install(config, _prompter(args))
    return 0 if result.ok else 1


def _handle_uninstall(args) -> int:
    from kiro_best_practices.services.uninstall_service import run_uninstall

    config = _load_config(args)
    print_banner("🗑️  Kiro Best Practices Uninstaller")
    run_uninstall(config, _prompter(args), assume_yes=args.yes)
    return 0


def _handle_submodule(args) -> int:
    from kiro_best_practices.services.submodule_service import (
        install_submodule,
        uninstall_submodule,
        update_submodule,
    )

    project = Path.cwd()
    action = getattr(args, "submodule_action", None)
    commit = False if getattr(args, "no_commit", False) else None

    if action == "install":
        print(f"{Colors.HEADER}🚀 Installing Kiro configuration (submodule version)...{Colors.ENDC}\n")
        result = install_submodule(project, _load_config(args), _prompter(args), commit=commit)
        return 1 if result.action == "aborted" else 0
    if action == "update":
        print(f"{Colors.HEADER}🔄 Updating Kiro configuration (submodule version)...{Colors.ENDC}\n")
        update_submodule(project, _prompter(args), commit=commit)
        return 0
    if action == "uninstall":
        print(f"{Colors.HEADER}🗑️  Uninstalling Kiro configuration (submodule version)...{Colors.ENDC}\n")
        uninstall_submodule(project, _load_config(args), _prompter(args), assume_yes=args.yes)
        return 0

    print("Usage: kiro-best-practices submodule {install|update|uninstall}")
    return 0


def _handle_sync(args) -> int:
    from kiro_best_practices.services.sync_service import run_sync

    config = _load_config(args)
    run_sync(Path.cwd(), config.giro_path, _prompter(args), assume_yes=args.yes or config.assume_yes)
    return 0


def _handle_setup_hooks(args) -> int:
    from kiro_best_practices.services.hooks_service import setup_git_hooks

    print("🔧 Setting up Git hooks...")
    result = setup_git_hooks(Path.cwd())
    for hook in result["missing"]:
        print(f"  {Colors.YELLOW}⚠️  .husky/{hook} not found{Colors.ENDC}")
    print(f"{Colors.GREEN}✅ Git hooks permissions set{Colors.ENDC}\n")
    print("Git hooks are now active:")
    for hook in result["enabled"]:
        print(f"  - {hook}")
    return 0


def _handle_status(args) -> int:
    from kiro_best_practices.services.status_service import collect_status, display_status

    status = collect_status(_load_config(args))
    if getattr(args, "json", False):
        data = asdict(status)
        data["healthy"] = status.healthy
        print(json.dumps(data, indent=2, default=_json_default))
    else:
        display_status(status)
    return 0


def _json_default(value):
    # enums (PathState) serialize by value
    return getattr(value, "value", str(value))


if __name__ == "__main__":
    main()
