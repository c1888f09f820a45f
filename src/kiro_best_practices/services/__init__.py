"""
Services: business logic kept out of the CLI.

One service per flow: install, uninstall, submodule, sync, hooks, status.
"""

from kiro_best_practices.services.install_service import run_install
from kiro_best_practices.services.uninstall_service import run_uninstall
from kiro_best_practices.services.sync_service import run_sync

__all__ = ["run_install", "run_uninstall", "run_sync"]
