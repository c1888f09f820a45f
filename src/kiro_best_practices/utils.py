import os
import sys


# ANSI colors
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    ENDC = '\033[0m'


TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, environ=None) -> bool:
    """True when the environment variable is set to a truthy value."""
    environ = os.environ if environ is None else environ
    return environ.get(name, "").strip().lower() in TRUTHY


def is_interactive() -> bool:
    # both ends must be a terminal, otherwise prompts would block a pipe
    return sys.stdin.isatty() and sys.stdout.isatty()


def print_error(message: str) -> None:
    print(f"{Colors.RED}❌ {message}{Colors.ENDC}", file=sys.stderr)


def print_banner(title: str) -> None:
    print(f"{Colors.HEADER}{title}{Colors.ENDC}")
    print("=" * (len(title) + 1))
    print()
