import sys
from typing import NoReturn

BLUE = "\033[1;34m"
GREEN = "\033[1;32m"
YELLOW = "\033[1;33m"
RED = "\033[1;31m"
CYAN = "\033[1;36m"
GREY = "\033[0;90m"
RESET = "\033[0m"


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"


def echo_status(msg: str) -> None:
    print(f"{BLUE}>>> {msg}{RESET}")


def echo_debug(msg: str) -> None:
    print(f"{CYAN}DEBUG: {msg}{RESET}")


def echo_warning(msg: str) -> None:
    print(f"{YELLOW}WARNING: {msg}{RESET}")


def echo_error(msg: str) -> NoReturn:
    print(f"{RED}ERROR: {msg}{RESET}")
    sys.exit(1)


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal."""
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        response = input(f"\n{question} {hint}: ").strip().lower()
        if not response:
            return default
        elif response in ("y", "yes"):
            return True
        elif response in ("n", "no"):
            return False
        else:
            print("Please answer 'y' or 'n'")
