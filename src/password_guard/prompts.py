from __future__ import annotations

import os
from getpass import getpass


def prompt_password(label: str = "Password to check: ", env_var: str | None = None) -> str:
    if env_var:
        value = os.environ.get(env_var)
        if value:
            return value
    return getpass(label)


def prompt_continue(question: str = "Check another password?") -> bool:
    while True:
        response = input(question + " [Y/n]: ").strip().lower()
        if not response or response in {"y", "yes"}:
            return True
        if response in {"n", "no"}:
            return False
        print("Please answer y or n.")
