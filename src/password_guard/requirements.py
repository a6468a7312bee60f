from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Requirement:
    key: str
    predicate: Callable[[str], bool]
    message: str

    def test(self, password: str) -> bool:
        return bool(self.predicate(password))


def _matches(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda password: compiled.search(password) is not None


REQUIREMENTS: tuple[Requirement, ...] = (
    Requirement("length", lambda password: len(password) >= 8, "At least 8 characters"),
    Requirement("uppercase", _matches(r"[A-Z]"), "At least 1 uppercase letter"),
    Requirement("lowercase", _matches(r"[a-z]"), "At least 1 lowercase letter"),
    Requirement("number", _matches(r"[0-9]"), "At least 1 number"),
    Requirement("special", _matches(r"[^A-Za-z0-9]"), "At least 1 special character"),
)

REQUIREMENT_KEYS = tuple(item.key for item in REQUIREMENTS)


def check_requirements(password: str) -> dict[str, bool]:
    return {item.key: item.test(password) for item in REQUIREMENTS}


def missing_requirements(password: str) -> list[str]:
    return [key for key, met in check_requirements(password).items() if not met]


def requirement_messages() -> list[dict[str, str]]:
    return [{"key": item.key, "message": item.message} for item in REQUIREMENTS]
