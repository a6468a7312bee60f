from __future__ import annotations

import logging
import math
import random
import string
from typing import Any

from .requirements import check_requirements, missing_requirements


LOGGER = logging.getLogger(__name__)

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SPECIALS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
ALPHABET = UPPERCASE + LOWERCASE + DIGITS + SPECIALS

DEFAULT_SUGGESTION_COUNT = 3
DEFAULT_MAX_ATTEMPTS = 250
DIFFUSION_THRESHOLD = 0.7


def _source(rng: Any) -> Any:
    return rng if rng is not None else random


def target_length(password: str, strength: str) -> int:
    min_length = max(12, len(password))
    if strength in {"very-weak", "weak"}:
        return max(min_length, 14)
    return max(min_length, len(password) + 3)


def _pad(candidate: str, length: int, rng: Any) -> str:
    chars = list(candidate)
    while len(chars) < length:
        picks = [rng.choice(LOWERCASE), rng.choice(UPPERCASE), rng.choice(DIGITS), rng.choice(SPECIALS)]
        chars.append(rng.choice(picks))
    return "".join(chars)


def _repair(candidate: str, rng: Any) -> str:
    for key in missing_requirements(candidate):
        if key == "uppercase":
            candidate = rng.choice(UPPERCASE) + candidate[1:]
        elif key == "lowercase":
            candidate = candidate[:-1] + rng.choice(LOWERCASE)
        elif key == "number":
            middle = len(candidate) // 2
            candidate = candidate[:middle] + rng.choice(DIGITS) + candidate[middle:]
        elif key == "special":
            for index, char in enumerate(candidate):
                if char in UPPERCASE or char in LOWERCASE:
                    candidate = candidate[:index] + rng.choice(SPECIALS) + candidate[index + 1 :]
                    break
    return candidate


def _diffuse(candidate: str, rng: Any) -> str:
    if rng.random() <= DIFFUSION_THRESHOLD:
        return candidate
    chars = list(candidate)
    for _ in range(math.ceil(len(chars) / 4)):
        chars[rng.randrange(len(chars))] = rng.choice(ALPHABET)
    return "".join(chars)


def generate_suggestion(password: str, strength: str, rng: random.Random | None = None) -> str:
    """Derive one stronger candidate from ``password``.

    The base is padded with random characters up to the target length, each
    unmet requirement is repaired in requirement order, and roughly one time
    in three a quarter of the positions are overwritten at random. The result
    may equal the base or an earlier candidate.
    """
    source = _source(rng)
    candidate = _pad(password, target_length(password, strength), source)
    candidate = _repair(candidate, source)
    return _diffuse(candidate, source)


def generate_suggestions(
    password: str,
    strength: str,
    count: int = DEFAULT_SUGGESTION_COUNT,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    require_all: bool = True,
    rng: random.Random | None = None,
) -> list[str]:
    """Collect up to ``count`` distinct suggestions, none equal to ``password``.

    With ``require_all`` a candidate is only kept when it meets every
    requirement. Gives up after ``max_attempts`` generator calls and returns
    whatever was collected.
    """
    if not password or count <= 0:
        return []
    suggestions: dict[str, None] = {}
    attempts = 0
    while len(suggestions) < count and attempts < max_attempts:
        attempts += 1
        candidate = generate_suggestion(password, strength, rng)
        if not candidate or candidate == password or candidate in suggestions:
            continue
        if require_all and not all(check_requirements(candidate).values()):
            continue
        suggestions[candidate] = None
    if len(suggestions) < count:
        LOGGER.warning(
            "Suggestion attempts exhausted: produced %d of %d after %d attempts",
            len(suggestions),
            count,
            attempts,
        )
    else:
        LOGGER.debug("Generated %d suggestions in %d attempts", count, attempts)
    return list(suggestions)
