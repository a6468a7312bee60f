from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .requirements import REQUIREMENT_KEYS, check_requirements


POINTS_PER_REQUIREMENT = 20
LENGTH_BONUS = 10

STRENGTH_ORDER = ("very-weak", "weak", "medium", "strong", "very-strong")

STRENGTH_LEVELS: dict[str, dict[str, str]] = {
    "very-weak": {"color": "var(--danger)", "label": "Very Weak"},
    "weak": {"color": "var(--warning)", "label": "Weak"},
    "medium": {"color": "var(--primary)", "label": "Medium"},
    "strong": {"color": "var(--success)", "label": "Strong"},
    "very-strong": {"color": "#059669", "label": "Very Strong"},
}


def strength_level(strength: str) -> dict[str, str]:
    return STRENGTH_LEVELS.get(strength) or STRENGTH_LEVELS["very-weak"]


def strength_rank(strength: str) -> int:
    try:
        return STRENGTH_ORDER.index(strength)
    except ValueError:
        return 0


@dataclass(frozen=True, eq=False)
class CheckResult:
    score: int
    strength: str
    requirements: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "requirements", MappingProxyType(dict(self.requirements)))

    def _key(self) -> tuple[Any, ...]:
        return (self.score, self.strength, tuple(sorted(self.requirements.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CheckResult):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def label(self) -> str:
        return strength_level(self.strength)["label"]

    @property
    def color(self) -> str:
        return strength_level(self.strength)["color"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "strength": self.strength,
            "label": self.label,
            "color": self.color,
            "requirements": dict(self.requirements),
        }


def reset_result() -> CheckResult:
    return CheckResult(score=0, strength="very-weak", requirements={key: False for key in REQUIREMENT_KEYS})


def _tier_for(score: int) -> str:
    if score >= 80:
        return "very-strong"
    if score >= 60:
        return "strong"
    if score >= 40:
        return "medium"
    if score >= 20:
        return "weak"
    return "very-weak"


def score_password(password: str, requirements: dict[str, bool]) -> CheckResult:
    """Turn a requirement map into a score and strength tier.

    Each satisfied requirement is worth 20 points. The tier is taken from that
    base score, then passwords of 12+ characters get a 10 point bonus (capped
    at 100) and are lifted to at least ``strong``.
    """
    score = POINTS_PER_REQUIREMENT * sum(1 for met in requirements.values() if met)
    strength = _tier_for(score)

    if len(password) >= 12:
        score = min(100, score + LENGTH_BONUS)
        if strength != "very-strong":
            strength = "very-strong" if score >= 80 else "strong"
    elif len(password) >= 16:
        # Unreachable: the branch above already takes every length >= 12.
        score = 100
        strength = "very-strong"

    return CheckResult(score=score, strength=strength, requirements=dict(requirements))


def evaluate(password: str) -> CheckResult:
    if not password:
        return reset_result()
    return score_password(password, check_requirements(password))
