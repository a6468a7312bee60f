from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from .config import suggestion_options
from .passwords import generate_suggestions
from .requirements import REQUIREMENTS
from .scoring import CheckResult, evaluate, reset_result
from .utils import utc_now_iso


LOGGER = logging.getLogger(__name__)


@dataclass
class StrengthReport:
    result: CheckResult
    suggestions: list[str] = field(default_factory=list)
    checked_at: str = field(default_factory=utc_now_iso)

    @property
    def is_reset(self) -> bool:
        return self.result == reset_result() and not self.suggestions

    def to_dict(self) -> dict[str, Any]:
        payload = self.result.to_dict()
        payload["requirements"] = [
            {"key": item.key, "message": item.message, "met": bool(self.result.requirements.get(item.key))}
            for item in REQUIREMENTS
        ]
        payload["suggestions"] = list(self.suggestions)
        payload["checked_at"] = self.checked_at
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StrengthReport":
        raw_requirements = payload.get("requirements", [])
        if isinstance(raw_requirements, dict):
            requirements = {key: bool(value) for key, value in raw_requirements.items()}
        else:
            requirements = {item["key"]: bool(item.get("met")) for item in raw_requirements}
        result = CheckResult(
            score=int(payload.get("score", 0)),
            strength=str(payload.get("strength", "very-weak")),
            requirements=requirements,
        )
        return cls(
            result=result,
            suggestions=list(payload.get("suggestions", [])),
            checked_at=payload.get("checked_at") or utc_now_iso(),
        )


def reset_report() -> StrengthReport:
    return StrengthReport(result=reset_result())


def assess_password(
    password: str,
    settings: dict[str, Any] | None = None,
    *,
    count: int | None = None,
    include_suggestions: bool = True,
    rng: random.Random | None = None,
) -> StrengthReport:
    """Evaluate a password the way the input field sees it.

    Surrounding whitespace is ignored and an empty value gives the reset
    report. Any failure while building the report also falls back to the
    reset report so callers never see a half-filled result.
    """
    value = (password or "").strip()
    if not value:
        return reset_report()

    try:
        configured_count, max_attempts, require_all = suggestion_options(settings)
        wanted = configured_count if count is None else count
        result = evaluate(value)
        suggestions: list[str] = []
        if include_suggestions:
            suggestions = generate_suggestions(
                value,
                result.strength,
                wanted,
                max_attempts=max_attempts,
                require_all=require_all,
                rng=rng,
            )
        return StrengthReport(result=result, suggestions=suggestions)
    except Exception:
        LOGGER.exception("Strength assessment failed; returning reset state")
        return reset_report()
