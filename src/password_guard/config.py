from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .passwords import DEFAULT_MAX_ATTEMPTS, DEFAULT_SUGGESTION_COUNT
from .utils import parse_bool, parse_int


WORKSPACE_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = WORKSPACE_ROOT / "config"
LOG_DIR = WORKSPACE_ROOT / "logs"

SETTINGS_PATH = CONFIG_DIR / "strength_settings.json"
SERVER_EVENTS_PATH = LOG_DIR / "server_events.jsonl"

MAX_SUGGESTION_COUNT = 50


def default_settings() -> dict[str, Any]:
    return {
        "suggestions": {
            "count": DEFAULT_SUGGESTION_COUNT,
            "max_attempts": DEFAULT_MAX_ATTEMPTS,
            "require_all": True,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 8790,
            "max_count": 10,
        },
        "logging": {
            "level": "INFO",
        },
    }


def ensure_workspace_files() -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    if not SETTINGS_PATH.exists():
        SETTINGS_PATH.write_text(json.dumps(default_settings(), indent=2), encoding="utf-8")


def load_json(path: Path, fallback: Any) -> Any:
    if not path.exists():
        return fallback
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return fallback


def save_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def append_jsonl(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, ensure_ascii=False) + "\n")


def load_settings() -> dict[str, Any]:
    settings = load_json(SETTINGS_PATH, default_settings())
    if not isinstance(settings, dict):
        return default_settings()
    return settings


def _section(settings: Any, name: str) -> dict[str, Any]:
    if not isinstance(settings, dict):
        return {}
    section = settings.get(name, {})
    return section if isinstance(section, dict) else {}


def suggestion_options(settings: dict[str, Any] | None) -> tuple[int, int, bool]:
    section = _section(settings, "suggestions")
    count = parse_int(section.get("count"), DEFAULT_SUGGESTION_COUNT, 0, MAX_SUGGESTION_COUNT)
    max_attempts = parse_int(section.get("max_attempts"), DEFAULT_MAX_ATTEMPTS, 1, 100_000)
    require_all = parse_bool(section.get("require_all"), default=True)
    return count, max_attempts, require_all


def server_options(settings: dict[str, Any] | None) -> dict[str, Any]:
    defaults = default_settings()["server"]
    section = _section(settings, "server")
    return {
        "host": str(section.get("host") or defaults["host"]),
        "port": parse_int(section.get("port"), defaults["port"], 0, 65535),
        "max_count": parse_int(section.get("max_count"), defaults["max_count"], 0, MAX_SUGGESTION_COUNT),
    }


def logging_level(settings: dict[str, Any] | None) -> str:
    section = _section(settings, "logging")
    return str(section.get("level") or "INFO").upper()
