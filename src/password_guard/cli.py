from __future__ import annotations

import argparse
import json
import logging

import requests

from .advisor import StrengthReport, assess_password
from .client import StrengthClient, StrengthClientError
from .config import (
    SETTINGS_PATH,
    ensure_workspace_files,
    load_settings,
    logging_level,
    suggestion_options,
)
from .passwords import generate_suggestions
from .prompts import prompt_continue, prompt_password
from .requirements import REQUIREMENTS
from .scoring import evaluate
from .server import build_server_parser
from .utils import strength_bar


def _print_report(report: StrengthReport) -> None:
    result = report.result
    print(f"Strength: {strength_bar(result.score)} {result.score}% {result.label}")
    print("Requirements:")
    for item in REQUIREMENTS:
        mark = "x" if result.requirements.get(item.key) else " "
        print(f"  [{mark}] {item.message}")
    if report.suggestions:
        print("Suggestions:")
        for suggestion in report.suggestions:
            print(f"  {suggestion}")


def _cmd_init(_: argparse.Namespace) -> int:
    existed = SETTINGS_PATH.exists()
    ensure_workspace_files()
    if existed:
        print(f"Settings already present: {SETTINGS_PATH}")
    else:
        print(f"Wrote default settings: {SETTINGS_PATH}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    settings = load_settings()
    password = prompt_password(env_var=args.password_env)
    count = 0 if args.no_suggestions else args.count
    if args.remote:
        report = StrengthClient(args.remote).check(
            password,
            count=count,
            suggestions=not args.no_suggestions,
        )
    else:
        report = assess_password(
            password,
            settings,
            count=count,
            include_suggestions=not args.no_suggestions,
        )
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)
    return 0


def _cmd_suggest(args: argparse.Namespace) -> int:
    settings = load_settings()
    default_count, max_attempts, require_all = suggestion_options(settings)
    password = prompt_password(env_var=args.password_env).strip()
    if not password:
        print("Nothing to suggest for an empty password.")
        return 1
    suggestions = generate_suggestions(
        password,
        evaluate(password).strength,
        default_count if args.count is None else args.count,
        max_attempts=max_attempts,
        require_all=require_all,
    )
    for suggestion in suggestions:
        print(suggestion)
    return 0


def _cmd_requirements(_: argparse.Namespace) -> int:
    for item in REQUIREMENTS:
        print(f"- {item.key}: {item.message}")
    return 0


def _cmd_interactive(args: argparse.Namespace) -> int:
    settings = load_settings()
    while True:
        report = assess_password(prompt_password(), settings, count=args.count)
        _print_report(report)
        if not prompt_continue():
            return 0
        print("")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Password Guard - rule-based password strength checks")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings, INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    cmd_init = sub.add_parser("init", help="Write default settings file")
    cmd_init.set_defaults(func=_cmd_init)

    cmd_check = sub.add_parser("check", help="Score a password and suggest stronger ones")
    cmd_check.add_argument("--password-env", default=None, help="Read password from environment variable name")
    cmd_check.add_argument("--count", type=int, default=None, help="Number of suggestions (default: from settings)")
    cmd_check.add_argument("--no-suggestions", action="store_true", help="Only score the password")
    cmd_check.add_argument("--json", action="store_true", help="Print the report as JSON")
    cmd_check.add_argument("--remote", default=None, help="Base URL of a running `password-guard serve`")
    cmd_check.set_defaults(func=_cmd_check)

    cmd_suggest = sub.add_parser("suggest", help="Print stronger password suggestions")
    cmd_suggest.add_argument("--password-env", default=None, help="Read password from environment variable name")
    cmd_suggest.add_argument("--count", type=int, default=None, help="Number of suggestions (default: from settings)")
    cmd_suggest.set_defaults(func=_cmd_suggest)

    cmd_requirements = sub.add_parser("requirements", help="List the composition rules")
    cmd_requirements.set_defaults(func=_cmd_requirements)

    cmd_interactive = sub.add_parser("interactive", help="Check passwords one after another")
    cmd_interactive.add_argument("--count", type=int, default=None, help="Number of suggestions (default: from settings)")
    cmd_interactive.set_defaults(func=_cmd_interactive)

    build_server_parser(sub)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    level = (args.log_level or logging_level(load_settings())).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(levelname)s - %(message)s")
    try:
        return int(args.func(args))
    except (StrengthClientError, requests.RequestException) as exc:
        print(f"Error: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
