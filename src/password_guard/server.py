from __future__ import annotations

import argparse
import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlparse

from . import __version__
from .advisor import assess_password
from .config import (
    SERVER_EVENTS_PATH,
    append_jsonl,
    ensure_workspace_files,
    load_settings,
    server_options,
    suggestion_options,
)
from .passwords import generate_suggestions
from .requirements import requirement_messages
from .scoring import STRENGTH_LEVELS, STRENGTH_ORDER, evaluate
from .utils import parse_bool, parse_int, utc_now_iso


LOGGER = logging.getLogger(__name__)


class StrengthService:
    """Request-level operations behind the HTTP handler."""

    def __init__(self, settings: dict[str, Any] | None = None) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.max_count = server_options(self.settings)["max_count"]

    def health(self) -> dict[str, Any]:
        return {"status": "ok", "timestamp": utc_now_iso(), "version": __version__}

    def levels(self) -> dict[str, Any]:
        return {"levels": [{"strength": key, **STRENGTH_LEVELS[key]} for key in STRENGTH_ORDER]}

    def _count(self, payload: dict[str, Any]) -> int:
        default_count = suggestion_options(self.settings)[0]
        return parse_int(payload.get("count", default_count), default_count, 0, self.max_count)

    def handle_check(self, payload: dict[str, Any]) -> dict[str, Any]:
        password = payload.get("password", "")
        if not isinstance(password, str):
            return {"error": "password must be a string"}
        report = assess_password(
            password,
            self.settings,
            count=self._count(payload),
            include_suggestions=parse_bool(payload.get("suggestions"), default=True),
        )
        return report.to_dict()

    def handle_suggest(self, payload: dict[str, Any]) -> dict[str, Any]:
        password = payload.get("password", "")
        if not isinstance(password, str):
            return {"error": "password must be a string"}
        value = password.strip()
        strength = payload.get("strength")
        if not isinstance(strength, str) or strength not in STRENGTH_LEVELS:
            strength = evaluate(value).strength
        _, max_attempts, require_all = suggestion_options(self.settings)
        suggestions = generate_suggestions(
            value,
            strength,
            self._count(payload),
            max_attempts=max_attempts,
            require_all=require_all,
        )
        return {"strength": strength, "suggestions": suggestions}


GET_ROUTES = {
    "/api/strength/health": StrengthService.health,
    "/api/strength/requirements": lambda service: {"requirements": requirement_messages()},
    "/api/strength/levels": StrengthService.levels,
}

POST_ROUTES = {
    "/api/strength/check": StrengthService.handle_check,
    "/api/strength/suggest": StrengthService.handle_suggest,
}


class StrengthHttpHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    @property
    def service(self) -> StrengthService:
        return self.server.strength_service  # type: ignore[attr-defined]

    def log_message(self, format: str, *args: Any) -> None:
        # Request bodies carry passwords; only the path and status line are kept.
        append_jsonl(
            SERVER_EVENTS_PATH,
            {
                "event": "http_access",
                "timestamp": utc_now_iso(),
                "path": urlparse(self.path).path[:300],
                "message": (format % args)[:300],
            },
        )

    def do_OPTIONS(self) -> None:  # noqa: N802
        self._send_json(HTTPStatus.NO_CONTENT, {})

    def do_GET(self) -> None:  # noqa: N802
        route = GET_ROUTES.get(urlparse(self.path).path)
        if route is None:
            self._send_json(HTTPStatus.NOT_FOUND, {"error": "endpoint not found"})
            return
        self._send_json(HTTPStatus.OK, route(self.service))

    def do_POST(self) -> None:  # noqa: N802
        payload = self._json_payload()
        if payload is None:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "invalid json payload"})
            return
        route = POST_ROUTES.get(urlparse(self.path).path)
        if route is None:
            self._send_json(HTTPStatus.NOT_FOUND, {"error": "endpoint not found"})
            return

        result = route(self.service, payload)
        status = HTTPStatus.BAD_REQUEST if result.get("error") else HTTPStatus.OK
        self._send_json(status, result)

    def _json_payload(self) -> dict[str, Any] | None:
        length = parse_int(self.headers.get("Content-Length", "0"), -1, -1, 1_000_000)
        if length < 0:
            return None
        if length == 0:
            return {}
        try:
            payload = json.loads(self.rfile.read(length).decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
        return payload if isinstance(payload, dict) else None

    def _send_json(self, status: HTTPStatus, payload: dict[str, Any]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8") if payload else b""
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Access-Control-Allow-Methods", "GET,POST,OPTIONS")
        self.end_headers()
        if body:
            self.wfile.write(body)


def create_strength_server(host: str, port: int, settings: dict[str, Any] | None = None) -> ThreadingHTTPServer:
    httpd = ThreadingHTTPServer((host, port), StrengthHttpHandler)
    httpd.strength_service = StrengthService(settings)  # type: ignore[attr-defined]
    return httpd


def run_strength_server(host: str, port: int) -> int:
    ensure_workspace_files()
    httpd = create_strength_server(host, port)
    LOGGER.info("Strength server listening on http://%s:%s", host, httpd.server_address[1])
    append_jsonl(
        SERVER_EVENTS_PATH,
        {"event": "strength_server_started", "timestamp": utc_now_iso(), "host": host, "port": port},
    )
    try:
        httpd.serve_forever(poll_interval=0.5)
    except KeyboardInterrupt:
        LOGGER.info("Strength server stopped by user")
    finally:
        httpd.server_close()
        append_jsonl(
            SERVER_EVENTS_PATH,
            {"event": "strength_server_stopped", "timestamp": utc_now_iso()},
        )
    return 0


def build_server_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    defaults = server_options(load_settings())
    serve = subparsers.add_parser("serve", help="Run the local strength-check HTTP API")
    serve.add_argument("--host", default=defaults["host"], help=f"Bind host (default: {defaults['host']})")
    serve.add_argument("--port", type=int, default=defaults["port"], help=f"Bind port (default: {defaults['port']})")
    serve.set_defaults(func=lambda args: run_strength_server(host=args.host, port=int(args.port)))
