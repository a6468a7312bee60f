from __future__ import annotations

from typing import Any

import requests

from .advisor import StrengthReport


USER_AGENT = "password-guard-local"


class StrengthClientError(Exception):
    pass


class StrengthClient:
    """Thin client for a running ``password-guard serve`` instance."""

    def __init__(self, base_url: str, timeout: int = 15) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def health(self) -> dict[str, Any]:
        return self._get("/api/strength/health")

    def requirements(self) -> list[dict[str, str]]:
        return list(self._get("/api/strength/requirements").get("requirements", []))

    def check(self, password: str, count: int | None = None, suggestions: bool = True) -> StrengthReport:
        body: dict[str, Any] = {"password": password, "suggestions": suggestions}
        if count is not None:
            body["count"] = count
        return StrengthReport.from_dict(self._post("/api/strength/check", body))

    def suggest(self, password: str, strength: str | None = None, count: int | None = None) -> list[str]:
        body: dict[str, Any] = {"password": password}
        if strength:
            body["strength"] = strength
        if count is not None:
            body["count"] = count
        return list(self._post("/api/strength/suggest", body).get("suggestions", []))

    def _get(self, path: str) -> dict[str, Any]:
        response = requests.get(
            f"{self.base_url}{path}",
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=self.timeout,
        )
        return self._decode(response)

    def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        response = requests.post(
            f"{self.base_url}{path}",
            json=body,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=self.timeout,
        )
        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any]:
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise StrengthClientError("Server returned a non-JSON response.") from exc
        if not isinstance(payload, dict):
            raise StrengthClientError("Server returned an unexpected payload.")
        return payload
