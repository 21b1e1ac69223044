from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from skillpath.config import Settings, settings as default_settings


logger = logging.getLogger(__name__)


class AnalysisApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def is_not_analyzed(message: str) -> bool:
    # The analysis service signals "no resume analysed yet" only through its message text.
    return "upload" in message or "analyze" in message


class AnalysisApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisApiClient":
        return cls(base_url=settings.analysis_api_url, timeout=settings.analysis_api_timeout)

    def _get(self, path: str, token: str, default_message: str) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {token}"}
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.info("analysis_api.network_error path=%s", path)
            raise AnalysisApiError(default_message) from exc

        if resp.status_code >= 400:
            logger.info("analysis_api.error path=%s status=%s", path, resp.status_code)
            raise AnalysisApiError(_error_message(resp, default_message), status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as exc:
            raise AnalysisApiError(default_message, status_code=resp.status_code) from exc
        if not isinstance(body, dict):
            raise AnalysisApiError(default_message, status_code=resp.status_code)
        return body

    def get_profile(self, token: str) -> dict[str, Any]:
        body = self._get("/api/auth/profile", token, "Failed to fetch profile")
        user = body.get("user")
        if not isinstance(user, dict):
            raise AnalysisApiError("Failed to fetch profile")
        return user

    def get_career_suggestions(self, token: str) -> list[dict[str, Any]]:
        body = self._get("/api/career/suggest", token, "Failed to fetch recommendations")
        recommendations = body.get("recommendations") or []
        return [item for item in recommendations if isinstance(item, dict)]

    def get_skill_gaps(self, career_name: str, token: str) -> dict[str, Any]:
        return self._get(f"/api/career/skill-gaps/{quote(career_name, safe='')}", token, "Failed to fetch skill gaps")

    def get_roadmap(self, career_name: str, token: str) -> dict[str, Any]:
        return self._get(f"/api/career/roadmap/{quote(career_name, safe='')}", token, "Failed to fetch roadmap")


def _error_message(resp: requests.Response, default_message: str) -> str:
    try:
        body = resp.json()
    except ValueError:
        return default_message
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return default_message


def get_analysis_client() -> AnalysisApiClient:
    return AnalysisApiClient.from_settings(default_settings)
