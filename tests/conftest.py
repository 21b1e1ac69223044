from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["PROGRESS_STORAGE"] = "sql"
    os.environ["ENVIRONMENT"] = "test"


class FakeAnalysisClient:
    """In-process stand-in for the remote analysis service."""

    def __init__(self) -> None:
        self.profiles: dict[str, dict[str, Any]] = {}
        self.suggestions: list[dict[str, Any]] = []
        self.skill_gaps: dict[str, dict[str, Any]] = {}
        self.roadmaps: dict[str, dict[str, Any]] = {}
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def _check(self, name: str, arg: str) -> None:
        self.calls.append((name, arg))
        if self.error is not None:
            raise self.error

    def get_profile(self, token: str) -> dict[str, Any]:
        self._check("profile", token)
        from skillpath.utils.jwt_handler import decode_access_token

        return self.profiles[decode_access_token(token)["sub"]]

    def get_career_suggestions(self, token: str) -> list[dict[str, Any]]:
        self._check("suggest", token)
        return list(self.suggestions)

    def get_skill_gaps(self, career_name: str, token: str) -> dict[str, Any]:
        self._check("skill-gaps", career_name)
        from skillpath.clients.analysis_api import AnalysisApiError

        if career_name not in self.skill_gaps:
            raise AnalysisApiError("Career not found", status_code=404)
        return self.skill_gaps[career_name]

    def get_roadmap(self, career_name: str, token: str) -> dict[str, Any]:
        self._check("roadmap", career_name)
        from skillpath.clients.analysis_api import AnalysisApiError

        if career_name not in self.roadmaps:
            raise AnalysisApiError("Career not found", status_code=404)
        return self.roadmaps[career_name]


@pytest.fixture()
def fake_api() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture()
def client(fake_api: FakeAnalysisClient) -> Any:
    from skillpath.clients.analysis_api import get_analysis_client
    from skillpath.database import Base, engine
    from skillpath.main import create_app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    app.dependency_overrides[get_analysis_client] = lambda: fake_api
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_token() -> Callable[[dict, timedelta], str]:
    # Tokens are minted by the analysis service in production; tests sign their own.
    from jose import jwt

    from skillpath.config import settings

    def _make(claims: dict, expires_delta: timedelta) -> str:
        to_encode = dict(claims)
        to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
        return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return _make


@pytest.fixture()
def auth_headers(make_token: Callable[[dict, timedelta], str]) -> Callable[..., dict[str, str]]:
    def _headers(user_id: str = "user-1") -> dict[str, str]:
        token = make_token({"sub": user_id}, timedelta(minutes=30))
        return {"Authorization": f"Bearer {token}"}

    return _headers
