"""
Pytest configuration and shared fixtures for all tests.
"""
import json
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

from moodhome.db.models import AutomationSuggestion, CheckIn, Contact
from moodhome.db.session import Database
from moodhome.main import create_app


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Fresh in-memory database per test (single shared connection)."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database) -> Generator[Session, None, None]:
    with database.session() as session:
        yield session


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def sync_client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_checkin(db_session):
    """Insert a check-in with an explicit created_at."""
    def _make(emotions, created_at, note=None):
        ci = CheckIn(emotions=list(emotions), note=note, timestamp="Oct 19, 2026 at 1:05 PM", created_at=created_at)
        db_session.add(ci); db_session.commit(); db_session.refresh(ci)
        return ci
    return _make


@pytest.fixture
def make_suggestion(db_session):
    """Insert an active suggestion with an explicit priority and created_at."""
    def _make(priority, created_at, check_in_id="ci-1", title=None, actions=None, **kw):
        s = AutomationSuggestion(
            check_in_id=check_in_id,
            title=title or f"{priority} at {created_at}",
            description="",
            priority=priority,
            actions=actions or [],
            reasoning="",
            estimated_duration="5 minutes",
            created_at=created_at,
            **kw,
        )
        db_session.add(s); db_session.commit(); db_session.refresh(s)
        return s
    return _make


@pytest.fixture
def contact(db_session) -> Contact:
    c = Contact(name="Sam", phone_number="555-0100", relationship="friend", is_frequent=True, added_at=1)
    db_session.add(c); db_session.commit(); db_session.refresh(c)
    return c


def _gemini_body(text: str) -> dict:
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 80},
    }


@pytest.fixture
def gemini_body():
    """Wrap model text in a generateContent response body."""
    return _gemini_body


@pytest.fixture
def mock_gemini_response():
    """Canned generateContent response with two suggestions wrapped in a code fence."""
    payload = {
        "suggestions": [
            {
                "title": "Call a friend",
                "description": "A short chat could help",
                "type": "SOCIAL_SUPPORT",
                "priority": "HIGH",
                "actions": [{"type": "CALL_CONTACT", "displayText": "Call now", "parameters": {}}],
                "reasoning": "Connection helps",
                "duration": "10 minutes",
            },
            {
                "title": "Dim the lights",
                "description": "Create a calm space",
                "type": "SMART_ENVIRONMENT",
                "actions": [
                    {"type": "SMART_HOME_ENVIRONMENT", "displayText": "Relax",
                     "parameters": {"environment": "deep_relaxation", "duration": 15}}
                ],
            },
        ]
    }
    return _gemini_body("```json\n" + json.dumps(payload) + "\n```")
