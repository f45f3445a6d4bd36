"""
Unit tests for moodhome.services.generator (Gemini client).
"""
import json
from unittest.mock import patch

import httpx
import pytest

from moodhome.core.config import settings
from moodhome.core.errors import GeneratorFailure
from moodhome.db.models import Contact, SuggestionType
from moodhome.services.generator import build_prompt, generate_suggestions, parse_response

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"


def response(status_code, body):
    return httpx.Response(status_code, json=body, request=httpx.Request("POST", GEMINI_URL))


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")


@pytest.fixture
def sam():
    return Contact(id="c-1", name="Sam", phone_number="555-0100", relationship="friend", is_frequent=True, added_at=1)


class TestBuildPrompt:
    def test_includes_context(self, sam):
        prompt = build_prompt(["Sad", "Tired"], None, [sam], "evening", ["Previous suggestion: COMPLETED"])
        assert "Current emotions: Sad, Tired" in prompt
        assert "Thoughts: Not provided" in prompt
        assert "Sam (friend)" in prompt
        assert "Time of day: evening" in prompt
        assert "Previous suggestion: COMPLETED" in prompt

    def test_at_most_three_contacts(self):
        people = [Contact(id=str(i), name=f"P{i}", phone_number="1", relationship="friend") for i in range(5)]
        prompt = build_prompt(["Calm"], "ok", people, "morning")
        assert "P2 (friend)" in prompt
        assert "P3" not in prompt


class TestParseResponse:
    def test_normalizes_fields(self, sam):
        text = json.dumps({"suggestions": [
            {"title": "  Walk  ", "type": "SMART_ENVIRONMENT", "actions": [{"type": "CALL_CONTACT"}]},
            {"title": "Think", "type": "MYSTERY", "priority": "whenever"},
        ]})
        drafts = parse_response("Sure! " + text + " Hope that helps.", [sam])
        assert [d.title for d in drafts] == ["Walk", "Think"]
        assert drafts[0].type == SuggestionType.SMART_HOME
        assert drafts[0].priority == "MEDIUM"
        assert drafts[0].actions[0].target_id == "c-1"
        assert drafts[0].actions[0].parameters == {"phoneNumber": "555-0100", "contactName": "Sam"}
        assert drafts[1].type == SuggestionType.WELLNESS
        assert drafts[1].priority == "MEDIUM"
        assert drafts[1].reasoning == "AI-generated suggestion"

    def test_drops_blank_titles_and_caps_at_three(self):
        items = [{"title": ""}] + [{"title": f"S{i}"} for i in range(5)]
        drafts = parse_response(json.dumps({"suggestions": items}), [])
        assert [d.title for d in drafts] == ["S0", "S1", "S2"]

    def test_no_json_raises(self):
        with pytest.raises(ValueError):
            parse_response("I cannot help with that.", [])


class TestGenerateSuggestions:
    @pytest.mark.asyncio
    async def test_success(self, api_key, sam, mock_gemini_response):
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = response(200, mock_gemini_response)
            drafts = await generate_suggestions(["Sad"], "long day", [sam], "evening")

        assert [d.title for d in drafts] == ["Call a friend", "Dim the lights"]
        assert drafts[0].priority == "HIGH"
        assert drafts[0].estimated_duration == "10 minutes"
        assert drafts[1].type == SuggestionType.SMART_HOME
        assert drafts[1].actions[0].parameters["duration"] == "15"
        _, kwargs = mock_post.call_args
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["json"]["generationConfig"]["topK"] == 40

    @pytest.mark.asyncio
    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            with pytest.raises(GeneratorFailure):
                await generate_suggestions(["Sad"], None, [], "night")
            mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error(self, api_key):
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = response(500, {"error": {"message": "boom"}})
            with pytest.raises(GeneratorFailure, match="HTTP 500"):
                await generate_suggestions(["Sad"], None, [], "night")
            assert mock_post.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error_retried_then_fails(self, api_key):
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            mock_post.side_effect = httpx.ConnectError("Connection failed")
            with pytest.raises(GeneratorFailure):
                await generate_suggestions(["Sad"], None, [], "night")
            assert mock_post.call_count == 3

    @pytest.mark.asyncio
    async def test_unparseable_text(self, api_key, gemini_body):
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = response(200, gemini_body("not valid json"))
            with pytest.raises(GeneratorFailure):
                await generate_suggestions(["Sad"], None, [], "night")

    @pytest.mark.asyncio
    async def test_no_candidates(self, api_key):
        with patch("moodhome.services.generator.httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = response(200, {"promptFeedback": {"blockReason": "SAFETY"}})
            with pytest.raises(GeneratorFailure):
                await generate_suggestions(["Sad"], None, [], "night")
