"""
Tests for the suggestion engine in moodhome.services.suggestions.
"""
from unittest.mock import AsyncMock, patch

import pytest

from moodhome.core.errors import GeneratorFailure
from moodhome.db.models import SuggestionStatus
from moodhome.repositories.checkin_repo import create_checkin
from moodhome.repositories.suggestion_repo import get_active_suggestions
from moodhome.schemas.suggestion import SuggestionDraft
from moodhome.services.suggestions import dedupe_by_title, generate_for_checkin

GENERATE = "moodhome.services.suggestions.generator.generate_suggestions"


class TestDedupe:
    def test_keeps_first_and_caps(self):
        drafts = [SuggestionDraft(title=t) for t in ("a", "b", "a", "c", "d")]
        assert [d.title for d in dedupe_by_title(drafts, 3)] == ["a", "b", "c"]


class TestGenerateForCheckin:
    @pytest.mark.asyncio
    async def test_generator_results_persisted(self, db_session, contact):
        ci = create_checkin(db_session, ["Sad"], "long day")
        drafts = [SuggestionDraft(title="Call", priority="HIGH"), SuggestionDraft(title="Call"),
                  SuggestionDraft(title="Breathe", priority="LOW")]
        with patch(GENERATE, new=AsyncMock(return_value=drafts)) as gen:
            source, rows = await generate_for_checkin(db_session, ci)

        assert source == "generator"
        assert [r.title for r in rows] == ["Call", "Breathe"]
        assert all(r.check_in_id == ci.id and r.status == SuggestionStatus.ACTIVE for r in rows)
        assert rows[0].created_at < rows[1].created_at
        args = gen.call_args.args
        assert args[0] == ["Sad"] and args[1] == "long day"
        assert [c.id for c in args[2]] == [contact.id]
        assert len(get_active_suggestions(db_session)) == 2

    @pytest.mark.asyncio
    async def test_failure_persists_nothing(self, db_session):
        ci = create_checkin(db_session, ["Sad"])
        with patch(GENERATE, new=AsyncMock(side_effect=GeneratorFailure("down"))):
            with pytest.raises(GeneratorFailure):
                await generate_for_checkin(db_session, ci)
        assert get_active_suggestions(db_session) == []

    @pytest.mark.asyncio
    async def test_fallback_uses_templates(self, db_session):
        ci = create_checkin(db_session, ["Happy"])
        with patch(GENERATE, new=AsyncMock(side_effect=GeneratorFailure("down"))):
            source, rows = await generate_for_checkin(db_session, ci, fallback=True)
        assert source == "templates"
        assert [r.title for r in rows] == ["Amplify Your Good Vibes"]
        assert rows[0].actions[0]["type"] == "SMART_HOME"

    @pytest.mark.asyncio
    async def test_empty_result_writes_nothing(self, db_session):
        ci = create_checkin(db_session, ["Calm"])
        with patch(GENERATE, new=AsyncMock(return_value=[])):
            source, rows = await generate_for_checkin(db_session, ci)
        assert rows == []

    @pytest.mark.asyncio
    async def test_no_transaction_open_while_generating(self, db_session, contact):
        ci = create_checkin(db_session, ["Anxious"])
        db_session.refresh(ci)
        assert db_session.in_transaction()

        def check(emotions, note, contacts, bucket, history):
            assert not db_session.in_transaction()
            assert [c.name for c in contacts] == [contact.name]
            return [SuggestionDraft(title="Breathe")]

        with patch(GENERATE, new=AsyncMock(side_effect=check)):
            source, rows = await generate_for_checkin(db_session, ci)
        assert [r.title for r in rows] == ["Breathe"]
        assert len(get_active_suggestions(db_session)) == 1
