"""
Unit tests for moodhome.db.models module.
"""
import uuid

from moodhome.db.models import AutomationSuggestion, CheckIn, Contact, SuggestionStatus, SuggestionType


class TestCheckInModel:
    def test_defaults_on_flush(self, db_session):
        """Test that id and emotions get defaults."""
        ci = CheckIn(timestamp="now", created_at=1)
        db_session.add(ci)
        db_session.flush()
        assert uuid.UUID(ci.id)
        assert ci.emotions == []
        assert ci.note is None

    def test_emotions_round_trip_as_json(self, db_session):
        ci = CheckIn(emotions=["Happy", "Sad"], timestamp="now", created_at=2)
        db_session.add(ci); db_session.commit()
        db_session.expire_all()
        assert db_session.get(CheckIn, ci.id).emotions == ["Happy", "Sad"]


class TestAutomationSuggestionModel:
    def test_defaults(self, db_session):
        s = AutomationSuggestion(check_in_id="ci", title="t", description="d", created_at=1)
        db_session.add(s); db_session.flush()
        assert s.status == SuggestionStatus.ACTIVE
        assert s.type == SuggestionType.WELLNESS
        assert s.priority == "MEDIUM"
        assert s.executed_at is None

    def test_status_flags_are_exclusive(self):
        """Executed and dismissed cannot both be true."""
        for status in SuggestionStatus:
            s = AutomationSuggestion(status=status)
            assert [s.is_active, s.is_dismissed, s.is_executed].count(True) == 1

    def test_unknown_priority_survives_storage(self, db_session):
        s = AutomationSuggestion(check_in_id="ci", title="t", description="d", priority="SOMEDAY", created_at=1)
        db_session.add(s); db_session.commit()
        db_session.expire_all()
        assert db_session.get(AutomationSuggestion, s.id).priority == "SOMEDAY"


class TestContactModel:
    def test_defaults(self, db_session):
        c = Contact(name="A", phone_number="1", relationship="therapist", added_at=1)
        db_session.add(c); db_session.flush()
        assert c.is_frequent is False
        assert c.last_contacted_at is None
