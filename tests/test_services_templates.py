"""
Tests for the rule-based fallback suggestions in moodhome.services.templates.
"""
from moodhome.db.models import Contact, SuggestionType
from moodhome.services.emotion_analysis import analyze_checkin
from moodhome.services.templates import CRISIS_LINE, generate_from_templates


def people(*relationships):
    return [
        Contact(id=f"c{i}", name=f"Person{i}", phone_number=f"555-{i}", relationship=r)
        for i, r in enumerate(relationships)
    ]


class TestTemplates:
    def test_positive_mood(self):
        drafts = generate_from_templates(analyze_checkin(["Happy"], None), [], "morning")
        assert [d.title for d in drafts] == ["Amplify Your Good Vibes"]

    def test_neutral_mood(self):
        drafts = generate_from_templates(analyze_checkin(["Tired"], None), [], "morning")
        assert [d.title for d in drafts] == ["Gentle Energy Boost"]

    def test_low_support_depends_on_time_of_day(self):
        drafts = generate_from_templates(analyze_checkin(["Sad"], None), [], "night")
        assert drafts[0].title == "Self-Care Moment"
        assert drafts[0].actions[0].parameters["value"] == "bedtime_routine"

    def test_medium_support_calls_first_contact(self):
        drafts = generate_from_templates(analyze_checkin(["Sad", "Angry"], None), people("friend"), "evening")
        assert [d.title for d in drafts] == ["Gentle Check-in", "Mood Boost Environment"]
        call = drafts[0].actions[0]
        assert call.type == "CALL_CONTACT"
        assert call.target_id == "c0"

    def test_high_support_without_contacts(self):
        drafts = generate_from_templates(analyze_checkin(["Calm"], "alone and overwhelmed"), [], "evening")
        assert [d.title for d in drafts] == ["Anxiety Relief Environment"]

    def test_crisis_first_and_capped(self):
        analysis = analyze_checkin(["Sad", "Angry", "Anxious"], "I want to hurt myself")
        drafts = generate_from_templates(analysis, people("friend", "emergency"), "night")
        assert len(drafts) == 3
        assert drafts[0].type == SuggestionType.EMERGENCY
        assert drafts[0].priority == "URGENT"
        assert drafts[0].actions[0].parameters["phoneNumber"] == CRISIS_LINE
        assert drafts[1].title == "Emergency Contact"
        assert drafts[1].actions[0].target_id == "c1"
        assert drafts[2].title == "Reach Out for Support"
