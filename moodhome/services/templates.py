"""
Rule-based suggestions used when the generator is unavailable and the caller
asked for a fallback. Content is keyed on the emotion analysis of the
check-in: support level first, then overall sentiment, with crisis support
prepended whenever risk is elevated.
"""
from __future__ import annotations

from typing import Optional, Sequence

from moodhome.db.models import Contact
from moodhome.schemas.suggestion import ActionData, SuggestionDraft
from moodhome.services.emotion_analysis import EmotionAnalysis, RiskLevel, Sentiment, SupportLevel

MAX_TEMPLATE_SUGGESTIONS = 3
CRISIS_LINE = "988"

SELF_CARE_BY_TIME = {
    "morning": ("energizing_playlist", "Start your day with uplifting music"),
    "afternoon": ("short_walk_reminder", "Take a refreshing 10-minute walk"),
    "evening": ("relaxing_routine", "Wind down with gentle lighting and soft music"),
    "night": ("bedtime_routine", "Prepare for restful sleep"),
}


def generate_from_templates(
    analysis: EmotionAnalysis,
    contacts: Sequence[Contact],
    time_of_day: str,
) -> list[SuggestionDraft]:
    drafts: list[SuggestionDraft] = []
    # crisis support goes first so the cap below can never drop it
    if analysis.risk_level in (RiskLevel.URGENT, RiskLevel.CONCERN):
        drafts.extend(_crisis(contacts))

    if analysis.support_needed in (SupportLevel.HIGH, SupportLevel.URGENT):
        drafts.extend(_high_support(contacts))
    elif analysis.support_needed == SupportLevel.MEDIUM:
        drafts.extend(_medium_support(contacts))
    elif analysis.support_needed == SupportLevel.LOW:
        drafts.extend(_low_support(time_of_day))
    elif analysis.sentiment == Sentiment.POSITIVE:
        drafts.extend(_positive_mood())
    elif analysis.sentiment == Sentiment.NEUTRAL:
        drafts.extend(_neutral_mood())
    else:
        drafts.extend(_basic_support())

    return drafts[:MAX_TEMPLATE_SUGGESTIONS]


def _call_action(contact: Contact, display_text: str, script: Optional[str] = None) -> ActionData:
    params = {"phoneNumber": contact.phone_number, "contactName": contact.name}
    if script:
        params["suggestedScript"] = script
    return ActionData(type="CALL_CONTACT", target_id=contact.id, parameters=params, display_text=display_text)


def _high_support(contacts: Sequence[Contact]) -> list[SuggestionDraft]:
    out = []
    if contacts:
        c = contacts[0]
        out.append(SuggestionDraft(
            title="Reach Out for Support",
            description="Connect with someone who cares about you",
            type="SOCIAL_SUPPORT",
            priority="HIGH",
            actions=[_call_action(c, f"Call {c.name}", "I'm going through a tough time and could use some support.")],
            reasoning="Social connection is crucial during difficult emotional moments",
            estimated_duration="10-30 minutes",
        ))
    out.append(SuggestionDraft(
        title="Anxiety Relief Environment",
        description="Create a calming space and guide you through breathing exercises",
        type="SMART_HOME",
        priority="HIGH",
        actions=[
            ActionData(type="SMART_HOME_ENVIRONMENT", parameters={"environment": "anxiety_relief", "duration": "15"},
                       display_text="Activate anxiety relief environment"),
            ActionData(type="THERAPEUTIC_ACTIVITY", parameters={"activity": "breathing_exercise", "duration": "5"},
                       display_text="Start 5-minute breathing exercise"),
        ],
        reasoning="Environmental changes combined with breathing exercises can quickly reduce anxiety and emotional distress",
        estimated_duration="5-15 minutes",
    ))
    return out


def _medium_support(contacts: Sequence[Contact]) -> list[SuggestionDraft]:
    out = []
    if contacts:
        c = contacts[0]
        out.append(SuggestionDraft(
            title="Gentle Check-in",
            description="A light conversation might help lift your spirits",
            type="SOCIAL_SUPPORT",
            priority="MEDIUM",
            actions=[_call_action(c, f"Call {c.name} for a chat",
                                  "Hi! Just wanted to check in and see how you're doing today.")],
            reasoning="Light social connection can provide emotional support without feeling overwhelming",
            estimated_duration="10-20 minutes",
        ))
    out.append(SuggestionDraft(
        title="Mood Boost Environment",
        description="Brighten your space to help lift your spirits",
        type="SMART_HOME",
        priority="MEDIUM",
        actions=[ActionData(type="SMART_HOME_ENVIRONMENT", parameters={"environment": "mood_boost", "duration": "20"},
                            display_text="Activate mood boost environment")],
        reasoning="A comfortable physical environment can help improve emotional well-being",
        estimated_duration="Immediate",
    ))
    return out


def _low_support(time_of_day: str) -> list[SuggestionDraft]:
    activity, text = SELF_CARE_BY_TIME.get(time_of_day, ("mindfulness_moment", "Take a moment for yourself"))
    return [SuggestionDraft(
        title="Self-Care Moment",
        description=text,
        type="WELLNESS",
        priority="LOW",
        actions=[
            ActionData(type="SMART_HOME", parameters={"device": "speaker", "action": "play_music", "value": activity},
                       display_text=text),
            ActionData(type="REMINDER",
                       parameters={"message": "Take a few deep breaths and appreciate this moment", "when": "now"},
                       display_text="Mindfulness reminder"),
        ],
        reasoning="Gentle self-care activities can help maintain emotional balance",
        estimated_duration="5-10 minutes",
    )]


def _positive_mood() -> list[SuggestionDraft]:
    return [SuggestionDraft(
        title="Amplify Your Good Vibes",
        description="Let's make this positive moment even better",
        type="SMART_HOME",
        priority="MEDIUM",
        actions=[
            ActionData(type="SMART_HOME", parameters={"device": "lights", "action": "set_color", "value": "vibrant"},
                       display_text="Set vibrant lighting"),
            ActionData(type="SMART_HOME",
                       parameters={"device": "speaker", "action": "play_music", "value": "upbeat_playlist"},
                       display_text="Play upbeat music"),
            ActionData(type="REMINDER",
                       parameters={"message": "Share this positive energy with someone you love", "when": "now"},
                       display_text="Consider sharing your joy"),
        ],
        reasoning="Amplifying positive emotions can create lasting mood improvements and strengthen social connections",
        estimated_duration="15-30 minutes",
    )]


def _neutral_mood() -> list[SuggestionDraft]:
    return [SuggestionDraft(
        title="Gentle Energy Boost",
        description="Add a little spark to your day",
        type="WELLNESS",
        priority="LOW",
        actions=[
            ActionData(type="SMART_HOME", parameters={"device": "lights", "action": "set_brightness", "value": "80"},
                       display_text="Brighten the lights"),
            ActionData(type="THERAPEUTIC_ACTIVITY", parameters={"activity": "mood_boost_playlist", "duration": "10"},
                       display_text="10-minute mood boost activity"),
        ],
        reasoning="Small environmental changes can help shift neutral moods toward more positive states",
        estimated_duration="10 minutes",
    )]


def _basic_support() -> list[SuggestionDraft]:
    return [SuggestionDraft(
        title="Comfort & Connection",
        description="Create a supportive environment for yourself",
        type="WELLNESS",
        priority="MEDIUM",
        actions=[
            ActionData(type="SMART_HOME", parameters={"device": "lights", "action": "set_color", "value": "soft_warm"},
                       display_text="Set soft, warm lighting"),
            ActionData(type="REMINDER",
                       parameters={"message": "It's okay to reach out to someone if you need support",
                                   "when": "in_30_minutes"},
                       display_text="Gentle reminder about support"),
        ],
        reasoning="Creating a supportive environment while gently encouraging connection can be helpful",
        estimated_duration="5 minutes",
    )]


def _crisis(contacts: Sequence[Contact]) -> list[SuggestionDraft]:
    out = [SuggestionDraft(
        title="🚨 Immediate Support Available",
        description="You don't have to go through this alone. Professional help is available right now.",
        type="EMERGENCY",
        priority="URGENT",
        actions=[ActionData(type="CALL_CONTACT",
                            parameters={"phoneNumber": CRISIS_LINE, "contactName": "Crisis Lifeline"},
                            display_text=f"Call {CRISIS_LINE} - Suicide & Crisis Lifeline (24/7 support)")],
        reasoning="Crisis-level distress detected. Immediate professional intervention recommended.",
        estimated_duration="Available now",
    )]
    emergency = next((c for c in contacts if c.relationship == "emergency"), None)
    if emergency is not None:
        out.append(SuggestionDraft(
            title="Emergency Contact",
            description="Call your designated emergency contact",
            type="EMERGENCY",
            priority="URGENT",
            actions=[_call_action(emergency, f"Call {emergency.name} (your emergency contact)")],
            reasoning="Emergency contact can provide immediate personal support during crisis",
            estimated_duration="Immediate",
        ))
    return out
