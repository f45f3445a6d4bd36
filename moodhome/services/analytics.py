"""
Mood analytics over a window of recent check-ins.

Sentiment buckets count emotion occurrences, not check-ins: a check-in with
three labels contributes three increments. Label matching is exact and
case-sensitive ("happy" is not "Happy" and lands in Neutral).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from moodhome.core.errors import InvalidInput

log = logging.getLogger(__name__)

POSITIVE = "Positive"
NEUTRAL = "Neutral"
NEGATIVE = "Negative"

POSITIVE_EMOTIONS = frozenset({"Great", "Happy", "Calm", "Confident", "Loved"})
NEGATIVE_EMOTIONS = frozenset({"Upset", "Sad", "Angry", "Anxious"})

EMOTION_GLYPHS = {
    "Great": "😊",
    "Happy": "😄",
    "Calm": "😌",
    "Tired": "😴",
    "Upset": "😕",
    "Sad": "😢",
    "Angry": "😠",
    "Anxious": "😰",
    "Thoughtful": "🤔",
    "Confident": "😎",
    "Loved": "🥰",
    "Sleepy": "😪",
}
DEFAULT_GLYPH = "😊"
DEFAULT_TOP_LABEL = "Happy"

ENCOURAGEMENTS = {
    "happy": "Your positive energy is contagious! Keep spreading those good vibes.",
    "great": "You're radiating greatness! Your enthusiasm is inspiring.",
    "calm": "Your inner peace is a strength. Tranquility suits you beautifully.",
    "confident": "Your self-assurance is admirable! Confidence is your superpower.",
    "loved": "Feeling loved shows in your warmth. You're surrounded by care.",
    "tired": "Rest is productive too. You're doing great, take care of yourself.",
    "thoughtful": "Your reflective nature brings wisdom. Deep thinking is a gift.",
    "sleepy": "Rest well! Good sleep leads to great days ahead.",
    "upset": "It's okay to feel upset. These feelings will pass, you're stronger than you know.",
    "sad": "Sadness is part of healing. Be gentle with yourself, brighter days are coming.",
    "angry": "Your feelings are valid. Channel this energy into positive change.",
    "anxious": "Anxiety shows you care deeply. Take it one breath at a time.",
}
DEFAULT_ENCOURAGEMENT = "Every emotion is valid and part of your unique journey. You're doing amazing!"

DEFAULT_WINDOW = 100


def classify_emotion(label: str) -> str:
    if label in POSITIVE_EMOTIONS:
        return POSITIVE
    if label in NEGATIVE_EMOTIONS:
        return NEGATIVE
    return NEUTRAL


def glyph_for(label: str) -> str:
    return EMOTION_GLYPHS.get(label, DEFAULT_GLYPH)


def encouragement_for(label: str) -> str:
    # messages were written per mood word, so this lookup ignores case
    return ENCOURAGEMENTS.get(label.lower(), DEFAULT_ENCOURAGEMENT)


@dataclass(slots=True, frozen=True)
class TopEmotion:
    glyph: str
    label: str
    message: str

    def as_pair(self) -> tuple[str, str]:
        return (self.glyph, self.label)


@dataclass(slots=True)
class MoodAnalytics:
    sentiment: dict[str, int] = field(default_factory=lambda: {POSITIVE: 0, NEUTRAL: 0, NEGATIVE: 0})
    frequencies: dict[str, int] = field(default_factory=dict)
    top_emotion: TopEmotion = field(default_factory=lambda: default_top_emotion())
    checkins_analyzed: int = 0

    @property
    def total_occurrences(self) -> int:
        return sum(self.sentiment.values())


def default_top_emotion() -> TopEmotion:
    return TopEmotion(glyph=DEFAULT_GLYPH, label=DEFAULT_TOP_LABEL, message=encouragement_for(DEFAULT_TOP_LABEL))


def _emotions_of(record: Any) -> list[str]:
    """
    Emotion labels of one check-in snapshot. None/empty means no occurrences;
    anything that is not a list of labels is InvalidInput.
    """
    raw = record.get("emotions") if isinstance(record, dict) else getattr(record, "emotions", None)
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise InvalidInput(f"emotions must be a list of labels, got {type(raw).__name__}")
    return list(raw)


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else getattr(record, "id", None)


def analyze_mood(checkins: Iterable[Any], window: int = DEFAULT_WINDOW) -> MoodAnalytics:
    """
    Aggregate the first ``window`` check-ins (callers pass them most recent
    first). Never fails on bad records: a malformed record or label is
    logged and contributes nothing.

    Ties for the top emotion go to the label that was seen first while
    iterating the window.
    """
    if window < 1:
        raise InvalidInput("window must be at least 1")

    result = MoodAnalytics()
    for index, record in enumerate(checkins or ()):
        if index >= window:
            break
        result.checkins_analyzed += 1
        try:
            labels = _emotions_of(record)
        except InvalidInput as e:
            log.warning("Skipping check-in %s: %s", _record_id(record), e)
            continue
        for label in labels:
            if not isinstance(label, str) or not label:
                log.warning("Skipping invalid emotion label %r in check-in %s", label, _record_id(record))
                continue
            result.sentiment[classify_emotion(label)] += 1
            result.frequencies[label] = result.frequencies.get(label, 0) + 1

    if result.frequencies:
        result.top_emotion = top_emotion(result.frequencies)
    return result


def top_emotion(frequencies: dict[str, int]) -> TopEmotion:
    if not frequencies:
        return default_top_emotion()
    best_label = None
    best_count = 0
    for label, count in frequencies.items():
        if count > best_count:
            best_label, best_count = label, count
    if best_label is None:
        return default_top_emotion()
    return TopEmotion(glyph=glyph_for(best_label), label=best_label, message=encouragement_for(best_label))
