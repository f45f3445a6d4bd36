from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence


class Sentiment(str, enum.Enum):
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


class Intensity(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    EXTREME = "EXTREME"


class SupportLevel(str, enum.Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class RiskLevel(str, enum.Enum):
    SAFE = "SAFE"
    MONITOR = "MONITOR"
    CONCERN = "CONCERN"
    URGENT = "URGENT"


POSITIVE_WORDS = {"happy", "great", "confident", "loved", "calm"}
NEGATIVE_WORDS = {"sad", "angry", "anxious", "upset"}
CONCERNING_WORDS = ("hopeless", "alone", "worthless", "trapped", "overwhelmed")
CRISIS_WORDS = ("harm", "hurt", "end", "suicide", "die", "kill")
RISK_CONCERN_WORDS = ("hopeless", "trapped", "worthless", "burden")
INTENSITY_WORDS = ("very", "extremely", "completely", "totally", "absolutely")


@dataclass(slots=True)
class EmotionAnalysis:
    sentiment: Sentiment
    intensity: Intensity
    support_needed: SupportLevel
    risk_level: RiskLevel
    dominant_emotions: list[str] = field(default_factory=list)


def analyze_checkin(emotions: Sequence[str], thoughts: Optional[str]) -> EmotionAnalysis:
    """
    Rule-based read of a single check-in, used to pick template suggestions
    and to give the generator a support hint. Matching here ignores case,
    unlike the journal analytics buckets.
    """
    lowered = [e.lower() for e in emotions]
    text = (thoughts or "").lower()
    return EmotionAnalysis(
        sentiment=_sentiment(lowered),
        intensity=_intensity(lowered, text),
        support_needed=_support_level(lowered, text),
        risk_level=_risk_level(lowered, text),
        dominant_emotions=list(emotions[:3]),
    )


def _sentiment(emotions: list[str]) -> Sentiment:
    pos = sum(1 for e in emotions if e in POSITIVE_WORDS)
    neg = sum(1 for e in emotions if e in NEGATIVE_WORDS)
    if pos > neg:
        return Sentiment.POSITIVE
    if neg > pos:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def _support_level(emotions: list[str], text: str) -> SupportLevel:
    emotion_score = sum(1 for e in emotions if e in NEGATIVE_WORDS)
    thought_score = sum(1 for w in CONCERNING_WORDS if _mentions(text, w))
    if thought_score >= 2 or emotion_score >= 3:
        return SupportLevel.HIGH
    if thought_score >= 1 or emotion_score >= 2:
        return SupportLevel.MEDIUM
    if emotion_score >= 1:
        return SupportLevel.LOW
    return SupportLevel.NONE


def _risk_level(emotions: list[str], text: str) -> RiskLevel:
    if text:
        if any(_mentions(text, w) for w in CRISIS_WORDS):
            return RiskLevel.URGENT
        if sum(1 for w in RISK_CONCERN_WORDS if _mentions(text, w)) >= 2:
            return RiskLevel.CONCERN
    if sum(1 for e in emotions if e in NEGATIVE_WORDS) >= 3:
        return RiskLevel.CONCERN
    return RiskLevel.SAFE


def _intensity(emotions: list[str], text: str) -> Intensity:
    score = sum(1 for w in INTENSITY_WORDS if _mentions(text, w))
    if score >= 3 or len(emotions) >= 5:
        return Intensity.EXTREME
    if score >= 2 or len(emotions) >= 4:
        return Intensity.HIGH
    if score >= 1 or len(emotions) >= 2:
        return Intensity.MEDIUM
    return Intensity.LOW


def _mentions(text: str, word: str) -> bool:
    # word-start match so "end" does not fire on "weekend"; suffixes still count ("hurting")
    return re.search(rf"\b{re.escape(word)}", text) is not None
