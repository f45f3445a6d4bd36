from pydantic import BaseModel

class TopEmotionOut(BaseModel):
    glyph: str
    label: str
    message: str

class MoodAnalyticsOut(BaseModel):
    """Sentiment buckets count emotion occurrences, not check-ins."""
    sentiment: dict[str, int]
    frequencies: dict[str, int]
    top_emotion: TopEmotionOut
    checkins_analyzed: int
    total_occurrences: int
    window: int
