from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from moodhome.api.deps import get_db
from moodhome.core.config import settings
from moodhome.repositories.checkin_repo import get_recent_checkins
from moodhome.schemas.analytics import MoodAnalyticsOut
from moodhome.services.analytics import analyze_mood

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

@router.get("/mood", response_model=MoodAnalyticsOut)
def mood(window: int = Query(default=settings.ANALYTICS_WINDOW, ge=1, le=1000), db: Session = Depends(get_db)):
    result = analyze_mood(get_recent_checkins(db, window), window=window)
    return {
        "sentiment": result.sentiment,
        "frequencies": result.frequencies,
        "top_emotion": {"glyph": result.top_emotion.glyph, "label": result.top_emotion.label,
                        "message": result.top_emotion.message},
        "checkins_analyzed": result.checkins_analyzed,
        "total_occurrences": result.total_occurrences,
        "window": window,
    }
