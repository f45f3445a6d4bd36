from fastapi import APIRouter, Depends, HTTPException, Query
from moodhome.api.deps import get_feed
from moodhome.db.feed import ChangeFeed
from moodhome.db.models import Base
from moodhome.schemas.common import FeedOut

router = APIRouter(prefix="/api/feed", tags=["feed"])

@router.get("/{topic}", response_model=FeedOut)
def poll(topic: str, since: int = Query(default=0, ge=0), feed: ChangeFeed = Depends(get_feed)):
    """Clients keep the last version they saw and re-fetch when ``changed`` is true."""
    if topic not in Base.metadata.tables:
        raise HTTPException(status_code=404, detail=f"Unknown topic '{topic}'")
    version = feed.version(topic)
    return {"topic": topic, "version": version, "changed": version > since}
