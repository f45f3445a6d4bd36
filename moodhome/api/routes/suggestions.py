from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from moodhome.api.deps import get_db, get_feed
from moodhome.core.config import settings
from moodhome.db.feed import ChangeFeed
from moodhome.db.models import AutomationSuggestion
from moodhome.repositories.checkin_repo import get_checkin
from moodhome.repositories.execution_repo import get_executions_for_suggestion, get_recent_executions
from moodhome.repositories.suggestion_repo import get_active_suggestions, get_suggestion, get_suggestions_for_checkin
from moodhome.schemas.suggestion import (
    ActiveSuggestionsOut, ExecuteIn, ExecutionOut, GenerateOut, SuggestionOut, TransitionOut,
)
from moodhome.services.lifecycle import dismiss_suggestion, execute_suggestion
from moodhome.services.ranking import summarize
from moodhome.services.suggestions import generate_for_checkin


router = APIRouter(tags=["suggestions"])

SUGGESTIONS_TOPIC = AutomationSuggestion.__tablename__


def _suggestion_or_404(db: Session, suggestion_id: str) -> AutomationSuggestion:
    s = get_suggestion(db, suggestion_id)
    if not s: raise HTTPException(status_code=404, detail="Suggestion not found")
    return s


@router.post("/api/checkins/{checkin_id}/suggestions", response_model=GenerateOut, status_code=201)
async def generate(checkin_id: str, fallback: bool = Query(default=False), db: Session = Depends(get_db)):
    ci = await run_in_threadpool(get_checkin, db, checkin_id)
    if not ci: raise HTTPException(status_code=404, detail="Check-in not found")
    source, rows = await generate_for_checkin(db, ci, fallback=fallback)
    return {"check_in_id": ci.id, "source": source, "suggestions": rows}


@router.get("/api/checkins/{checkin_id}/suggestions", response_model=list[SuggestionOut])
def for_checkin(checkin_id: str, db: Session = Depends(get_db)):
    return get_suggestions_for_checkin(db, checkin_id)


@router.get("/api/suggestions/active", response_model=ActiveSuggestionsOut)
def active(
    limit: int = Query(default=settings.ACTIVE_SUGGESTION_LIMIT, ge=0, le=100),
    db: Session = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
):
    # read the version first so a concurrent commit can only make it look stale, never fresh
    version = feed.version(SUGGESTIONS_TOPIC)
    summary = summarize(get_active_suggestions(db, limit=None), limit=limit)
    return {
        "suggestions": summary.items,
        "headline_priority": summary.headline,
        "total_active": summary.total_active,
        "version": version,
    }


@router.post("/api/suggestions/{suggestion_id}/dismiss", response_model=TransitionOut)
def dismiss(suggestion_id: str, db: Session = Depends(get_db)):
    result = dismiss_suggestion(db, _suggestion_or_404(db, suggestion_id))
    return {"suggestion": result.suggestion, "changed": result.changed, "execution": None}


@router.post("/api/suggestions/{suggestion_id}/execute", response_model=TransitionOut)
def execute(suggestion_id: str, payload: Optional[ExecuteIn] = None, db: Session = Depends(get_db)):
    payload = payload or ExecuteIn()
    result = execute_suggestion(
        db,
        _suggestion_or_404(db, suggestion_id),
        completion_status=payload.completion_status,
        action_type=payload.action_type,
        was_helpful=payload.was_helpful,
        user_feedback=payload.user_feedback,
    )
    return {"suggestion": result.suggestion, "changed": result.changed, "execution": result.execution}


@router.get("/api/suggestions/{suggestion_id}/executions", response_model=list[ExecutionOut])
def executions(suggestion_id: str, db: Session = Depends(get_db)):
    _suggestion_or_404(db, suggestion_id)
    return get_executions_for_suggestion(db, suggestion_id)


@router.get("/api/executions/recent", response_model=list[ExecutionOut])
def recent_executions(limit: int = Query(default=10, ge=1, le=100), db: Session = Depends(get_db)):
    return get_recent_executions(db, limit)
