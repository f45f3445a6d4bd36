"""
Suggestion engine: turns a stored check-in into persisted automation
suggestions, via the generator or (on request) the rule-based templates.
"""
from __future__ import annotations

import logging
from typing import Iterable

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from moodhome.core.config import settings
from moodhome.core.errors import GeneratorFailure
from moodhome.db.models import AutomationSuggestion, CheckIn, Contact
from moodhome.repositories.contact_repo import get_frequent_contacts
from moodhome.repositories.execution_repo import get_recent_executions
from moodhome.repositories.suggestion_repo import insert_suggestions
from moodhome.schemas.suggestion import SuggestionDraft
from moodhome.services import generator
from moodhome.services.clock import now_ms
from moodhome.services.emotion_analysis import analyze_checkin
from moodhome.services.templates import generate_from_templates
from moodhome.utils.time import time_of_day

log = logging.getLogger(__name__)

SOURCE_GENERATOR = "generator"
SOURCE_TEMPLATES = "templates"

CONTEXT_CONTACTS = 3
CONTEXT_HISTORY = 5


def dedupe_by_title(drafts: Iterable[SuggestionDraft], limit: int) -> list[SuggestionDraft]:
    seen: set[str] = set()
    out: list[SuggestionDraft] = []
    for d in drafts:
        if d.title in seen:
            continue
        seen.add(d.title)
        out.append(d)
        if len(out) >= limit:
            break
    return out


def _load_context(db: Session) -> tuple[list[Contact], list[str]]:
    """
    Frequent contacts and recent execution history for the prompt. The read
    transaction is ended here so no connection is held while the generator
    is awaited.
    """
    contacts = get_frequent_contacts(db, CONTEXT_CONTACTS)
    history = [
        f"Previous suggestion: {e.completion_status.value}"
        for e in get_recent_executions(db, CONTEXT_HISTORY)
    ]
    db.commit()
    return contacts, history


def _persist(db: Session, checkin_id: str, drafts: list[SuggestionDraft]) -> list[AutomationSuggestion]:
    rows = []
    for d in drafts:
        rows.append(AutomationSuggestion(
            check_in_id=checkin_id,
            title=d.title,
            description=d.description,
            type=d.type,
            priority=d.priority,
            actions=[a.model_dump() for a in d.actions],
            reasoning=d.reasoning,
            estimated_duration=d.estimated_duration,
            created_at=now_ms(),
        ))
    if rows:
        insert_suggestions(db, rows)
    return rows


async def generate_for_checkin(
    db: Session,
    checkin: CheckIn,
    *,
    fallback: bool = False,
    max_results: int | None = None,
) -> tuple[str, list[AutomationSuggestion]]:
    """
    Returns ``(source, suggestions)`` where source is "generator" or
    "templates". A GeneratorFailure propagates unless ``fallback`` is set,
    and in that case nothing has been written yet.

    Store access runs on the threadpool; no transaction is open while the
    generator is awaited.
    """
    limit = max_results or settings.MAX_GENERATED_SUGGESTIONS
    contacts, history = await run_in_threadpool(_load_context, db)
    bucket = time_of_day()

    try:
        drafts = await generator.generate_suggestions(
            checkin.emotions, checkin.note, contacts, bucket, history
        )
        source = SOURCE_GENERATOR
    except GeneratorFailure as e:
        if not fallback:
            raise
        log.warning("Generator failed for check-in %s, using templates: %s", checkin.id, e)
        analysis = analyze_checkin(checkin.emotions, checkin.note)
        drafts = generate_from_templates(analysis, contacts, bucket)
        source = SOURCE_TEMPLATES

    rows = await run_in_threadpool(_persist, db, checkin.id, dedupe_by_title(drafts, limit))
    log.info("Stored %d suggestion(s) from %s for check-in %s", len(rows), source, checkin.id)
    return source, rows
