from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from moodhome.db.models import (
    AutomationExecution,
    AutomationSuggestion,
    CompletionStatus,
    SuggestionStatus,
)
from moodhome.repositories.contact_repo import get_contact
from moodhome.services.clock import now_ms

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TransitionResult:
    suggestion: AutomationSuggestion
    changed: bool
    execution: Optional[AutomationExecution] = None


def _leave_active(db: Session, suggestion: AutomationSuggestion, **values) -> bool:
    """
    Compare-and-set on the stored row: only a suggestion that is still ACTIVE
    in the database moves. Returns False when another session got there first.
    """
    result = db.execute(
        update(AutomationSuggestion)
        .where(
            AutomationSuggestion.id == suggestion.id,
            AutomationSuggestion.status == SuggestionStatus.ACTIVE,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def _unchanged(db: Session, suggestion: AutomationSuggestion, verb: str) -> TransitionResult:
    # drop the no-op transaction and show the caller what is actually stored
    db.rollback()
    db.refresh(suggestion)
    log.info("%s ignored for %s in state %s", verb, suggestion.id, suggestion.status.value)
    return TransitionResult(suggestion=suggestion, changed=False)


def dismiss_suggestion(db: Session, suggestion: AutomationSuggestion) -> TransitionResult:
    """
    Active -> Dismissed. Dismissed and Executed are terminal; calling this on
    either is a no-op that reports ``changed=False``, even when this session
    still holds a stale ACTIVE copy.
    """
    if suggestion.status != SuggestionStatus.ACTIVE:
        log.info("Dismiss ignored for %s in state %s", suggestion.id, suggestion.status.value)
        return TransitionResult(suggestion=suggestion, changed=False)
    if not _leave_active(db, suggestion, status=SuggestionStatus.DISMISSED):
        return _unchanged(db, suggestion, "Dismiss")
    db.commit(); db.refresh(suggestion)
    return TransitionResult(suggestion=suggestion, changed=True)


def execute_suggestion(
    db: Session,
    suggestion: AutomationSuggestion,
    *,
    completion_status: CompletionStatus = CompletionStatus.COMPLETED,
    action_type: Optional[str] = None,
    was_helpful: Optional[bool] = None,
    user_feedback: Optional[str] = None,
) -> TransitionResult:
    """
    Active -> Executed, stamping ``executed_at`` and appending exactly one
    AutomationExecution in the same commit. Only the session whose
    conditional update wins writes the audit record; every other attempt,
    concurrent or repeated, changes nothing.

    When the chosen action calls a contact, that contact's last-contacted
    instant is updated too.
    """
    if suggestion.status != SuggestionStatus.ACTIVE:
        log.info("Execute ignored for %s in state %s", suggestion.id, suggestion.status.value)
        return TransitionResult(suggestion=suggestion, changed=False)

    at = now_ms()
    if not _leave_active(db, suggestion, status=SuggestionStatus.EXECUTED, executed_at=at):
        return _unchanged(db, suggestion, "Execute")

    execution = AutomationExecution(
        suggestion_id=suggestion.id,
        check_in_id=suggestion.check_in_id,
        executed_at=at,
        action_type=action_type,
        was_helpful=was_helpful,
        user_feedback=user_feedback,
        completion_status=completion_status,
    )
    db.add(execution)

    if action_type == "CALL_CONTACT":
        target = _call_target(suggestion)
        contact = get_contact(db, target) if target else None
        if contact is not None:
            contact.last_contacted_at = at

    db.commit()
    db.refresh(suggestion); db.refresh(execution)
    return TransitionResult(suggestion=suggestion, changed=True, execution=execution)


def _call_target(suggestion: AutomationSuggestion) -> Optional[str]:
    for action in suggestion.actions or []:
        if isinstance(action, dict) and action.get("type") == "CALL_CONTACT" and action.get("target_id"):
            return action["target_id"]
    return None
