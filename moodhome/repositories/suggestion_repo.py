from sqlalchemy.orm import Session
from sqlalchemy import select, case
from moodhome.db.models import AutomationSuggestion, SuggestionStatus
from moodhome.services.ranking import PRIORITY_RANKS, DEFAULT_TOP_LIMIT

# SQL twin of ranking.priority_rank; unknown tags fall to 0
priority_rank_expr = case(PRIORITY_RANKS, value=AutomationSuggestion.priority, else_=0)

DISPLAY_ORDER = (
    priority_rank_expr.desc(),
    AutomationSuggestion.created_at.desc(),
    AutomationSuggestion.id.asc(),
)


def insert_suggestions(db: Session, suggestions: list[AutomationSuggestion]) -> list[AutomationSuggestion]:
    # one commit for the batch: either every suggestion lands or none does
    db.add_all(suggestions)
    db.commit()
    for s in suggestions:
        db.refresh(s)
    return suggestions


def get_suggestion(db: Session, suggestion_id: str) -> AutomationSuggestion | None:
    return db.get(AutomationSuggestion, suggestion_id)


def get_suggestions_for_checkin(db: Session, checkin_id: str) -> list[AutomationSuggestion]:
    q = (
        select(AutomationSuggestion)
        .where(
            AutomationSuggestion.check_in_id == checkin_id,
            AutomationSuggestion.status != SuggestionStatus.DISMISSED,
        )
        .order_by(*DISPLAY_ORDER)
    )
    return list(db.execute(q).scalars())


def get_active_suggestions(db: Session, limit: int | None = DEFAULT_TOP_LIMIT) -> list[AutomationSuggestion]:
    q = (
        select(AutomationSuggestion)
        .where(AutomationSuggestion.status == SuggestionStatus.ACTIVE)
        .order_by(*DISPLAY_ORDER)
    )
    if limit is not None:
        q = q.limit(limit)
    return list(db.execute(q).scalars())
