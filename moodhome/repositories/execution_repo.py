from sqlalchemy.orm import Session
from sqlalchemy import select
from moodhome.db.models import AutomationExecution

# append-only table: rows are written by services.lifecycle and never changed


def get_executions_for_suggestion(db: Session, suggestion_id: str) -> list[AutomationExecution]:
    q = (
        select(AutomationExecution)
        .where(AutomationExecution.suggestion_id == suggestion_id)
        .order_by(AutomationExecution.executed_at.asc())
    )
    return list(db.execute(q).scalars())


def get_recent_executions(db: Session, limit: int = 10) -> list[AutomationExecution]:
    q = select(AutomationExecution).order_by(AutomationExecution.executed_at.desc()).limit(limit)
    return list(db.execute(q).scalars())
