from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import Iterable, Optional
from moodhome.db.models import CheckIn
from moodhome.services.clock import now_ms
from moodhome.utils.time import human_timestamp


def normalize_emotions(emotions: Iterable[str]) -> list[str]:
    """Drop blanks and repeats, keeping first occurrence order (a check-in holds a set of labels)."""
    seen: dict[str, None] = {}
    for e in emotions:
        label = e.strip() if isinstance(e, str) else ""
        if label:
            seen.setdefault(label, None)
    return list(seen)


def _clean_note(note: Optional[str]) -> Optional[str]:
    if note is None or not note.strip():
        return None
    return note


def create_checkin(db: Session, emotions: Iterable[str], note: Optional[str] = None) -> CheckIn:
    ci = CheckIn(
        emotions=normalize_emotions(emotions),
        note=_clean_note(note),
        timestamp=human_timestamp(),
        created_at=now_ms(),
    )
    db.add(ci); db.commit(); db.refresh(ci)
    return ci


def get_checkin(db: Session, checkin_id: str) -> CheckIn | None:
    return db.get(CheckIn, checkin_id)


def update_checkin(db: Session, ci: CheckIn, emotions: Iterable[str], note: Optional[str]) -> CheckIn:
    # created_at is the ordering key and stays fixed; only the display stamp moves
    ci.emotions = normalize_emotions(emotions)
    ci.note = _clean_note(note)
    ci.timestamp = human_timestamp()
    db.commit(); db.refresh(ci)
    return ci


def delete_checkin(db: Session, checkin_id: str) -> bool:
    ci = db.get(CheckIn, checkin_id)
    if ci is None:
        return False
    db.delete(ci); db.commit()
    return True


def list_checkins(db: Session, limit: int | None = None) -> list[CheckIn]:
    stmt = select(CheckIn).order_by(CheckIn.created_at.desc())
    if limit:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars())


def get_recent_checkins(db: Session, limit: int = 100) -> list[CheckIn]:
    stmt = select(CheckIn).order_by(CheckIn.created_at.desc()).limit(limit)
    return list(db.execute(stmt).scalars())


def get_checkins_between(db: Session, start_ms: int, end_ms: int) -> list[CheckIn]:
    stmt = (
        select(CheckIn)
        .where(CheckIn.created_at >= start_ms, CheckIn.created_at <= end_ms)
        .order_by(CheckIn.created_at.desc())
    )
    return list(db.execute(stmt).scalars())


def count_checkins(db: Session) -> int:
    return db.execute(select(func.count()).select_from(CheckIn)).scalar_one()


def latest_created_at(db: Session) -> int | None:
    return db.execute(select(func.max(CheckIn.created_at))).scalar_one_or_none()
