from sqlalchemy.orm import Session
from sqlalchemy import select
from moodhome.db.models import Contact
from moodhome.services.clock import now_ms

EDITABLE_FIELDS = ("name", "phone_number", "relationship", "is_frequent")


def create_contact(db: Session, name: str, phone_number: str, relationship: str, is_frequent: bool = False) -> Contact:
    c = Contact(
        name=name,
        phone_number=phone_number,
        relationship=relationship,
        is_frequent=is_frequent,
        added_at=now_ms(),
    )
    db.add(c); db.commit(); db.refresh(c)
    return c


def get_contact(db: Session, contact_id: str) -> Contact | None:
    return db.get(Contact, contact_id)


def update_contact(db: Session, c: Contact, changes: dict) -> Contact:
    for key, value in changes.items():
        if key in EDITABLE_FIELDS:
            setattr(c, key, value)
    db.commit(); db.refresh(c)
    return c


def delete_contact(db: Session, contact_id: str) -> bool:
    c = db.get(Contact, contact_id)
    if c is None:
        return False
    db.delete(c); db.commit()
    return True


def list_contacts(db: Session) -> list[Contact]:
    return list(db.execute(select(Contact).order_by(Contact.name.asc())).scalars())


def get_frequent_contacts(db: Session, limit: int | None = None) -> list[Contact]:
    stmt = (
        select(Contact)
        .where(Contact.is_frequent.is_(True))
        .order_by(Contact.last_contacted_at.desc().nulls_last(), Contact.name.asc())
    )
    if limit:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars())


def mark_contacted(db: Session, c: Contact, when: int | None = None) -> Contact:
    c.last_contacted_at = when if when is not None else now_ms()
    db.commit(); db.refresh(c)
    return c
