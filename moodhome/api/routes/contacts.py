from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from moodhome.api.deps import get_db
from moodhome.repositories.contact_repo import (
    create_contact, delete_contact, get_contact, get_frequent_contacts, list_contacts, mark_contacted, update_contact,
)
from moodhome.schemas.contact import ContactCreate, ContactOut, ContactUpdate

router = APIRouter(prefix="/api/contacts", tags=["contacts"])

@router.post("", response_model=ContactOut, status_code=201)
def create(payload: ContactCreate, db: Session = Depends(get_db)):
    return create_contact(db, payload.name, payload.phone_number, payload.relationship, payload.is_frequent)

@router.get("", response_model=list[ContactOut])
def list_all(db: Session = Depends(get_db)):
    return list_contacts(db)

# declared before /{contact_id} so "frequent" is not read as an id
@router.get("/frequent", response_model=list[ContactOut])
def frequent(limit: int | None = Query(default=None, ge=1), db: Session = Depends(get_db)):
    return get_frequent_contacts(db, limit)

@router.get("/{contact_id}", response_model=ContactOut)
def get_one(contact_id: str, db: Session = Depends(get_db)):
    c = get_contact(db, contact_id)
    if not c: raise HTTPException(status_code=404, detail="Contact not found")
    return c

@router.patch("/{contact_id}", response_model=ContactOut)
def edit(contact_id: str, payload: ContactUpdate, db: Session = Depends(get_db)):
    c = get_contact(db, contact_id)
    if not c: raise HTTPException(status_code=404, detail="Contact not found")
    return update_contact(db, c, payload.model_dump(exclude_unset=True, exclude_none=True))

@router.post("/{contact_id}/contacted", response_model=ContactOut)
def contacted(contact_id: str, db: Session = Depends(get_db)):
    c = get_contact(db, contact_id)
    if not c: raise HTTPException(status_code=404, detail="Contact not found")
    return mark_contacted(db, c)

@router.delete("/{contact_id}", status_code=204)
def remove(contact_id: str, db: Session = Depends(get_db)):
    if not delete_contact(db, contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")
    return Response(status_code=204)
