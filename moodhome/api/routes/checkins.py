from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from moodhome.api.deps import get_db
from moodhome.repositories.checkin_repo import (
    count_checkins, create_checkin, delete_checkin, get_checkin, list_checkins, update_checkin,
)
from moodhome.schemas.checkin import CheckinCreate, CheckinList, CheckinOut, CheckinUpdate

router = APIRouter(prefix="/api/checkins", tags=["checkins"])

@router.post("", response_model=CheckinOut, status_code=201)
def create(payload: CheckinCreate, db: Session = Depends(get_db)):
    return create_checkin(db, payload.emotions, payload.note)

@router.get("", response_model=CheckinList)
def list_all(limit: int | None = Query(default=None, ge=1), db: Session = Depends(get_db)):
    return {"checkins": list_checkins(db, limit), "total": count_checkins(db)}

@router.get("/{checkin_id}", response_model=CheckinOut)
def get_one(checkin_id: str, db: Session = Depends(get_db)):
    ci = get_checkin(db, checkin_id)
    if not ci: raise HTTPException(status_code=404, detail="Check-in not found")
    return ci

@router.put("/{checkin_id}", response_model=CheckinOut)
def edit(checkin_id: str, payload: CheckinUpdate, db: Session = Depends(get_db)):
    ci = get_checkin(db, checkin_id)
    if not ci: raise HTTPException(status_code=404, detail="Check-in not found")
    return update_checkin(db, ci, payload.emotions, payload.note)

@router.delete("/{checkin_id}", status_code=204)
def remove(checkin_id: str, db: Session = Depends(get_db)):
    if not delete_checkin(db, checkin_id):
        raise HTTPException(status_code=404, detail="Check-in not found")
    return Response(status_code=204)
