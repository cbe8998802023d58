# HORECA/backend/horeca/routes/deletion_logs.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from horeca.auth import get_current_user
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services.deletion_service import DeletionService

router = APIRouter(prefix="/deletion-logs", tags=["deletion-logs"])

@router.get("/", response_model=List[schemas.DeletionLogOut])
def get_deletion_logs(
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Audit rows, newest first"""
    try:
        return DeletionService(db, current_user).get_logs(entity_type, entity_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.post("/", status_code=201)
def log_deletion(
    entry: schemas.DeletionLogCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Record a deletion performed elsewhere"""
    logged = DeletionService(db, current_user).log_deletion(entry.entity_type, entry.entity_id, entry.entity_data)
    if not logged:
        raise HTTPException(status_code=500, detail="Failed to log deletion")
    return {"success": True, "message": "Deletion logged successfully"}

@router.get("/cafes/{cafe_id}", response_model=Dict[str, Any])
def get_deleted_cafe(
    cafe_id: str,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Snapshot of a deleted cafe"""
    try:
        return DeletionService(db, current_user).get_deleted_cafe(cafe_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
