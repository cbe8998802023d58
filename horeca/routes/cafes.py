# HORECA/backend/horeca/routes/cafes.py

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from horeca.auth import get_current_user, is_admin
from horeca.constants import EXPORT_FILENAME
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services import events
from horeca.services.cafe_service import CafeService
from horeca.services.deletion_service import DeletionService, DeletionInProgress
from horeca.services.export_service import create_cafes_workbook, user_names_by_id

router = APIRouter(prefix="/cafes", tags=["cafes"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.get("/", response_model=List[schemas.CafeOut])
def list_cafes(
    status: Optional[schemas.CafeStatus] = None,
    created_by: Optional[str] = None,
    search: Optional[str] = Query(None, description="Name, city or owner"),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Cafes visible to the user: all of them for an admin, their own otherwise"""
    try:
        return CafeService(db, current_user).list_cafes(status, created_by, search)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.post("/", response_model=schemas.CafeOut, status_code=201)
def create_cafe(
    cafe: schemas.CafeCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return CafeService(db, current_user).create_cafe(cafe.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.get("/export")
def export_cafes(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Excel workbook of the visible cafes"""
    cafes = CafeService(db, current_user).list_cafes()
    content = create_cafes_workbook(cafes, user_names_by_id(db))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )

@router.post("/export/jobs", response_model=schemas.TaskQueued, status_code=202)
def queue_export(current_user: db_models.User = Depends(get_current_user)):
    """Build the export in the background worker"""
    try:
        task_id = events.enqueue_task("export_cafes", {"user_id": current_user.id})
    except events.QueueUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"task_id": task_id, "status": "queued"}

@router.get("/export/jobs/{task_id}")
def get_export_job(task_id: str, current_user: db_models.User = Depends(get_current_user)):
    try:
        result = events.get_task_result(task_id)
    except events.QueueUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if result is None:
        return {"task_id": task_id, "status": "pending"}
    # Jobs of other users are reported as not found
    if not is_admin(current_user) and result.get("user_id") != current_user.id:
        raise HTTPException(status_code=404, detail="Export job not found")
    return {"task_id": task_id, **result}

@router.get("/{cafe_id}", response_model=schemas.CafeOut)
def get_cafe(
    cafe_id: str,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return CafeService(db, current_user).get_cafe(cafe_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.put("/{cafe_id}", response_model=schemas.CafeOut)
def update_cafe(
    cafe_id: str,
    changes: schemas.CafeUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Partial edit, admin or creator only"""
    try:
        return CafeService(db, current_user).update_cafe(cafe_id, changes.model_dump(exclude_unset=True))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.patch("/{cafe_id}/status", response_model=schemas.CafeOut)
def update_cafe_status(
    cafe_id: str,
    body: schemas.CafeStatusUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return CafeService(db, current_user).update_status(cafe_id, body.status)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.delete("/{cafe_id}", response_model=schemas.DeletionResult)
def delete_cafe(
    cafe_id: str,
    response: Response,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Delete the cafe with its surveys, keeping a snapshot in deletion_logs"""
    try:
        result = DeletionService(db, current_user).delete_cafe(cafe_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except DeletionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not result["success"]:
        response.status_code = 500
    return result
