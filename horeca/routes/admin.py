# HORECA/backend/horeca/routes/admin.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from horeca.auth import get_admin_user
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services.user_service import UserService

router = APIRouter(prefix="/admin/users", tags=["admin"])

@router.get("/", response_model=List[schemas.UserOut])
def list_users(
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    """All accounts, oldest first"""
    return UserService(db, admin).list_users()

@router.post("/", response_model=schemas.UserOut, status_code=201)
def create_user(
    user: schemas.UserCreate,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    try:
        return UserService(db, admin).create_user(user.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{user_id}", response_model=schemas.UserOut)
def update_user(
    user_id: str,
    changes: schemas.UserUpdate,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    try:
        return UserService(db, admin).update_user(user_id, changes.model_dump(exclude_unset=True))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    try:
        UserService(db, admin).delete_user(user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "User deleted successfully"}
