# HORECA/backend/horeca/routes/salary.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from horeca.auth import get_current_user, get_admin_user, is_admin
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services.salary_service import SalaryService

router = APIRouter(prefix="/salary", tags=["salary"])

@router.get("/", response_model=schemas.SalaryBreakdown)
def get_global_salary(
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    """Breakdown computed over every cafe"""
    return SalaryService(db).calculate_salary()

@router.get("/me", response_model=schemas.SalaryBreakdown)
def get_my_salary(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return SalaryService(db).calculate_user_salary(current_user.id)

@router.get("/users/{user_id}", response_model=schemas.SalaryBreakdown)
def get_user_salary(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    if not is_admin(current_user) and current_user.id != user_id:
        raise HTTPException(status_code=403, detail="You can only see your own salary")
    user = db.query(db_models.User).filter(db_models.User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return SalaryService(db).calculate_user_salary(user_id)
