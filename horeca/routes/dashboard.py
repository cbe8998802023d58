# HORECA/backend/horeca/routes/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from horeca.database import get_db
from horeca.auth import get_admin_user
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/", response_model=schemas.DashboardSummary)
def dashboard_summary(
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    """Admin overview: cafes per status and size, performance of every rep"""
    return DashboardService(db).get_summary()
