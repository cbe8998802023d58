# HORECA/backend/horeca/routes/kpi.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from horeca.auth import get_current_user, get_admin_user
from horeca.constants import EVENT_KPI_UPDATED
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services import events
from horeca.services.kpi_service import KPIService

router = APIRouter(prefix="/kpi-settings", tags=["kpi"])

@router.get("/", response_model=schemas.KPISettingsSchema, response_model_by_alias=True)
def get_kpi_settings(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Current targets, thresholds and bonuses"""
    return KPIService(db).get_settings()

@router.put("/", response_model=schemas.KPISettingsSchema, response_model_by_alias=True)
def update_kpi_settings(
    changes: schemas.KPISettingsUpdate,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(get_admin_user)
):
    """Partial update; percentages are clamped to [0, 100]"""
    settings = KPIService(db).update_settings(changes.model_dump(exclude_unset=True))
    events.publish_event(EVENT_KPI_UPDATED, {"updated_by": admin.id})
    return settings
