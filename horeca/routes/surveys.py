# HORECA/backend/horeca/routes/surveys.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Dict, List
from horeca.auth import get_current_user
from horeca.database import get_db
from horeca.models import models as db_models
from horeca.schemas import schemas
from horeca.services.survey_service import SurveyService

router = APIRouter(tags=["surveys"])

@router.get("/cafes/{cafe_id}/survey", response_model=schemas.SurveyOut)
def get_cafe_survey(
    cafe_id: str,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return SurveyService(db, current_user).get_survey(cafe_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.put("/cafes/{cafe_id}/survey", response_model=schemas.SurveyOut)
def save_cafe_survey(
    cafe_id: str,
    survey: schemas.SurveyIn,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Replace the weekly pack sales recorded for the cafe"""
    try:
        brand_sales = [sale.model_dump() for sale in survey.brand_sales]
        return SurveyService(db, current_user).save_survey(cafe_id, brand_sales)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.get("/surveys", response_model=Dict[str, List[schemas.BrandSaleOut]])
def get_all_surveys(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Brand sales of every visible cafe, keyed by cafe id"""
    return SurveyService(db, current_user).all_surveys()
