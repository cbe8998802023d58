# HORECA/backend/horeca/services/survey_service.py : per-cafe brand sales surveys

import logging
from datetime import datetime
from typing import Dict, List

from sqlalchemy.orm import Session

from horeca.constants import EVENT_DATA_UPDATED
from horeca.models import models
from horeca.services import events
from horeca.services.cafe_service import CafeService
from horeca.services.retry import run_with_retry

logger = logging.getLogger(__name__)

class SurveyService:
    def __init__(self, db: Session, user: models.User):
        self.db = db
        self.cafes = CafeService(db, user)

    def _survey_for(self, cafe_id: str):
        return self.db.query(models.CafeSurvey).filter(
            models.CafeSurvey.cafe_id == cafe_id
        ).order_by(models.CafeSurvey.created_at).first()

    def get_survey(self, cafe_id: str) -> models.CafeSurvey:
        self.cafes.get_cafe(cafe_id)
        survey = self._survey_for(cafe_id)
        if not survey:
            raise LookupError("No survey for this cafe")
        return survey

    def save_survey(self, cafe_id: str, brand_sales: List[Dict]) -> models.CafeSurvey:
        """Replace the brand sales of the cafe survey, creating the survey if needed"""
        self.cafes.get_cafe(cafe_id)

        brands = [sale["brand"] for sale in brand_sales]
        if len(brands) != len(set(brands)):
            raise ValueError("Each brand can only appear once per survey")

        def _save():
            survey = self._survey_for(cafe_id)
            if survey is None:
                survey = models.CafeSurvey(cafe_id=cafe_id)
                self.db.add(survey)
                self.db.flush()
            else:
                self.db.query(models.BrandSale).filter(
                    models.BrandSale.survey_id == survey.id
                ).delete(synchronize_session=False)
                survey.updated_at = datetime.utcnow()

            for sale in brand_sales:
                self.db.add(models.BrandSale(
                    survey_id=survey.id,
                    brand=sale["brand"],
                    packs_per_week=sale["packs_per_week"],
                ))
            return survey

        survey = run_with_retry(self.db, _save)
        self.db.refresh(survey)
        logger.info(f"✅ Survey saved for cafe {cafe_id} ({len(brand_sales)} brands)")
        events.publish_event(EVENT_DATA_UPDATED, {"cafe_id": cafe_id, "action": "surveyUpdate"})
        return survey

    def all_surveys(self) -> Dict[str, List[models.BrandSale]]:
        """cafe_id -> brand sales, for every cafe visible to the user that has some"""
        cafe_ids = [cafe.id for cafe in self.cafes.list_cafes()]
        if not cafe_ids:
            return {}

        surveys = self.db.query(models.CafeSurvey).filter(
            models.CafeSurvey.cafe_id.in_(cafe_ids)
        ).all()

        survey_map = {}
        for survey in surveys:
            if survey.brand_sales:
                survey_map[survey.cafe_id] = survey.brand_sales
        return survey_map
