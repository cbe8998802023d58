# HORECA/backend/horeca/services/kpi_service.py : global KPI configuration

import logging
from datetime import datetime
from typing import Dict, Any

from sqlalchemy.orm import Session

from horeca.constants import DEFAULT_KPI_SETTINGS, KPI_PERCENTAGE_FIELDS
from horeca.models import models
from horeca.services.retry import run_with_retry

logger = logging.getLogger(__name__)

KPI_FIELDS = list(DEFAULT_KPI_SETTINGS.keys())

def clamp_percentage(value: float) -> float:
    return max(0, min(100, value))

class KPIService:
    """Reads and writes the single kpi_settings row"""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self):
        return self.db.query(models.KPISettings).order_by(models.KPISettings.created_at).first()

    def get_settings(self) -> Dict[str, Any]:
        """Current settings (snake_case), defaults when no row was saved yet"""
        row = self._get_row()
        if row is None:
            return dict(DEFAULT_KPI_SETTINGS)
        return {field: getattr(row, field) for field in KPI_FIELDS}

    def update_settings(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge `changes` over the current settings, clamp the percentages and
        save. The first save inserts the row, later ones update it.
        """
        updated = {**self.get_settings(), **{k: v for k, v in changes.items() if v is not None}}
        for field in KPI_PERCENTAGE_FIELDS:
            updated[field] = clamp_percentage(updated[field])

        def _save():
            row = self._get_row()
            if row is None:
                row = models.KPISettings(**updated)
                self.db.add(row)
                logger.info("✅ KPI settings created")
            else:
                for field, value in updated.items():
                    setattr(row, field, value)
                row.updated_at = datetime.utcnow()
                logger.info("✅ KPI settings updated")
            return row

        run_with_retry(self.db, _save)
        return self.get_settings()
