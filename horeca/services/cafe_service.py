# HORECA/backend/horeca/services/cafe_service.py : cafe CRUD with access rules

import logging
from typing import Dict, Any, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from horeca.constants import (
    ROLE_ADMIN, STATUS_CONTRACTED, MAX_COUNT_VALUE,
    EVENT_CAFE_ADDED, EVENT_CAFE_UPDATED, EVENT_DATA_UPDATED,
)
from horeca.models import models
from horeca.services import events
from horeca.services.cafe_utils import can_update_cafe_status
from horeca.services.retry import run_with_retry
from horeca.services.validation import (
    sanitize_input, validate_cafe_name, validate_owner_name,
    validate_phone_number, validate_number,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ["name", "owner_name", "owner_number", "governorate", "city", "photo_url"]

# Columns that cannot be cleared by an edit
REQUIRED_FIELDS = [
    "name", "owner_name", "owner_number", "number_of_hookahs",
    "number_of_tables", "status", "governorate", "city",
]

class CafeService:
    """Cafe operations for one authenticated user"""

    def __init__(self, db: Session, user: models.User):
        self.db = db
        self.user = user
        self.is_admin = user.role == ROLE_ADMIN

    # ---------- Access ----------

    def _visible_query(self):
        query = self.db.query(models.Cafe)
        if not self.is_admin:
            query = query.filter(models.Cafe.created_by == self.user.id)
        return query

    def get_cafe(self, cafe_id: str) -> models.Cafe:
        cafe = self.db.query(models.Cafe).filter(models.Cafe.id == cafe_id).first()
        if not cafe:
            raise LookupError("Cafe not found")
        if not self.can_edit(cafe):
            raise PermissionError("You do not have access to this cafe")
        return cafe

    def can_edit(self, cafe: models.Cafe) -> bool:
        return self.is_admin or cafe.created_by == self.user.id

    # ---------- Validation ----------

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize text fields and check the business rules, raise ValueError"""
        cleaned = dict(data)
        for field in REQUIRED_FIELDS:
            if field in cleaned and cleaned[field] is None:
                raise ValueError(f"{field} cannot be empty")
        for field in TEXT_FIELDS:
            if cleaned.get(field) is not None:
                cleaned[field] = sanitize_input(cleaned[field])

        if "name" in cleaned and not validate_cafe_name(cleaned["name"]):
            raise ValueError("Cafe name must be between 2 and 100 characters")
        if "owner_name" in cleaned and not validate_owner_name(cleaned["owner_name"]):
            raise ValueError("Owner name must be between 2 and 50 characters")
        if "owner_number" in cleaned and not validate_phone_number(cleaned["owner_number"]):
            raise ValueError("Invalid owner phone number")
        for field in ("number_of_hookahs", "number_of_tables"):
            if field in cleaned and not validate_number(cleaned[field], 0, MAX_COUNT_VALUE):
                raise ValueError(f"{field} must be between 0 and {MAX_COUNT_VALUE}")
        for field in ("governorate", "city"):
            if field in cleaned and not cleaned[field]:
                raise ValueError(f"{field} is required")
        return cleaned

    # ---------- Queries ----------

    def list_cafes(self, status: Optional[str] = None, created_by: Optional[str] = None,
                   search: Optional[str] = None) -> List[models.Cafe]:
        query = self._visible_query()
        if status:
            query = query.filter(models.Cafe.status == status)
        if created_by:
            if not self.is_admin and created_by != self.user.id:
                raise PermissionError("Only admins can list cafes of other users")
            query = query.filter(models.Cafe.created_by == created_by)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                models.Cafe.name.ilike(pattern),
                models.Cafe.city.ilike(pattern),
                models.Cafe.owner_name.ilike(pattern),
            ))
        return query.order_by(models.Cafe.created_at.desc()).all()

    # ---------- Mutations ----------

    def create_cafe(self, data: Dict[str, Any]) -> models.Cafe:
        cleaned = self._clean(data)
        if cleaned.get("number_of_hookahs", 0) == 0 and cleaned.get("status") == STATUS_CONTRACTED:
            raise ValueError("Cannot mark a cafe in negotiation (0 hookahs) as Contracted")

        cafe = models.Cafe(**cleaned, created_by=self.user.id)

        def _save():
            self.db.add(cafe)
            return cafe

        run_with_retry(self.db, _save)
        self.db.refresh(cafe)
        logger.info(f"✅ Cafe '{cafe.name}' added by {self.user.email}")
        events.publish_event(EVENT_CAFE_ADDED, {"cafe_id": cafe.id})
        return cafe

    def update_cafe(self, cafe_id: str, changes: Dict[str, Any]) -> models.Cafe:
        cafe = self.get_cafe(cafe_id)
        cleaned = self._clean(changes)

        hookahs = cleaned.get("number_of_hookahs", cafe.number_of_hookahs)
        status = cleaned.get("status", cafe.status)
        if hookahs == 0 and status == STATUS_CONTRACTED:
            raise ValueError("Cannot mark a cafe in negotiation (0 hookahs) as Contracted")

        def _save():
            for field, value in cleaned.items():
                setattr(cafe, field, value)
            return cafe

        run_with_retry(self.db, _save)
        self.db.refresh(cafe)
        events.publish_event(EVENT_CAFE_UPDATED, {"cafe_id": cafe.id})
        events.publish_event(EVENT_DATA_UPDATED, {"cafe_id": cafe.id})
        return cafe

    def update_status(self, cafe_id: str, new_status: str) -> models.Cafe:
        cafe = self.get_cafe(cafe_id)
        if not can_update_cafe_status(cafe, new_status):
            raise ValueError("Cannot mark a cafe in negotiation (0 hookahs) as Contracted")

        def _save():
            cafe.status = new_status
            return cafe

        run_with_retry(self.db, _save)
        self.db.refresh(cafe)
        logger.info(f"✅ Cafe {cafe.id} status updated to {new_status}")
        events.publish_event(EVENT_CAFE_UPDATED, {"cafe_id": cafe.id, "action": "statusUpdate", "status": new_status})
        return cafe
