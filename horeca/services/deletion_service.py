# HORECA/backend/horeca/services/deletion_service.py : cascading cafe deletion with audit log

import logging
import threading
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from horeca.constants import ROLE_ADMIN, EVENT_CAFE_DELETED, EVENT_DATA_UPDATED
from horeca.models import models
from horeca.services import events
from horeca.services.cafe_service import CafeService

logger = logging.getLogger(__name__)

# Cafe ids with a deletion in flight in this process
_pending_deletions = set()
_pending_lock = threading.Lock()

class DeletionInProgress(Exception):
    """Another request is already deleting this cafe"""

class DeletionService:
    """
    Deletion of cafes and their surveys, with a deletion_logs row written
    before anything is removed so a trace survives a failed cascade.
    """

    def __init__(self, db: Session, user: models.User):
        self.db = db
        self.user = user
        self.is_admin = user.role == ROLE_ADMIN

    # ---------- Logs ----------

    def log_deletion(self, entity_type: str, entity_id: str, entity_data: Optional[Dict[str, Any]] = None) -> bool:
        """Insert an audit row, returns False when it could not be written"""
        if not entity_type or not entity_id:
            logger.error("❌ Missing parameters for deletion logging")
            return False
        try:
            self.db.add(models.DeletionLog(
                entity_type=entity_type,
                entity_id=entity_id,
                deleted_by=self.user.id,
                entity_data=entity_data or {"id": entity_id},
            ))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to log deletion of {entity_type} {entity_id}: {e}")
            return False
        logger.info(f"🗒️ Deletion logged - type: {entity_type}, id: {entity_id}, by: {self.user.id}")
        return True

    def get_logs(self, entity_type: Optional[str] = None, entity_id: Optional[str] = None,
                 user_id: Optional[str] = None) -> List[models.DeletionLog]:
        """Logs newest first. Regular users only ever see their own."""
        if not self.is_admin:
            if user_id and user_id != self.user.id:
                raise PermissionError("You can only read your own deletion logs")
            user_id = self.user.id

        query = self.db.query(models.DeletionLog)
        if entity_type:
            query = query.filter(models.DeletionLog.entity_type == entity_type)
        if entity_id:
            query = query.filter(models.DeletionLog.entity_id == entity_id)
        if user_id:
            query = query.filter(models.DeletionLog.deleted_by == user_id)
        return query.order_by(models.DeletionLog.deleted_at.desc()).all()

    def get_deleted_cafe(self, cafe_id: str) -> Dict[str, Any]:
        """Snapshot stored by the latest deletion of this cafe"""
        logs = self.get_logs(entity_type="cafe", entity_id=cafe_id)
        if not logs:
            raise LookupError("Cafe not found")
        return logs[0].entity_data

    # ---------- Cascade ----------

    def _delete_related_records(self, cafe_id: str):
        survey_ids = [row.id for row in self.db.query(models.CafeSurvey.id).filter(
            models.CafeSurvey.cafe_id == cafe_id
        ).all()]
        if survey_ids:
            logger.info(f"Found {len(survey_ids)} surveys to delete for cafe {cafe_id}")
            self.db.query(models.BrandSale).filter(
                models.BrandSale.survey_id.in_(survey_ids)
            ).delete(synchronize_session=False)
        self.db.query(models.CafeSurvey).filter(
            models.CafeSurvey.cafe_id == cafe_id
        ).delete(synchronize_session=False)

    def delete_cafe(self, cafe_id: str) -> Dict[str, Any]:
        """Log, then remove brand sales, surveys and the cafe itself"""
        # Permission and existence checks first
        cafe = CafeService(self.db, self.user).get_cafe(cafe_id)

        with _pending_lock:
            if cafe_id in _pending_deletions:
                raise DeletionInProgress("Deletion already in progress for this cafe")
            _pending_deletions.add(cafe_id)

        try:
            snapshot = cafe.to_snapshot()
            logged = self.log_deletion("cafe", cafe_id, snapshot)

            try:
                self._delete_related_records(cafe_id)
                self.db.flush()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Error deleting related records of cafe {cafe_id}: {e}")
                return {"success": False, "message": "Failed to delete related records", "logged": logged}

            try:
                self.db.query(models.Cafe).filter(models.Cafe.id == cafe_id).delete(synchronize_session=False)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Error deleting cafe {cafe_id}: {e}")
                return {"success": False, "message": "Failed to delete cafe", "logged": logged}
        finally:
            with _pending_lock:
                _pending_deletions.discard(cafe_id)

        logger.info(f"🗑️ Cafe {cafe_id} and related data deleted by {self.user.email}")
        events.publish_event(EVENT_CAFE_DELETED, {"cafe_id": cafe_id})
        events.publish_event(EVENT_DATA_UPDATED, {"cafe_id": cafe_id, "action": "delete"})
        return {"success": True, "message": "Cafe and related data deleted successfully", "logged": logged}
