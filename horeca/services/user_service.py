# HORECA/backend/horeca/services/user_service.py : admin user management

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from horeca.auth import hash_password, normalize_email
from horeca.constants import ROLES, EVENT_USER_UPDATED
from horeca.models import models
from horeca.services import events
from horeca.services.retry import run_with_retry
from horeca.services.validation import sanitize_input, validate_email, validate_password

logger = logging.getLogger(__name__)

class UserService:
    """Create, update, list and delete accounts on behalf of an admin"""

    def __init__(self, db: Session, admin: models.User):
        self.db = db
        self.admin = admin

    def _get(self, user_id: str) -> models.User:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            raise LookupError("User not found")
        return user

    def _check_email(self, email: str, exclude_id: str = None) -> str:
        email = normalize_email(email)
        if not validate_email(email):
            raise ValueError("Invalid email address")
        query = self.db.query(models.User).filter(models.User.email == email)
        if exclude_id:
            query = query.filter(models.User.id != exclude_id)
        if query.first():
            raise ValueError("Email already in use")
        return email

    def _check_password(self, password: str):
        is_valid, errors = validate_password(password)
        if not is_valid:
            raise ValueError("; ".join(errors))

    def _check_name(self, name: str) -> str:
        name = sanitize_input(name)
        if not 2 <= len(name) <= 100:
            raise ValueError("Name must be between 2 and 100 characters")
        return name

    def list_users(self) -> List[models.User]:
        return self.db.query(models.User).order_by(models.User.created_at).all()

    def create_user(self, data: Dict[str, Any]) -> models.User:
        if data.get("role") not in ROLES:
            raise ValueError("Invalid role")
        email = self._check_email(data["email"])
        self._check_password(data["password"])
        user = models.User(
            email=email,
            name=self._check_name(data["name"]),
            role=data["role"],
            password_hash=hash_password(data["password"]),
        )

        def _save():
            self.db.add(user)
            return user

        run_with_retry(self.db, _save)
        self.db.refresh(user)
        logger.info(f"✅ User {user.email} created by {self.admin.email}")
        events.publish_event(EVENT_USER_UPDATED, {"user_id": user.id, "action": "create"})
        return user

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> models.User:
        user = self._get(user_id)
        updates = {}
        if changes.get("email"):
            updates["email"] = self._check_email(changes["email"], exclude_id=user.id)
        if changes.get("password"):
            self._check_password(changes["password"])
            updates["password_hash"] = hash_password(changes["password"])
        if changes.get("name"):
            updates["name"] = self._check_name(changes["name"])
        if changes.get("role"):
            if changes["role"] not in ROLES:
                raise ValueError("Invalid role")
            updates["role"] = changes["role"]

        def _save():
            for field, value in updates.items():
                setattr(user, field, value)
            return user

        run_with_retry(self.db, _save)
        self.db.refresh(user)
        logger.info(f"✅ User {user.email} updated ({', '.join(updates) or 'no changes'})")
        events.publish_event(EVENT_USER_UPDATED, {"user_id": user.id, "action": "update"})
        return user

    def delete_user(self, user_id: str):
        """Remove the account. Cafes created by the user are kept."""
        if user_id == self.admin.id:
            raise ValueError("You cannot delete your own account")
        user = self._get(user_id)

        def _save():
            self.db.delete(user)

        run_with_retry(self.db, _save)
        logger.info(f"🗑️ User {user_id} deleted by {self.admin.email}")
        events.publish_event(EVENT_USER_UPDATED, {"user_id": user_id, "action": "delete"})
