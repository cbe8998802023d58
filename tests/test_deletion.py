# HORECA/backend/tests/test_deletion.py : cascading cafe deletion and deletion logs

import uuid

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from horeca.main import app
from horeca.auth import hash_password, create_access_token
from horeca.database import Base, get_db
from horeca.models import models
from horeca.services import deletion_service

# Test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

client = TestClient(app)

def create_user(role="user"):
    db = TestingSessionLocal()
    try:
        user = models.User(
            email=f"{uuid.uuid4().hex[:10]}@horeca.app",
            name="Deleter",
            role=role,
            password_hash=hash_password("Test1234")
        )
        db.add(user)
        db.commit()
        user_id = user.id
    finally:
        db.close()
    token = create_access_token({"sub": user_id, "role": role})
    return user_id, {"Authorization": f"Bearer {token}"}

class TestCafeDeletion:
    def setup_method(self):
        app.dependency_overrides[get_db] = override_get_db
        Base.metadata.create_all(bind=engine)
        self.rep_id, self.headers = create_user()
        self.other_id, self.other_headers = create_user()
        self.admin_id, self.admin_headers = create_user(role="admin")

        response = client.post("/cafes/", json={
            "name": "Cafe Delta",
            "owner_name": "Mona",
            "owner_number": "01001234567",
            "number_of_hookahs": 3,
            "number_of_tables": 6,
            "governorate": "Alexandria",
            "city": "Smouha",
        }, headers=self.headers)
        assert response.status_code == 201
        self.cafe_id = response.json()["id"]
        client.put(f"/cafes/{self.cafe_id}/survey", json={"brand_sales": [
            {"brand": "Adalya", "packs_per_week": 4},
        ]}, headers=self.headers)

    def teardown_method(self):
        deletion_service._pending_deletions.clear()
        Base.metadata.drop_all(bind=engine)

    def test_delete_cascades_and_logs(self):
        response = client.delete(f"/cafes/{self.cafe_id}", headers=self.headers)
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Cafe and related data deleted successfully",
            "logged": True,
        }

        assert client.get(f"/cafes/{self.cafe_id}", headers=self.headers).status_code == 404

        db = TestingSessionLocal()
        try:
            assert db.query(models.CafeSurvey).count() == 0
            assert db.query(models.BrandSale).count() == 0
            log = db.query(models.DeletionLog).one()
            assert log.entity_type == "cafe"
            assert log.entity_id == self.cafe_id
            assert log.deleted_by == self.rep_id
            assert log.entity_data["name"] == "Cafe Delta"
        finally:
            db.close()

    def test_deleted_cafe_snapshot(self):
        client.delete(f"/cafes/{self.cafe_id}", headers=self.headers)
        response = client.get(f"/deletion-logs/cafes/{self.cafe_id}", headers=self.headers)
        assert response.status_code == 200
        assert response.json()["owner_name"] == "Mona"

    def test_deleted_cafe_snapshot_not_found(self):
        response = client.get(f"/deletion-logs/cafes/{uuid.uuid4()}", headers=self.headers)
        assert response.status_code == 404

    def test_delete_by_other_user_forbidden(self):
        response = client.delete(f"/cafes/{self.cafe_id}", headers=self.other_headers)
        assert response.status_code == 403

    def test_admin_can_delete_any_cafe(self):
        response = client.delete(f"/cafes/{self.cafe_id}", headers=self.admin_headers)
        assert response.status_code == 200
        logs = client.get("/deletion-logs/", headers=self.admin_headers).json()
        assert logs[0]["deleted_by"] == self.admin_id

    def test_delete_unknown_cafe(self):
        response = client.delete(f"/cafes/{uuid.uuid4()}", headers=self.headers)
        assert response.status_code == 404

    def test_delete_already_in_progress(self):
        deletion_service._pending_deletions.add(self.cafe_id)
        response = client.delete(f"/cafes/{self.cafe_id}", headers=self.headers)
        assert response.status_code == 409
        # Nothing removed
        assert client.get(f"/cafes/{self.cafe_id}", headers=self.headers).status_code == 200

class TestDeletionLogs:
    def setup_method(self):
        app.dependency_overrides[get_db] = override_get_db
        Base.metadata.create_all(bind=engine)
        self.rep_id, self.headers = create_user()
        self.other_id, self.other_headers = create_user()
        self.admin_id, self.admin_headers = create_user(role="admin")

    def teardown_method(self):
        Base.metadata.drop_all(bind=engine)

    def test_log_only(self):
        response = client.post("/deletion-logs/", json={
            "entity_type": "survey",
            "entity_id": "abc"
        }, headers=self.headers)
        assert response.status_code == 201
        assert response.json()["success"] is True

        logs = client.get("/deletion-logs/", headers=self.headers).json()
        assert len(logs) == 1
        assert logs[0]["entity_data"] == {"id": "abc"}
        assert logs[0]["deleted_by"] == self.rep_id

    def test_users_only_see_their_own_logs(self):
        client.post("/deletion-logs/", json={"entity_type": "cafe", "entity_id": "1"}, headers=self.headers)
        client.post("/deletion-logs/", json={"entity_type": "cafe", "entity_id": "2"}, headers=self.other_headers)

        mine = client.get("/deletion-logs/", headers=self.headers).json()
        assert [log["entity_id"] for log in mine] == ["1"]

        response = client.get("/deletion-logs/", params={"user_id": self.other_id}, headers=self.headers)
        assert response.status_code == 403

        everything = client.get("/deletion-logs/", headers=self.admin_headers).json()
        assert len(everything) == 2

    def test_filter_by_entity_type(self):
        client.post("/deletion-logs/", json={"entity_type": "cafe", "entity_id": "1"}, headers=self.admin_headers)
        client.post("/deletion-logs/", json={"entity_type": "survey", "entity_id": "2"}, headers=self.admin_headers)

        logs = client.get("/deletion-logs/", params={"entity_type": "survey"}, headers=self.admin_headers).json()
        assert [log["entity_id"] for log in logs] == ["2"]
