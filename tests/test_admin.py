# HORECA/backend/tests/test_admin.py : user management by admins

import uuid

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from horeca.main import app
from horeca.auth import hash_password, create_access_token
from horeca.database import Base, get_db
from horeca.models import models

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

class TestAdminUsers:
    def setup_method(self):
        app.dependency_overrides[get_db] = override_get_db
        Base.metadata.create_all(bind=engine)

        db = TestingSessionLocal()
        try:
            admin = models.User(
                email="boss@horeca.app",
                name="Boss",
                role="admin",
                password_hash=hash_password("Admin1234")
            )
            db.add(admin)
            db.commit()
            self.admin_id = admin.id
        finally:
            db.close()
        token = create_access_token({"sub": self.admin_id, "role": "admin"})
        self.headers = {"Authorization": f"Bearer {token}"}

    def teardown_method(self):
        Base.metadata.drop_all(bind=engine)

    def _create(self, **overrides):
        payload = {
            "email": f"rep_{uuid.uuid4().hex[:8]}@horeca.app",
            "password": "Secret123",
            "name": "New Rep",
            "role": "user",
        }
        payload.update(overrides)
        return client.post("/admin/users/", json=payload, headers=self.headers)

    def test_create_user(self):
        response = self._create(email="karim")
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "karim@horeca.app"
        assert data["role"] == "user"
        assert "password_hash" not in data

        # The new account can log in
        login = client.post("/auth/login", json={"email": "karim", "password": "Secret123"})
        assert login.status_code == 200

    def test_create_user_weak_password(self):
        response = self._create(password="short")
        assert response.status_code == 400
        assert "at least 8 characters" in response.json()["detail"]

        response = self._create(password="alllowercase1")
        assert response.status_code == 400
        assert "uppercase" in response.json()["detail"]

    def test_create_user_duplicate_email(self):
        assert self._create(email="dup@horeca.app").status_code == 201
        response = self._create(email="DUP@horeca.app")
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already in use"

    def test_create_user_invalid_role(self):
        response = self._create(role="superuser")
        assert response.status_code == 422

    def test_list_users(self):
        self._create()
        response = client.get("/admin/users/", headers=self.headers)
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_update_user(self):
        user_id = self._create().json()["id"]
        response = client.put(f"/admin/users/{user_id}", json={"name": "Promoted", "role": "admin"},
                              headers=self.headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Promoted"
        assert response.json()["role"] == "admin"

    def test_update_user_password(self):
        created = self._create(email="pw@horeca.app").json()
        response = client.put(f"/admin/users/{created['id']}", json={"password": "Changed123"},
                              headers=self.headers)
        assert response.status_code == 200

        login = client.post("/auth/login", json={"email": "pw@horeca.app", "password": "Changed123"})
        assert login.status_code == 200

    def test_update_unknown_user(self):
        response = client.put(f"/admin/users/{uuid.uuid4()}", json={"name": "Nobody"}, headers=self.headers)
        assert response.status_code == 404

    def test_delete_user_keeps_cafes(self):
        user_id = self._create().json()["id"]
        db = TestingSessionLocal()
        try:
            db.add(models.Cafe(
                name="Orphan", owner_name="Owner", owner_number="01001234567",
                number_of_hookahs=2, number_of_tables=3,
                governorate="Cairo", city="Shubra", created_by=user_id,
            ))
            db.commit()
        finally:
            db.close()

        response = client.delete(f"/admin/users/{user_id}", headers=self.headers)
        assert response.status_code == 200

        cafes = client.get("/cafes/", headers=self.headers).json()
        assert [c["created_by"] for c in cafes] == [user_id]

    def test_cannot_delete_self(self):
        response = client.delete(f"/admin/users/{self.admin_id}", headers=self.headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot delete your own account"
