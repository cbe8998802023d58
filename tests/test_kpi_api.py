# HORECA/backend/tests/test_kpi_api.py : KPI settings, salary and dashboard endpoints

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

def create_user(role="user", name="Rep"):
    db = TestingSessionLocal()
    try:
        user = models.User(
            email=f"{uuid.uuid4().hex[:10]}@horeca.app",
            name=name,
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

def add_cafes(owner_id, *cafes):
    """cafes: (hookahs, status) pairs"""
    db = TestingSessionLocal()
    try:
        for i, (hookahs, status) in enumerate(cafes):
            db.add(models.Cafe(
                name=f"Cafe {i}", owner_name="Owner", owner_number="01001234567",
                number_of_hookahs=hookahs, number_of_tables=4, status=status,
                governorate="Giza", city="Haram", created_by=owner_id,
            ))
        db.commit()
    finally:
        db.close()

class TestKPISettings:
    def setup_method(self):
        app.dependency_overrides[get_db] = override_get_db
        Base.metadata.create_all(bind=engine)
        self.rep_id, self.headers = create_user()
        self.admin_id, self.admin_headers = create_user(role="admin")

    def teardown_method(self):
        Base.metadata.drop_all(bind=engine)

    def test_defaults_in_camel_case(self):
        response = client.get("/kpi-settings/", headers=self.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["totalPackage"] == 2000
        assert data["basicSalaryPercentage"] == 20
        assert data["targetVisitsSmall"] == 70
        assert data["bonusLargeCafe"] == 100

    def test_update_requires_admin(self):
        response = client.put("/kpi-settings/", json={"totalPackage": 5000}, headers=self.headers)
        assert response.status_code == 403

    def test_partial_update(self):
        response = client.put("/kpi-settings/", json={"totalPackage": 3000, "bonusSmallCafe": 60},
                              headers=self.admin_headers)
        assert response.status_code == 200
        assert response.json()["totalPackage"] == 3000

        data = client.get("/kpi-settings/", headers=self.headers).json()
        assert data["totalPackage"] == 3000
        assert data["bonusSmallCafe"] == 60
        assert data["visitKpiPercentage"] == 80

    def test_percentages_clamped(self):
        response = client.put("/kpi-settings/", json={
            "basicSalaryPercentage": 140,
            "contractThresholdPercentage": -5,
        }, headers=self.admin_headers)
        assert response.status_code == 200
        assert response.json()["basicSalaryPercentage"] == 100
        assert response.json()["contractThresholdPercentage"] == 0

    def test_full_camel_case_round_trip(self):
        settings = {
            "totalPackage": 3500,
            "basicSalaryPercentage": 25,
            "visitKpiPercentage": 60,
            "visitThresholdPercentage": 75,
            "targetVisitsLarge": 12,
            "targetVisitsMedium": 24,
            "targetVisitsSmall": 36,
            "contractThresholdPercentage": 55,
            "targetContractsLarge": 4,
            "targetContractsMedium": 8,
            "targetContractsSmall": 16,
            "bonusLargeCafe": 150,
            "bonusMediumCafe": 90,
            "bonusSmallCafe": 45,
        }
        response = client.put("/kpi-settings/", json=settings, headers=self.admin_headers)
        assert response.status_code == 200
        assert response.json() == settings

        assert client.get("/kpi-settings/", headers=self.headers).json() == settings

    def test_negative_target_rejected(self):
        response = client.put("/kpi-settings/", json={"targetVisitsLarge": -1}, headers=self.admin_headers)
        assert response.status_code == 422

class TestSalary:
    def setup_method(self):
        app.dependency_overrides[get_db] = override_get_db
        Base.metadata.create_all(bind=engine)
        self.rep_id, self.headers = create_user(name="Rep One")
        self.other_id, self.other_headers = create_user(name="Rep Two")
        self.admin_id, self.admin_headers = create_user(role="admin", name="Boss")
        add_cafes(self.rep_id, (2, "Contracted"), (5, "Visited"), (9, "Contracted"))
        add_cafes(self.other_id, (0, "Visited"))

    def teardown_method(self):
        Base.metadata.drop_all(bind=engine)

    def test_my_salary(self):
        response = client.get("/salary/me", headers=self.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["basic_salary"] == 400
        assert data["bonus_amount"] == 150  # small 50 + large 100
        assert data["visit_counts"] == {"small": 1, "medium": 1, "large": 1, "total": 3}
        assert data["contract_status"]["achieved"] == 2
        assert data["contract_status"]["threshold_value"] == 27
        assert data["total_salary"] == 550

    def test_salary_follows_kpi_settings(self):
        client.put("/kpi-settings/", json={"bonusLargeCafe": 200}, headers=self.admin_headers)
        data = client.get("/salary/me", headers=self.headers).json()
        assert data["bonus_amount"] == 250

    def test_other_users_salary(self):
        response = client.get(f"/salary/users/{self.other_id}", headers=self.headers)
        assert response.status_code == 403

        response = client.get(f"/salary/users/{self.other_id}", headers=self.admin_headers)
        assert response.status_code == 200
        # A cafe in negotiation is not counted
        assert response.json()["visit_counts"]["total"] == 0

        response = client.get(f"/salary/users/{uuid.uuid4()}", headers=self.admin_headers)
        assert response.status_code == 404

    def test_global_salary_admin_only(self):
        assert client.get("/salary/", headers=self.headers).status_code == 403

        response = client.get("/salary/", headers=self.admin_headers)
        assert response.status_code == 200
        assert response.json()["contract_counts"]["total"] == 2

    def test_dashboard(self):
        assert client.get("/dashboard/", headers=self.headers).status_code == 403

        response = client.get("/dashboard/", headers=self.admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_cafes"] == 4
        assert data["total_users"] == 3
        assert data["cafes_by_status"] == {"Pending": 0, "Visited": 2, "Contracted": 2}
        assert data["cafes_by_size"] == {"In Negotiation": 1, "Small": 1, "Medium": 1, "Large": 1}

        best = data["user_performance"][0]
        assert best["user_id"] == self.rep_id
        assert best["visits"] == 3
        assert best["contracts"] == 2
