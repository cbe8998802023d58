# HORECA/backend/scripts/seed_data.py : first admin and demo data

#!/usr/bin/env python
"""Create the first admin account, a demo sales rep with cafes, and the KPI row"""

import random
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from horeca.auth import hash_password
from horeca.config import ADMIN_CONFIG
from horeca.constants import DEFAULT_KPI_SETTINGS, STATUS_CONTRACTED, STATUS_PENDING, STATUS_VISITED, TOBACCO_BRANDS
from horeca.database import SessionLocal, create_tables
from horeca.models import models

CITIES = [("Cairo", "Nasr City"), ("Cairo", "Heliopolis"), ("Giza", "Dokki"), ("Alexandria", "Smouha")]

def generate_test_data():
    """Seed data for demos"""
    create_tables()
    db = SessionLocal()
    try:
        admin = db.query(models.User).filter(models.User.email == ADMIN_CONFIG["email"]).first()
        if not admin:
            admin = models.User(
                email=ADMIN_CONFIG["email"],
                name=ADMIN_CONFIG["name"],
                role="admin",
                password_hash=hash_password(ADMIN_CONFIG["password"])
            )
            db.add(admin)

        if not db.query(models.KPISettings).first():
            db.add(models.KPISettings(**DEFAULT_KPI_SETTINGS))

        rep = models.User(
            email=f"rep{random.randint(1000, 9999)}@horeca.app",
            name="Demo Rep",
            role="user",
            password_hash=hash_password("Demo1234")
        )
        db.add(rep)
        db.commit()
        db.refresh(rep)
        rep_email = rep.email

        for i in range(20):
            governorate, city = random.choice(CITIES)
            hookahs = random.randint(0, 12)
            status = random.choice([STATUS_PENDING, STATUS_VISITED, STATUS_CONTRACTED])
            if hookahs == 0 and status == STATUS_CONTRACTED:
                status = STATUS_VISITED
            cafe = models.Cafe(
                name=f"Cafe {i + 1}",
                owner_name=f"Owner {i + 1}",
                owner_number=f"+20 100 {random.randint(1000000, 9999999)}",
                number_of_hookahs=hookahs,
                number_of_tables=random.randint(2, 30),
                status=status,
                governorate=governorate,
                city=city,
                created_by=rep.id
            )
            db.add(cafe)
            db.flush()

            survey = models.CafeSurvey(cafe_id=cafe.id)
            db.add(survey)
            db.flush()
            for brand in random.sample(TOBACCO_BRANDS, 2):
                db.add(models.BrandSale(survey_id=survey.id, brand=brand, packs_per_week=random.randint(1, 40)))

        db.commit()
    finally:
        db.close()

    print("✅ Test data generated!")
    print(f"👤 Admin: {ADMIN_CONFIG['email']}")
    print(f"👤 Demo rep: {rep_email} / Demo1234")

if __name__ == "__main__":
    generate_test_data()
