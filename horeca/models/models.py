# HORECA/backend/horeca/models/models.py

import uuid
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from horeca.database import Base
from horeca.constants import ROLE_USER, STATUS_PENDING
from horeca.services.cafe_utils import get_cafe_size

def new_id():
    return str(uuid.uuid4())

class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id, index=True)
    email = Column(String(254), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

class Cafe(Base):
    __tablename__ = "cafes"
    id = Column(String(36), primary_key=True, default=new_id, index=True)
    name = Column(String(100), nullable=False)
    owner_name = Column(String(50), nullable=False)
    owner_number = Column(String(20), nullable=False)
    number_of_hookahs = Column(Integer, nullable=False, default=0)
    number_of_tables = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=STATUS_PENDING)
    photo_url = Column(String, nullable=True)
    governorate = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    # Plain column: cafes outlive the rep who created them
    created_by = Column(String(36), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    surveys = relationship("CafeSurvey", back_populates="cafe")

    @property
    def size(self):
        return get_cafe_size(self.number_of_hookahs)

    def to_snapshot(self):
        """Plain dict of the row, kept in deletion logs"""
        return {
            "id": self.id,
            "name": self.name,
            "owner_name": self.owner_name,
            "owner_number": self.owner_number,
            "number_of_hookahs": self.number_of_hookahs,
            "number_of_tables": self.number_of_tables,
            "status": self.status,
            "photo_url": self.photo_url,
            "governorate": self.governorate,
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

class CafeSurvey(Base):
    __tablename__ = "cafe_surveys"
    id = Column(String(36), primary_key=True, default=new_id)
    cafe_id = Column(String(36), ForeignKey("cafes.id"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    cafe = relationship("Cafe", back_populates="surveys")
    brand_sales = relationship("BrandSale", back_populates="survey")

class BrandSale(Base):
    __tablename__ = "brand_sales"
    __table_args__ = (UniqueConstraint("survey_id", "brand", name="uq_brand_sales_survey_brand"),)
    id = Column(String(36), primary_key=True, default=new_id)
    brand = Column(String(20), nullable=False)
    packs_per_week = Column(Integer, nullable=False)
    survey_id = Column(String(36), ForeignKey("cafe_surveys.id"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    survey = relationship("CafeSurvey", back_populates="brand_sales")

class KPISettings(Base):
    __tablename__ = "kpi_settings"
    id = Column(String(36), primary_key=True, default=new_id)
    total_package = Column(Float, nullable=False)
    basic_salary_percentage = Column(Float, nullable=False)
    visit_kpi_percentage = Column(Float, nullable=False)
    visit_threshold_percentage = Column(Float, nullable=False)
    target_visits_large = Column(Integer, nullable=False)
    target_visits_medium = Column(Integer, nullable=False)
    target_visits_small = Column(Integer, nullable=False)
    contract_threshold_percentage = Column(Float, nullable=False)
    target_contracts_large = Column(Integer, nullable=False)
    target_contracts_medium = Column(Integer, nullable=False)
    target_contracts_small = Column(Integer, nullable=False)
    bonus_large_cafe = Column(Float, nullable=False)
    bonus_medium_cafe = Column(Float, nullable=False)
    bonus_small_cafe = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

class DeletionLog(Base):
    __tablename__ = "deletion_logs"
    id = Column(String(36), primary_key=True, default=new_id)
    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(36), nullable=False, index=True)
    deleted_by = Column(String(36), nullable=False, index=True)
    deleted_at = Column(DateTime, default=datetime.utcnow)
    entity_data = Column(JSON, nullable=False)
