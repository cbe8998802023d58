# HORECA/backend/horeca/services/dashboard_service.py : admin overview

from typing import Dict, Any, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from horeca.constants import CAFE_STATUSES, CAFE_SIZES
from horeca.models import models
from horeca.services.cafe_utils import get_visit_counts, get_contract_counts
from horeca.services.kpi_service import KPIService
from horeca.services.salary_service import calculate_salary

class DashboardService:
    """Aggregates shown on the admin dashboard"""

    def __init__(self, db: Session):
        self.db = db

    def get_cafes_by_status(self) -> Dict[str, int]:
        results = self.db.query(
            models.Cafe.status,
            func.count(models.Cafe.id).label('count')
        ).group_by(models.Cafe.status).all()

        counts = {status: 0 for status in CAFE_STATUSES}
        for status, count in results:
            counts[status] = count
        return counts

    def get_cafes_by_size(self, cafes: List[models.Cafe]) -> Dict[str, int]:
        counts = {size: 0 for size in CAFE_SIZES}
        for cafe in cafes:
            counts[cafe.size] += 1
        return counts

    def get_user_performance(self, cafes: List[models.Cafe]) -> List[Dict[str, Any]]:
        """Visits, contracts and salary of every rep, best paid first"""
        kpi_settings = KPIService(self.db).get_settings()
        users = self.db.query(models.User).order_by(models.User.name).all()

        performance = []
        for user in users:
            user_cafes = [c for c in cafes if c.created_by == user.id]
            salary = calculate_salary(kpi_settings, user_cafes)
            performance.append({
                "user_id": user.id,
                "name": user.name,
                "email": user.email,
                "visits": get_visit_counts(user_cafes)["total"],
                "contracts": get_contract_counts(user_cafes)["total"],
                "total_salary": salary["total_salary"],
            })
        return sorted(performance, key=lambda p: p["total_salary"], reverse=True)

    def get_summary(self) -> Dict[str, Any]:
        cafes = self.db.query(models.Cafe).all()
        return {
            "cafes_by_status": self.get_cafes_by_status(),
            "cafes_by_size": self.get_cafes_by_size(cafes),
            "total_cafes": len(cafes),
            "total_users": self.db.query(func.count(models.User.id)).scalar() or 0,
            "user_performance": self.get_user_performance(cafes),
        }
