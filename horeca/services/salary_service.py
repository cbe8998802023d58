# HORECA/backend/horeca/services/salary_service.py : salary and bonus computation

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, List, Optional

from sqlalchemy.orm import Session

from horeca.models import models
from horeca.services.cafe_utils import get_visit_counts, get_contract_counts
from horeca.services.kpi_service import KPIService

def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def _kpi_status(achieved: int, target: int, threshold_percentage: float) -> Dict[str, Any]:
    percentage = (achieved / target) * 100 if target > 0 else 0
    return {
        "achieved": achieved,
        "target": target,
        "percentage": percentage,
        "threshold_met": percentage >= threshold_percentage,
        "threshold_value": round_half_up(target * (threshold_percentage / 100)),
    }

def calculate_salary(kpi_settings: Dict[str, Any], cafes) -> Dict[str, Any]:
    """
    Salary breakdown of a sales rep for the given cafes.

    The package splits into a basic part and a KPI part; the KPI part splits
    into a visit share and a contract share, each paid only when its
    achievement percentage reaches the threshold. Every contracted cafe adds
    a bonus depending on its size.
    """
    s = kpi_settings
    cafes = list(cafes)

    basic_salary = s["total_package"] * (s["basic_salary_percentage"] / 100)
    kpi_salary = s["total_package"] - basic_salary
    visit_kpi_salary = kpi_salary * (s["visit_kpi_percentage"] / 100)
    contract_kpi_salary = kpi_salary - visit_kpi_salary

    visit_counts = get_visit_counts(cafes)
    contract_counts = get_contract_counts(cafes)

    visit_target = s["target_visits_large"] + s["target_visits_medium"] + s["target_visits_small"]
    contract_target = s["target_contracts_large"] + s["target_contracts_medium"] + s["target_contracts_small"]

    visit_status = _kpi_status(visit_counts["total"], visit_target, s["visit_threshold_percentage"])
    contract_status = _kpi_status(contract_counts["total"], contract_target, s["contract_threshold_percentage"])

    visit_kpi = visit_kpi_salary if visit_status["threshold_met"] else 0
    contract_kpi = contract_kpi_salary if contract_status["threshold_met"] else 0

    bonus_amount = (
        contract_counts["large"] * s["bonus_large_cafe"]
        + contract_counts["medium"] * s["bonus_medium_cafe"]
        + contract_counts["small"] * s["bonus_small_cafe"]
    )

    return {
        "basic_salary": basic_salary,
        "kpi_salary": kpi_salary,
        "visit_kpi": visit_kpi,
        "contract_kpi": contract_kpi,
        "total_salary": basic_salary + visit_kpi + contract_kpi + bonus_amount,
        "visit_status": visit_status,
        "contract_status": contract_status,
        "bonus_amount": bonus_amount,
        "visit_counts": visit_counts,
        "contract_counts": contract_counts,
    }

class SalaryService:
    """Salary views over the stored cafes and KPI settings"""

    def __init__(self, db: Session):
        self.db = db
        self.kpi_settings = KPIService(db).get_settings()

    def _cafes(self, user_id: Optional[str] = None) -> List[models.Cafe]:
        query = self.db.query(models.Cafe)
        if user_id is not None:
            query = query.filter(models.Cafe.created_by == user_id)
        return query.all()

    def calculate_salary(self) -> Dict[str, Any]:
        """Breakdown over every cafe"""
        return calculate_salary(self.kpi_settings, self._cafes())

    def calculate_user_salary(self, user_id: str) -> Dict[str, Any]:
        """Breakdown over the cafes created by one rep"""
        return calculate_salary(self.kpi_settings, self._cafes(user_id))
