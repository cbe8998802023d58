# HORECA/backend/horeca/services/export_service.py : Excel export of cafes

import io
from typing import Dict, List

import pandas as pd

from horeca.models import models

EXPORT_COLUMNS = [
    "Name", "Size", "Location", "Status", "Owner", "Owner Number",
    "Tables", "Hookahs", "Created By", "Date Added",
]

def cafe_rows(cafes: List[models.Cafe], user_names: Dict[str, str]) -> List[Dict]:
    return [{
        "Name": cafe.name,
        "Size": cafe.size,
        "Location": f"{cafe.governorate}, {cafe.city}",
        "Status": cafe.status,
        "Owner": cafe.owner_name,
        "Owner Number": cafe.owner_number,
        "Tables": cafe.number_of_tables,
        "Hookahs": cafe.number_of_hookahs,
        "Created By": user_names.get(cafe.created_by, cafe.created_by),
        "Date Added": cafe.created_at.strftime('%d/%m/%Y') if cafe.created_at else "",
    } for cafe in cafes]

def create_cafes_workbook(cafes: List[models.Cafe], user_names: Dict[str, str]) -> bytes:
    """Workbook with a single "Cafes" sheet"""
    output = io.BytesIO()
    df = pd.DataFrame(cafe_rows(cafes, user_names), columns=EXPORT_COLUMNS)
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name='Cafes', index=False)
    return output.getvalue()

def user_names_by_id(db) -> Dict[str, str]:
    return {user.id: user.name for user in db.query(models.User).all()}
