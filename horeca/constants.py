# HORECA/backend/horeca/constants.py

# Roles
ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = [ROLE_ADMIN, ROLE_USER]

# Cafe statuses
STATUS_PENDING = "Pending"
STATUS_VISITED = "Visited"
STATUS_CONTRACTED = "Contracted"
CAFE_STATUSES = [STATUS_PENDING, STATUS_VISITED, STATUS_CONTRACTED]

# Cafe sizes, derived from the number of hookahs
SIZE_IN_NEGOTIATION = "In Negotiation"
SIZE_SMALL = "Small"
SIZE_MEDIUM = "Medium"
SIZE_LARGE = "Large"
CAFE_SIZES = [SIZE_IN_NEGOTIATION, SIZE_SMALL, SIZE_MEDIUM, SIZE_LARGE]

TOBACCO_BRANDS = ["Al Fakher", "Adalya", "Fumari", "Star Buzz"]

# Global KPI configuration used until an admin saves the first row
DEFAULT_KPI_SETTINGS = {
    "total_package": 2000,
    "basic_salary_percentage": 20,
    "visit_kpi_percentage": 80,
    "visit_threshold_percentage": 70,
    "target_visits_large": 30,
    "target_visits_medium": 50,
    "target_visits_small": 70,
    "contract_threshold_percentage": 60,
    "target_contracts_large": 10,
    "target_contracts_medium": 15,
    "target_contracts_small": 20,
    "bonus_large_cafe": 100,
    "bonus_medium_cafe": 75,
    "bonus_small_cafe": 50,
}

# Clamped to [0, 100] before saving
KPI_PERCENTAGE_FIELDS = [
    "basic_salary_percentage",
    "visit_kpi_percentage",
    "visit_threshold_percentage",
    "contract_threshold_percentage",
]

# Data-change events
EVENT_CAFE_ADDED = "cafe_added"
EVENT_CAFE_UPDATED = "cafe_updated"
EVENT_CAFE_DELETED = "cafe_deleted"
EVENT_KPI_UPDATED = "kpi_updated"
EVENT_DATA_UPDATED = "horeca_data_updated"
EVENT_USER_UPDATED = "user_updated"

# Limits
MAX_COUNT_VALUE = 1000
EXPORT_FILENAME = "HoReCa_Cafes_Export.xlsx"
