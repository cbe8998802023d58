# HORECA/backend/horeca/schemas/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

from horeca.constants import ROLES, CAFE_STATUSES, TOBACCO_BRANDS

Role = Literal[tuple(ROLES)]
CafeStatus = Literal[tuple(CAFE_STATUSES)]
TobaccoBrand = Literal[tuple(TOBACCO_BRANDS)]

# ---------- AUTH SCHEMAS ----------
class LoginRequest(BaseModel):
    email: str  # Bare usernames are accepted and completed with the default domain
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str
    user: "UserOut"

# ---------- USER SCHEMAS ----------
class UserCreate(BaseModel):
    email: str
    password: str
    name: str
    role: Role = "user"

class UserUpdate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None

class UserOut(BaseModel):
    id: str
    email: str
    name: str
    role: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

# ---------- CAFE SCHEMAS ----------
class CafeCreate(BaseModel):
    name: str
    owner_name: str
    owner_number: str
    number_of_hookahs: int = 0
    number_of_tables: int = 0
    status: CafeStatus = "Pending"
    photo_url: Optional[str] = None
    governorate: str
    city: str
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

class CafeUpdate(BaseModel):
    name: Optional[str] = None
    owner_name: Optional[str] = None
    owner_number: Optional[str] = None
    number_of_hookahs: Optional[int] = None
    number_of_tables: Optional[int] = None
    status: Optional[CafeStatus] = None
    photo_url: Optional[str] = None
    governorate: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

class CafeStatusUpdate(BaseModel):
    status: CafeStatus

class CafeOut(BaseModel):
    id: str
    name: str
    owner_name: str
    owner_number: str
    number_of_hookahs: int
    number_of_tables: int
    status: str
    size: str
    photo_url: Optional[str] = None
    governorate: str
    city: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize a datetime as an ISO 8601 string for JSON."""
        return value.isoformat()

# ---------- SURVEY SCHEMAS ----------
class BrandSaleIn(BaseModel):
    brand: TobaccoBrand
    packs_per_week: int = Field(..., ge=0)

class BrandSaleOut(BaseModel):
    id: str
    brand: str
    packs_per_week: int
    survey_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()

class SurveyIn(BaseModel):
    brand_sales: List[BrandSaleIn]

class SurveyOut(BaseModel):
    id: str
    cafe_id: str
    created_at: datetime
    brand_sales: List[BrandSaleOut]

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()

# ---------- KPI SCHEMAS ----------
class KPISettingsSchema(BaseModel):
    """Global KPI configuration, exposed in camelCase and stored in snake_case."""
    total_package: float = Field(..., ge=0)
    basic_salary_percentage: float
    visit_kpi_percentage: float
    visit_threshold_percentage: float
    target_visits_large: int = Field(..., ge=0)
    target_visits_medium: int = Field(..., ge=0)
    target_visits_small: int = Field(..., ge=0)
    contract_threshold_percentage: float
    target_contracts_large: int = Field(..., ge=0)
    target_contracts_medium: int = Field(..., ge=0)
    target_contracts_small: int = Field(..., ge=0)
    bonus_large_cafe: float = Field(..., ge=0)
    bonus_medium_cafe: float = Field(..., ge=0)
    bonus_small_cafe: float = Field(..., ge=0)

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

class KPISettingsUpdate(BaseModel):
    """Partial update, every field optional."""
    total_package: Optional[float] = Field(None, ge=0)
    basic_salary_percentage: Optional[float] = None
    visit_kpi_percentage: Optional[float] = None
    visit_threshold_percentage: Optional[float] = None
    target_visits_large: Optional[int] = Field(None, ge=0)
    target_visits_medium: Optional[int] = Field(None, ge=0)
    target_visits_small: Optional[int] = Field(None, ge=0)
    contract_threshold_percentage: Optional[float] = None
    target_contracts_large: Optional[int] = Field(None, ge=0)
    target_contracts_medium: Optional[int] = Field(None, ge=0)
    target_contracts_small: Optional[int] = Field(None, ge=0)
    bonus_large_cafe: Optional[float] = Field(None, ge=0)
    bonus_medium_cafe: Optional[float] = Field(None, ge=0)
    bonus_small_cafe: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ---------- SALARY SCHEMAS ----------
class SizeCounts(BaseModel):
    small: int
    medium: int
    large: int
    total: int

class KPIStatus(BaseModel):
    achieved: int
    target: int
    percentage: float
    threshold_met: bool
    threshold_value: int

class SalaryBreakdown(BaseModel):
    basic_salary: float
    kpi_salary: float
    visit_kpi: float
    contract_kpi: float
    total_salary: float
    visit_status: KPIStatus
    contract_status: KPIStatus
    bonus_amount: float
    visit_counts: SizeCounts
    contract_counts: SizeCounts

# ---------- DELETION LOG SCHEMAS ----------
class DeletionLogCreate(BaseModel):
    entity_type: str
    entity_id: str
    entity_data: Optional[Dict[str, Any]] = None

class DeletionLogOut(BaseModel):
    id: str
    entity_type: str
    entity_id: str
    deleted_by: str
    deleted_at: datetime
    entity_data: Dict[str, Any]

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('deleted_at')
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()

class DeletionResult(BaseModel):
    success: bool
    message: str
    logged: bool

# ---------- DASHBOARD SCHEMAS ----------
class UserPerformance(BaseModel):
    user_id: str
    name: str
    email: str
    visits: int
    contracts: int
    total_salary: float

class DashboardSummary(BaseModel):
    cafes_by_status: Dict[str, int]
    cafes_by_size: Dict[str, int]
    total_cafes: int
    total_users: int
    user_performance: List[UserPerformance]

# ---------- TASK SCHEMAS ----------
class TaskQueued(BaseModel):
    task_id: str
    status: str

Token.model_rebuild()
