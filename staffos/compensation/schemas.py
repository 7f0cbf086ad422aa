"""Compensation Pydantic v2 schemas — pay bands, salary records, benefits, pay reviews."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ═════════════════════════════════════════════════════════════════════
# Settings / stats
# ═════════════════════════════════════════════════════════════════════


class CompensationSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    enable_tier_band_linking: bool = False
    enable_bonus_schemes: bool = False
    enable_responsibility_allowances: bool = False


class CompensationStats(BaseModel):
    total_payroll: Decimal = Decimal("0")
    average_salary: Decimal = Decimal("0")
    employee_count: int = 0
    active_review_cycles: int = 0
    upcoming_changes: int = 0
    pending_reviews: int = 0


# ═════════════════════════════════════════════════════════════════════
# Pay bands
# ═════════════════════════════════════════════════════════════════════


class PayBandCreate(BaseModel):
    band_name: str = Field(..., min_length=1)
    grade: int
    min_salary: Decimal = Field(..., gt=0)
    mid_salary: Decimal = Field(..., gt=0)
    max_salary: Decimal = Field(..., gt=0)
    currency: str = "GBP"
    tier_level: Optional[int] = None

    @model_validator(mode="after")
    def _ordered(self) -> "PayBandCreate":
        self.band_name = self.band_name.strip()
        if self.min_salary > self.mid_salary or self.mid_salary > self.max_salary:
            raise ValueError("Salary values must satisfy: min <= mid <= max")
        return self


class PayBand(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    band_name: str
    grade: Optional[int] = None
    min_salary: Decimal
    mid_salary: Decimal
    max_salary: Decimal
    currency: str = "GBP"
    tier_level: Optional[int] = None


# ═════════════════════════════════════════════════════════════════════
# Salary records / benefits / pay slips
# ═════════════════════════════════════════════════════════════════════


class SalaryRecordCreate(BaseModel):
    employee_id: int
    effective_date: date
    base_salary: Decimal = Field(..., gt=0)
    currency: str = "GBP"
    fte_percentage: Decimal = Decimal("100")
    pay_band_id: Optional[int] = None
    reason: Optional[str] = None


class SalaryRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    employee_id: Optional[int] = None
    effective_date: Optional[date] = None
    base_salary: Decimal
    fte_percentage: Optional[Decimal] = None
    reason: Optional[str] = None
    band_name: Optional[str] = None
    grade: Optional[int] = None
    band_min: Optional[Decimal] = None
    band_mid: Optional[Decimal] = None
    band_max: Optional[Decimal] = None


class BenefitCreate(BaseModel):
    employee_id: int
    benefit_type: str
    provider: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Decimal] = None
    employer_contribution: Optional[Decimal] = None
    employee_contribution: Optional[Decimal] = None
    frequency: str = "monthly"
    start_date: date
    end_date: Optional[date] = None


class Benefit(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    employee_id: Optional[int] = None
    benefit_type: str
    provider: Optional[str] = None
    value: Optional[Decimal] = None
    employer_contribution: Optional[Decimal] = None
    employee_contribution: Optional[Decimal] = None
    frequency: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PaySlip(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    employee_id: Optional[int] = None
    period_start: date
    period_end: date
    document_id: Optional[int] = None


class EmployeeCompensation(BaseModel):
    salary_history: List[SalaryRecord] = []
    current_salary: Optional[SalaryRecord] = None
    benefits: List[Benefit] = []
    pay_slips: List[PaySlip] = []


# ═════════════════════════════════════════════════════════════════════
# Review cycles / pay reviews
# ═════════════════════════════════════════════════════════════════════


class ReviewCycleCreate(BaseModel):
    name: str = ""
    year: Optional[int] = None
    budget_total: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ReviewCycle(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    year: Optional[int] = None
    status: str = "planning"
    budget_total: Optional[Decimal] = None
    budget_remaining: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PayReviewCreate(BaseModel):
    review_cycle_id: Optional[int] = None
    employee_id: Optional[int] = None
    current_salary: Optional[Decimal] = None
    proposed_salary: Optional[Decimal] = None
    manager_notes: Optional[str] = None


class PayReview(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    review_cycle_id: Optional[int] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    current_salary: Optional[Decimal] = None
    proposed_salary: Optional[Decimal] = None
    approved_salary: Optional[Decimal] = None
    status: str = "draft"
    manager_notes: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Bonus schemes / responsibility allowances
# ═════════════════════════════════════════════════════════════════════


class BonusSchemeCreate(BaseModel):
    scheme_name: str
    description: str = ""
    calculation_type: str = "percentage"
    calculation_value: Decimal
    basis: str = "base_salary"
    frequency: str = "annual"
    tier_level: Optional[int] = None
    pay_band_id: Optional[int] = None
    min_service_months: int = 0
    is_active: bool = True


class BonusScheme(BonusSchemeCreate):
    model_config = ConfigDict(extra="allow")

    id: int


class BonusAssignment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    scheme_id: Optional[int] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    calculated_amount: Optional[Decimal] = None
    status: str = "pending"


class BonusCalculation(BaseModel):
    scheme: Optional[Dict[str, Any]] = None
    data: List[BonusAssignment] = []


class AllowanceCreate(BaseModel):
    allowance_name: str
    description: str = ""
    amount: Decimal
    frequency: str = "monthly"
    tier_level: Optional[int] = None
    pay_band_id: Optional[int] = None
    additional_role_id: Optional[int] = None
    is_active: bool = True


class Allowance(AllowanceCreate):
    model_config = ConfigDict(extra="allow")

    id: int


class AllowanceAssignment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    allowance_id: Optional[int] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


# ═════════════════════════════════════════════════════════════════════
# Audit log
# ═════════════════════════════════════════════════════════════════════


class AuditEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    accessed_by: Optional[int] = None
    accessed_by_name: Optional[str] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    action: str
    table_name: Optional[str] = None
    record_id: Optional[int] = None
    field_changed: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None


class AuditPage(BaseModel):
    data: List[AuditEntry] = []
    total: int = 0
    limit: int = 50
    offset: int = 0
