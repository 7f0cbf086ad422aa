"""Org chart and employee Pydantic v2 schemas."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class OrgNode(BaseModel):
    """One employee in the org-chart tree."""

    model_config = ConfigDict(extra="allow")

    id: int
    full_name: str
    email: Optional[str] = None
    employee_number: Optional[str] = None
    tier: Optional[int] = None
    role_name: Optional[str] = None
    manager_id: Optional[int] = None
    direct_reports: int = 0
    children: List[OrgNode] = []


class OrgChart(BaseModel):
    tree: List[OrgNode] = []
    total_employees: int = 0


class Employee(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    full_name: str
    email: Optional[str] = None
    employee_number: Optional[str] = None
    role_id: Optional[int] = None
    role_name: Optional[str] = None
    tier: Optional[int] = None
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    employment_status: Optional[str] = None
    start_date: Optional[date] = None


class Role(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    role_name: str


class TransferRequest(BaseModel):
    """Move an employee under a new manager, or leave them without one."""

    new_manager_id: Optional[int] = None
    orphan: bool = False

    def payload(self) -> dict[str, Any]:
        if self.orphan:
            return {"orphan": True}
        return {"new_manager_id": self.new_manager_id}


class LeaveBalance(BaseModel):
    model_config = ConfigDict(extra="allow")

    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    entitlement: float = 0
    used: float = 0
    pending: float = 0
    remaining: float = 0
    available: float = 0
