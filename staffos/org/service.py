"""User / org service — employee directory, org chart, manager changes."""

from __future__ import annotations

import logging
from typing import Optional

from staffos.client import ApiClient
from staffos.common.exceptions import ValidationException
from staffos.org.schemas import Employee, LeaveBalance, OrgChart, Role, TransferRequest

logger = logging.getLogger(__name__)


class UserService:
    """Async employee and org-chart operations."""

    @staticmethod
    async def org_chart(api: ApiClient) -> OrgChart:
        body = await api.get("/users/org-chart")
        return OrgChart.model_validate(body)

    @staticmethod
    async def list_employees(api: ApiClient) -> list[Employee]:
        body = await api.get("/users")
        return [Employee.model_validate(u) for u in body.get("users", [])]

    @staticmethod
    async def list_roles(api: ApiClient) -> list[Role]:
        body = await api.get("/users/roles")
        return [Role.model_validate(r) for r in body.get("roles", [])]

    @staticmethod
    async def list_managers(api: ApiClient) -> list[Employee]:
        body = await api.get("/users/managers")
        return [Employee.model_validate(m) for m in body.get("managers", [])]

    @staticmethod
    async def profile(api: ApiClient, employee_id: int) -> dict:
        body = await api.get(f"/users/{employee_id}/profile")
        return body.get("profile", {})

    @staticmethod
    async def leave_balance(api: ApiClient, employee_id: int) -> LeaveBalance:
        body = await api.get(f"/leave/balance/{employee_id}")
        return LeaveBalance.model_validate(body.get("balance", {}))

    @staticmethod
    async def transfer_targets(api: ApiClient, employee_id: int) -> list[Employee]:
        body = await api.get(f"/users/{employee_id}/transfer-targets")
        return [Employee.model_validate(t) for t in body.get("eligible_managers", [])]

    @staticmethod
    async def transfer(api: ApiClient, employee_id: int, request: TransferRequest) -> dict:
        """Move an employee to a new manager (or orphan them)."""
        if not request.orphan and request.new_manager_id is None:
            raise ValidationException(
                {"new_manager_id": ["Please select a new manager or choose to orphan"]}
            )
        body = await api.post(f"/users/{employee_id}/transfer", request.payload())
        logger.info("Transferred employee %s (%s)", employee_id, request.payload())
        return body

    @staticmethod
    async def adopt(api: ApiClient, employee_id: int) -> dict:
        """Make the current user the employee's manager."""
        return await api.post(f"/users/adopt-employee/{employee_id}")

    @staticmethod
    async def assign_manager(
        api: ApiClient,
        employee_id: int,
        manager_id: Optional[int],
    ) -> dict:
        return await api.put(f"/users/{employee_id}/assign-manager", {"manager_id": manager_id})
