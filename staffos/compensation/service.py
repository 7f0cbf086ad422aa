"""Compensation service — pay bands, salaries, benefits, pay reviews, reports.

Every list endpoint answers ``{"data": [...]}``; creates and updates answer
``{"message": ..., "data": {...}}``.  Salary figures never appear in the
audit log (see ``staffos.compensation.audit``).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from staffos.client import ApiClient
from staffos.common.constants import DEFAULT_AUDIT_PAGE_SIZE
from staffos.common.exceptions import ValidationException, require_fields
from staffos.compensation.schemas import (
    Allowance,
    AllowanceAssignment,
    AllowanceCreate,
    AuditPage,
    Benefit,
    BenefitCreate,
    BonusAssignment,
    BonusCalculation,
    BonusScheme,
    BonusSchemeCreate,
    CompensationSettings,
    CompensationStats,
    EmployeeCompensation,
    PayBand,
    PayBandCreate,
    PayReview,
    PayReviewCreate,
    PaySlip,
    ReviewCycle,
    ReviewCycleCreate,
    SalaryRecord,
    SalaryRecordCreate,
)
from staffos.compensation.views import (
    AUDIT_ACTIONS,
    REPORTS,
    cycle_action,
    export_filename,
    review_actions,
    to_csv,
)

logger = logging.getLogger(__name__)

BASE = "/compensation"


class CompensationService:
    """Async compensation operations."""

    # ── Dashboard / settings ────────────────────────────────────────

    @staticmethod
    async def stats(api: ApiClient) -> CompensationStats:
        body = await api.get(f"{BASE}/stats")
        return CompensationStats.model_validate(body)

    @staticmethod
    async def get_settings(api: ApiClient) -> CompensationSettings:
        body = await api.get(f"{BASE}/settings")
        return CompensationSettings.model_validate(body)

    @staticmethod
    async def update_settings(api: ApiClient, data: CompensationSettings) -> CompensationSettings:
        body = await api.put(f"{BASE}/settings", data.model_dump())
        return CompensationSettings.model_validate(body.get("data", body))

    # ── Salary views ────────────────────────────────────────────────

    @staticmethod
    async def my_compensation(api: ApiClient) -> EmployeeCompensation:
        body = await api.get(f"{BASE}/me")
        return EmployeeCompensation.model_validate(body)

    @staticmethod
    async def employee_compensation(api: ApiClient, employee_id: int) -> EmployeeCompensation:
        body = await api.get(f"{BASE}/employee/{employee_id}")
        return EmployeeCompensation.model_validate(body)

    @staticmethod
    async def add_salary_record(api: ApiClient, data: SalaryRecordCreate) -> SalaryRecord:
        body = await api.post(f"{BASE}/records", data.model_dump(mode="json"))
        logger.info("Salary record added for employee %s", data.employee_id)
        return SalaryRecord.model_validate(body["data"])

    # ── Pay bands ───────────────────────────────────────────────────

    @staticmethod
    async def pay_bands(api: ApiClient) -> list[PayBand]:
        body = await api.get(f"{BASE}/pay-bands")
        return [PayBand.model_validate(b) for b in body.get("data", [])]

    @staticmethod
    async def save_pay_band(
        api: ApiClient,
        data: PayBandCreate,
        band_id: Optional[int] = None,
    ) -> PayBand:
        """Create a band, or update ``band_id`` when given."""
        payload = data.model_dump(mode="json")
        if band_id is None:
            body = await api.post(f"{BASE}/pay-bands", payload)
        else:
            body = await api.put(f"{BASE}/pay-bands/{band_id}", payload)
        return PayBand.model_validate(body["data"])

    @staticmethod
    async def delete_pay_band(api: ApiClient, band_id: int) -> dict:
        return await api.delete(f"{BASE}/pay-bands/{band_id}")

    # ── Benefits ────────────────────────────────────────────────────

    @staticmethod
    async def benefits(api: ApiClient, employee_id: int) -> list[Benefit]:
        body = await api.get(f"{BASE}/benefits/{employee_id}")
        return [Benefit.model_validate(b) for b in body.get("data", [])]

    @staticmethod
    async def save_benefit(
        api: ApiClient,
        data: BenefitCreate,
        benefit_id: Optional[int] = None,
    ) -> Benefit:
        payload = data.model_dump(mode="json")
        if benefit_id is None:
            body = await api.post(f"{BASE}/benefits", payload)
        else:
            body = await api.put(f"{BASE}/benefits/{benefit_id}", payload)
        return Benefit.model_validate(body["data"])

    @staticmethod
    async def delete_benefit(api: ApiClient, benefit_id: int) -> dict:
        return await api.delete(f"{BASE}/benefits/{benefit_id}")

    # ── Review cycles ───────────────────────────────────────────────

    @staticmethod
    async def review_cycles(api: ApiClient) -> list[ReviewCycle]:
        body = await api.get(f"{BASE}/review-cycles")
        return [ReviewCycle.model_validate(c) for c in body.get("data", [])]

    @staticmethod
    async def create_review_cycle(api: ApiClient, data: ReviewCycleCreate) -> ReviewCycle:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "name": "Name, year, start date and end date are required",
            "year": "Name, year, start date and end date are required",
            "start_date": "Name, year, start date and end date are required",
            "end_date": "Name, year, start date and end date are required",
        })
        body = await api.post(f"{BASE}/review-cycles", payload)
        return ReviewCycle.model_validate(body["data"])

    @staticmethod
    async def advance_cycle(api: ApiClient, cycle: ReviewCycle) -> ReviewCycle:
        """Move a cycle to its next status (planning → open → in_review → complete)."""
        action = cycle_action(cycle.status)
        if action is None:
            raise ValidationException(
                {"status": [f"Review cycle '{cycle.name}' is already {cycle.status}"]}
            )
        body = await api.put(f"{BASE}/review-cycles/{cycle.id}", {"status": action.status})
        logger.info("Review cycle %s: %s -> %s", cycle.id, cycle.status, action.status)
        return ReviewCycle.model_validate(body["data"])

    # ── Pay reviews ─────────────────────────────────────────────────

    @staticmethod
    async def reviews(api: ApiClient, review_cycle_id: int) -> list[PayReview]:
        body = await api.get(f"{BASE}/reviews", params={"review_cycle_id": review_cycle_id})
        return [PayReview.model_validate(r) for r in body.get("data", [])]

    @staticmethod
    async def create_review(api: ApiClient, data: PayReviewCreate) -> PayReview:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "review_cycle_id": "Review cycle, employee and current salary are required",
            "employee_id": "Review cycle, employee and current salary are required",
            "current_salary": "Review cycle, employee and current salary are required",
        })
        body = await api.post(f"{BASE}/reviews", payload)
        return PayReview.model_validate(body["data"])

    @staticmethod
    async def change_review_status(
        api: ApiClient,
        review: PayReview,
        new_status: str,
        role_name: Optional[str],
    ) -> PayReview:
        """Move a review along the board; approving carries the proposed salary."""
        actions = {a.status: a for a in review_actions(review.status, role_name)}
        action = actions.get(new_status)
        if action is None:
            raise ValidationException(
                {"status": [f"Cannot move a {review.status} review to {new_status}"]}
            )
        payload: dict[str, Any] = {"status": new_status}
        if action.sends_approved_salary and review.proposed_salary:
            payload["approved_salary"] = str(review.proposed_salary)
        body = await api.put(f"{BASE}/reviews/{review.id}", payload)
        logger.info("Pay review %s: %s -> %s", review.id, review.status, new_status)
        return PayReview.model_validate(body["data"])

    # ── Pay slips ───────────────────────────────────────────────────

    @staticmethod
    async def my_pay_slips(api: ApiClient) -> list[PaySlip]:
        body = await api.get(f"{BASE}/pay-slips/me")
        return [PaySlip.model_validate(p) for p in body.get("data", [])]

    @staticmethod
    async def add_pay_slip(
        api: ApiClient,
        employee_id: int,
        period_start: date,
        period_end: date,
        document_id: Optional[int] = None,
    ) -> PaySlip:
        body = await api.post(f"{BASE}/pay-slips", {
            "employee_id": employee_id,
            "period_start": period_start.isoformat(),
            "period_end": period_end.isoformat(),
            "document_id": document_id,
        })
        return PaySlip.model_validate(body["data"])

    # ── Reports ─────────────────────────────────────────────────────

    @staticmethod
    async def report(api: ApiClient, name: str) -> list[dict[str, Any]]:
        if name not in REPORTS:
            raise ValidationException(
                {"report": [f"Unknown report '{name}' (choose from {', '.join(REPORTS)})"]}
            )
        body = await api.get(f"{BASE}/reports/{name}")
        return body.get("data", [])

    @staticmethod
    async def aggregates(api: ApiClient) -> dict[str, Any]:
        return await api.get(f"{BASE}/reports/aggregates")

    @staticmethod
    async def export_report(api: ApiClient, name: str) -> Optional[tuple[str, str]]:
        """``(filename, csv_text)`` for a report; None when it has no rows."""
        rows = await CompensationService.report(api, name)
        if not rows:
            return None
        return export_filename(name, api.config.today()), to_csv(rows)

    # ── Audit log ───────────────────────────────────────────────────

    @staticmethod
    async def audit(
        api: ApiClient,
        employee_id: Optional[int] = None,
        action: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_AUDIT_PAGE_SIZE,
        offset: int = 0,
    ) -> AuditPage:
        if action and action not in AUDIT_ACTIONS:
            raise ValidationException({"action": [f"Unknown audit action '{action}'"]})
        body = await api.get(f"{BASE}/audit", params={
            "employee_id": employee_id,
            "action": action,
            "start_date": start_date.isoformat() if start_date else None,
            "end_date": end_date.isoformat() if end_date else None,
            "limit": limit,
            "offset": offset,
        })
        return AuditPage.model_validate(body)

    # ── Bonus schemes ───────────────────────────────────────────────

    @staticmethod
    async def bonus_schemes(api: ApiClient) -> list[BonusScheme]:
        body = await api.get(f"{BASE}/bonus-schemes")
        return [BonusScheme.model_validate(s) for s in body.get("data", [])]

    @staticmethod
    async def save_bonus_scheme(
        api: ApiClient,
        data: BonusSchemeCreate,
        scheme_id: Optional[int] = None,
    ) -> BonusScheme:
        payload = data.model_dump(mode="json")
        if scheme_id is None:
            body = await api.post(f"{BASE}/bonus-schemes", payload)
        else:
            body = await api.put(f"{BASE}/bonus-schemes/{scheme_id}", payload)
        return BonusScheme.model_validate(body["data"])

    @staticmethod
    async def delete_bonus_scheme(api: ApiClient, scheme_id: int) -> dict:
        return await api.delete(f"{BASE}/bonus-schemes/{scheme_id}")

    @staticmethod
    async def calculate_bonus(
        api: ApiClient,
        scheme_id: int,
        effective_date: date,
    ) -> BonusCalculation:
        """Create pending assignments for every eligible employee."""
        body = await api.post(
            f"{BASE}/bonus-schemes/{scheme_id}/calculate",
            {"effective_date": effective_date.isoformat()},
        )
        result = BonusCalculation.model_validate(body)
        logger.info("Bonus scheme %s calculated: %d assignment(s)", scheme_id, len(result.data))
        return result

    @staticmethod
    async def bonus_assignments(api: ApiClient) -> list[BonusAssignment]:
        body = await api.get(f"{BASE}/bonus-assignments")
        return [BonusAssignment.model_validate(a) for a in body.get("data", [])]

    @staticmethod
    async def set_bonus_status(api: ApiClient, assignment_id: int, status: str) -> dict:
        """Approve or reject a pending assignment."""
        if status not in ("approved", "rejected"):
            raise ValidationException({"status": ["Status must be approved or rejected"]})
        return await api.put(f"{BASE}/bonus-assignments/{assignment_id}", {"status": status})

    @staticmethod
    async def apply_bonus(api: ApiClient, assignment_id: int) -> dict:
        return await api.post(f"{BASE}/bonus-assignments/{assignment_id}/apply")

    # ── Responsibility allowances ───────────────────────────────────

    @staticmethod
    async def allowances(api: ApiClient) -> list[Allowance]:
        body = await api.get(f"{BASE}/responsibility-allowances")
        return [Allowance.model_validate(a) for a in body.get("data", [])]

    @staticmethod
    async def save_allowance(
        api: ApiClient,
        data: AllowanceCreate,
        allowance_id: Optional[int] = None,
    ) -> Allowance:
        payload = data.model_dump(mode="json")
        if allowance_id is None:
            body = await api.post(f"{BASE}/responsibility-allowances", payload)
        else:
            body = await api.put(f"{BASE}/responsibility-allowances/{allowance_id}", payload)
        return Allowance.model_validate(body["data"])

    @staticmethod
    async def delete_allowance(api: ApiClient, allowance_id: int) -> dict:
        return await api.delete(f"{BASE}/responsibility-allowances/{allowance_id}")

    @staticmethod
    async def assign_allowance(
        api: ApiClient,
        allowance_id: int,
        employee_ids: Sequence[int],
        start_date: Optional[date] = None,
    ) -> dict:
        if not employee_ids:
            raise ValidationException({"employee_ids": ["Select at least one employee"]})
        start = start_date or api.config.today()
        return await api.post(
            f"{BASE}/responsibility-allowances/{allowance_id}/assign",
            {"employee_ids": list(employee_ids), "start_date": start.isoformat()},
        )

    @staticmethod
    async def allowance_assignments(api: ApiClient) -> list[AllowanceAssignment]:
        body = await api.get(f"{BASE}/allowance-assignments")
        return [AllowanceAssignment.model_validate(a) for a in body.get("data", [])]

    @staticmethod
    async def end_allowance(api: ApiClient, assignment_id: int, end_date: date) -> dict:
        return await api.put(
            f"{BASE}/allowance-assignments/{assignment_id}",
            {"end_date": end_date.isoformat()},
        )
