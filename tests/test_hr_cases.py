"""HR case test suite — PIP, disciplinary and grievance calls, closing
outcomes, status buttons, PIP progress and employee wording.
"""

from __future__ import annotations

from datetime import date

import pytest

from staffos.common.constants import CaseType
from staffos.common.exceptions import NotFoundException, ValidationException
from staffos.hr_cases.schemas import (
    HRCase,
    HRCaseCreate,
    MyPip,
    Objective,
    ObjectiveCreate,
    PipProgress,
)
from staffos.hr_cases.service import HRCaseService
from staffos.hr_cases.views import (
    case_type_label,
    encouragement,
    objective_label,
    objective_progress,
    outcome_display,
    outcome_options,
    pip_progress_percentage,
    progress_colour,
    split_pips,
    stage_guidance,
    status_buttons,
    status_label,
)
from tests.conftest import _make_case


# ═════════════════════════════════════════════════════════════════════
# 1. CASES
# ═════════════════════════════════════════════════════════════════════


class TestCaseList:
    async def test_active_tab_sends_every_open_status(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases", {"cases": [_make_case()]})

        cases = await HRCaseService.list_cases(api)

        statuses = [v for k, v in fake_api.last.query if k == "status"]
        assert statuses == ["open", "investigation", "hearing_scheduled", "awaiting_decision", "appeal"]
        assert cases[0].case_reference == "HR-2026-0010"

    async def test_closed_tab_includes_closed(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases", {"cases": []})

        await HRCaseService.list_cases(api, "closed", case_type="grievance")

        assert fake_api.last.params == {
            "status": "closed", "include_closed": "true", "case_type": "grievance",
        }

    async def test_all_types_sends_no_filter(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases", {"cases": []})

        await HRCaseService.list_cases(api, "draft", case_type="all")

        assert "case_type" not in fake_api.last.params

    async def test_unknown_tab(self, api, fake_api):
        with pytest.raises(ValidationException):
            await HRCaseService.list_cases(api, "archived")
        assert fake_api.requests == []


class TestCaseLifecycle:
    async def test_create_requires_employee_type_and_summary(self, api, fake_api):
        with pytest.raises(ValidationException) as exc_info:
            await HRCaseService.create_case(api, HRCaseCreate(summary="  "))
        assert set(exc_info.value.errors) == {"employee_id", "case_type", "summary"}
        assert fake_api.requests == []

    async def test_create_posts_enum_value(self, api, fake_api):
        fake_api.reply("POST", "/hr-cases", _make_case(status="draft"))

        case = await HRCaseService.create_case(api, HRCaseCreate(
            employee_id=7, case_type=CaseType.pip, summary="Timekeeping",
            target_close_date=date(2026, 12, 1),
        ))

        assert case.status == "draft"
        assert fake_api.last.json["case_type"] == "pip"
        assert fake_api.last.json["target_close_date"] == "2026-12-01"

    async def test_get_missing_case(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases/99", {"error": "Case not found"}, status=404)

        with pytest.raises(NotFoundException) as exc_info:
            await HRCaseService.get_case(api, 99)

        assert exc_info.value.detail == "Case not found"

    async def test_change_status(self, api, fake_api):
        fake_api.reply("POST", "/hr-cases/10/status", _make_case(status="investigation"))

        case = await HRCaseService.change_status(api, 10, "investigation", "Evidence gathered")

        assert case.status == "investigation"
        assert fake_api.last.json == {"status": "investigation", "notes": "Evidence gathered"}

    async def test_close_requires_outcome(self, api, fake_api):
        with pytest.raises(ValidationException) as exc_info:
            await HRCaseService.close_case(api, 10, "pip", "")
        assert exc_info.value.detail == "Outcome is required to close case"

    async def test_close_rejects_outcome_of_other_type(self, api, fake_api):
        with pytest.raises(ValidationException):
            await HRCaseService.close_case(api, 10, "pip", "dismissal")
        assert fake_api.requests == []

    async def test_close_case(self, api, fake_api):
        fake_api.reply("POST", "/hr-cases/10/close", _make_case(status="closed", pip_outcome="passed"))

        case = await HRCaseService.close_case(api, 10, "pip", "passed", "All objectives met")

        assert case.status == "closed"
        assert fake_api.last.json == {"outcome": "passed", "outcome_notes": "All objectives met"}

    async def test_appeal_requires_reason(self, api, fake_api):
        with pytest.raises(ValidationException):
            await HRCaseService.appeal(api, 10, " ")


class TestCaseDetails:
    async def test_objective_requires_criteria_and_date(self, api, fake_api):
        with pytest.raises(ValidationException) as exc_info:
            await HRCaseService.add_objective(api, 10, ObjectiveCreate(objective="Arrive on time"))
        assert set(exc_info.value.errors) == {"success_criteria", "target_date"}

    async def test_record_meeting_outcome_marks_held_today(self, api, fake_api):
        fake_api.reply("PUT", "/hr-cases/10/meetings/3", {
            "id": 3, "meeting_type": "hearing", "held": True,
        })

        meeting = await HRCaseService.record_meeting_outcome(api, 10, 3, "Written warning issued")

        assert meeting.held is True
        assert fake_api.last.json == {
            "held": True,
            "held_date": api.config.today().isoformat(),
            "outcome_summary": "Written warning issued",
        }

    async def test_witness_statement_is_dated(self, api, fake_api):
        fake_api.reply("PUT", "/hr-cases/10/witnesses/2", {"id": 2, "witness_name": "Dana"})

        await HRCaseService.update_witness_statement(api, 10, 2, "I saw the incident")

        assert fake_api.last.json["statement_date"] == api.config.today().isoformat()

    async def test_guidance_reads_camel_case_key(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases/guidance/pip/open", {
            "guidance": "Agree objectives", "caseType": "pip", "stage": "open",
        })

        guidance = await HRCaseService.guidance(api, "pip", "open")

        assert guidance.case_type == "pip"

    async def test_submit_grievance(self, api, fake_api):
        fake_api.reply("POST", "/hr-cases/grievance/submit", {
            "message": "Grievance submitted", "case_reference": "GR-2026-0004",
        })

        result = await HRCaseService.submit_grievance(api, "Unfair rota allocation")

        assert result.case_reference == "GR-2026-0004"
        assert fake_api.last.json == {"summary": "Unfair rota allocation", "background": None}

    async def test_my_pips(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases/pip/my-pips", {"pips": [
            {"id": 1, "status": "open", "total_objectives": 3, "objectives_met": 1},
        ]})

        pips = await HRCaseService.my_pips(api)

        assert pips[0].objectives_met == 1


# ═════════════════════════════════════════════════════════════════════
# 2. VIEWS
# ═════════════════════════════════════════════════════════════════════


class TestCaseLabels:
    def test_case_type_label(self):
        assert case_type_label("pip") == "Performance Improvement Plan"
        assert case_type_label("pip", short=True) == "PIP"

    def test_employee_view_uses_softer_wording(self):
        assert status_label("hearing_scheduled") == "Hearing Scheduled"
        assert status_label("hearing_scheduled", employee_view=True) == "Meeting Scheduled"
        assert status_label("closed", employee_view=True) == "Completed"

    def test_outcome_options_per_type(self):
        assert [o.value for o in outcome_options("grievance")] == [
            "upheld", "partially_upheld", "not_upheld", "withdrawn",
        ]
        assert outcome_options("other") == []

    @pytest.mark.parametrize("overrides,expected", [
        ({"disciplinary_outcome": "written_warning"}, "WRITTEN WARNING"),
        ({"grievance_outcome": "partially_upheld"}, "PARTIALLY UPHELD"),
        ({"pip_outcome": "passed"}, "PASSED"),
        ({}, ""),
    ])
    def test_outcome_display(self, overrides, expected):
        assert outcome_display(HRCase.model_validate(_make_case(**overrides))) == expected

    def test_objective_label(self):
        assert objective_label("met") == "Achieved!"
        assert objective_label("pending") == "In Progress"


class TestStatusButtons:
    def test_open_case_offers_all_three(self):
        labels = [b.label for b in status_buttons("open")]
        assert labels == ["Start Investigation", "Schedule Hearing", "Awaiting Decision"]

    def test_current_status_is_skipped(self):
        buttons = status_buttons("investigation")
        assert [b.label for b in buttons] == ["Schedule Hearing", "Awaiting Decision"]
        assert buttons[0].status is None

    @pytest.mark.parametrize("status", ["draft", "closed"])
    def test_none_for_draft_or_closed(self, status):
        assert status_buttons(status) == []


class TestStageGuidance:
    GUIDANCE = {"open": "Hold an initial meeting", "investigation": "Gather evidence"}

    def test_current_stage(self):
        case = HRCase.model_validate(_make_case(guidance=self.GUIDANCE))
        assert stage_guidance(case) == "Hold an initial meeting"

    def test_falls_back_to_investigation(self):
        case = HRCase.model_validate(_make_case(status="appeal", guidance=self.GUIDANCE))
        assert stage_guidance(case) == "Gather evidence"

    def test_default_text(self):
        case = HRCase.model_validate(_make_case(status="appeal", guidance={"open": "x"}))
        assert stage_guidance(case).startswith("Follow the ACAS Code")

    def test_none_when_closed(self):
        case = HRCase.model_validate(_make_case(status="closed", guidance=self.GUIDANCE))
        assert stage_guidance(case) is None


class TestPipProgress:
    def _objectives(self, *statuses):
        return [Objective(id=i, objective=f"Objective {i}", status=s) for i, s in enumerate(statuses)]

    def test_met_counts_as_on_track(self):
        progress = objective_progress(self._objectives("met", "on_track", "at_risk", "pending"))
        assert progress == PipProgress(total=4, met=1, on_track=2, on_track_percentage=50)

    def test_percentage_of_met(self):
        assert pip_progress_percentage(PipProgress(total=3, met=1)) == 33
        assert pip_progress_percentage(None) == 0

    @pytest.mark.parametrize("pct,expected", [
        (80, "🎉"), (50, "💪"), (10, "🌱"),
    ])
    def test_encouragement(self, pct, expected):
        progress = PipProgress(total=4, on_track_percentage=pct)
        assert encouragement(progress).startswith(expected)

    def test_encouragement_before_objectives(self):
        assert encouragement(None).startswith("📚")

    def test_progress_colour(self):
        assert progress_colour(75) == "#4caf50"
        assert progress_colour(50) == "#ff9800"
        assert progress_colour(0) == "#2196f3"

    def test_split_pips(self):
        active, completed = split_pips([
            MyPip(id=1, status="open"), MyPip(id=2, status="closed"), MyPip(id=3, status="appeal"),
        ])
        assert [p.id for p in active] == [1, 3]
        assert [p.id for p in completed] == [2]
