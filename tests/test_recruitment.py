"""Recruitment pipeline test suite — stage actions, progress bar,
action → HTTP mapping and interview/offer calls.
"""

from __future__ import annotations

from datetime import date

import pytest

from staffos.common.exceptions import ValidationException
from staffos.recruitment.schemas import (
    InterviewCreate,
    InterviewScore,
    OfferDetails,
    StageChange,
    StageHistoryEntry,
)
from staffos.recruitment.service import PipelineService
from staffos.recruitment.stages import (
    action_request,
    available_actions,
    progress,
    score_label,
    stage_display,
)


def _states(steps):
    return {s.stage: s.state for s in steps}


# ═════════════════════════════════════════════════════════════════════
# 1. ACTIONS
# ═════════════════════════════════════════════════════════════════════


class TestAvailableActions:
    """Buttons offered per stage."""

    def test_application_can_shortlist_reject_withdraw(self):
        ids = [a.id for a in available_actions("application")]
        assert ids == ["shortlist", "reject", "withdraw"]

    def test_interview_scheduled_offers_scoring_first(self):
        actions = available_actions("interview_scheduled")
        assert actions[0].label == "Score Interview"
        assert actions[-1].id == "withdraw"

    def test_interview_complete_promotes_final_shortlist(self):
        first = available_actions("interview_complete")[0]
        assert first.id == "final_shortlist"
        assert first.type == "primary"

    def test_offer_accepted_has_no_actions(self):
        assert available_actions("offer_accepted") == []

    @pytest.mark.parametrize("stage,action", [
        ("rejected", "unreject"),
        ("withdrawn", "unwithdraw"),
        ("offer_declined", "reinstate"),
    ])
    def test_terminal_stages_only_reinstate(self, stage, action):
        actions = available_actions(stage)
        assert [a.id for a in actions] == [action]
        assert actions[0].label == "Reinstate Candidate"


class TestActionRequest:
    """Button → endpoint mapping."""

    def test_shortlist_moves_stage(self):
        req = action_request("shortlist", 5)
        assert req == ("PUT", "/pipeline/candidates/5/stage", {"new_stage": "shortlisted"})

    def test_further_assessment_moves_stage(self):
        req = action_request("further_assessment", 5)
        assert req.body == {"new_stage": "further_assessment"}

    def test_reject_requires_reason(self):
        with pytest.raises(ValidationException) as exc_info:
            action_request("reject", 5, "   ")
        assert "reason" in exc_info.value.errors

    def test_reject_with_reason(self):
        req = action_request("reject", 5, " Not enough experience ")
        assert req.body == {"new_stage": "rejected", "reason": "Not enough experience"}

    def test_withdraw_sets_withdrawn(self):
        assert action_request("withdraw", 5, "Took another job").body["new_stage"] == "withdrawn"

    def test_accept_offer_posts_without_body(self):
        assert action_request("accept_offer", 5) == ("POST", "/pipeline/candidates/5/accept-offer", None)

    def test_decline_offer_needs_reason(self):
        with pytest.raises(ValidationException):
            action_request("decline_offer", 5)

    @pytest.mark.parametrize("action", ["unreject", "unwithdraw", "reinstate"])
    def test_reinstate_goes_back_to_shortlisted(self, action):
        req = action_request(action, 5)
        assert req.body == {"new_stage": "shortlisted", "reason": "Candidate reinstated"}

    def test_form_actions_are_refused(self):
        with pytest.raises(ValidationException):
            action_request("make_offer", 5)

    def test_unknown_action(self):
        with pytest.raises(ValidationException):
            action_request("teleport", 5)


# ═════════════════════════════════════════════════════════════════════
# 2. PROGRESS BAR
# ═════════════════════════════════════════════════════════════════════


class TestProgress:
    def test_current_step_marked(self):
        states = _states(progress("interview_scheduled"))
        assert states["interview_requested"] == "completed"
        assert states["interview_scheduled"] == "current"
        assert states["offer_made"] == "future"

    def test_further_assessment_has_no_step(self):
        states = _states(progress("further_assessment"))
        assert set(states.values()) == {"future"}

    def test_unknown_stage_is_all_future(self):
        assert set(_states(progress("on_hold")).values()) == {"future"}

    def test_rejected_shows_reached_steps_from_history(self):
        history = [
            StageHistoryEntry(to_stage="shortlisted"),
            StageHistoryEntry(to_stage="interview_requested"),
            StageHistoryEntry(to_stage="rejected"),
        ]
        states = _states(progress("rejected", history))
        assert states["shortlisted"] == "completed"
        assert states["interview_requested"] == "completed"
        assert states["application"] == "future"

    def test_eight_steps(self):
        assert len(progress("application")) == 8


class TestLabels:
    @pytest.mark.parametrize("score,label", [
        (1, "Poor"), (2, "Poor"), (4, "Below Average"), (6, "Average"), (8, "Good"), (10, "Excellent"),
    ])
    def test_score_label(self, score, label):
        assert score_label(score) == label

    def test_stage_display(self):
        assert stage_display("interview_requested") == "Interview Requested"
        assert stage_display(None) == ""


# ═════════════════════════════════════════════════════════════════════
# 3. SERVICE
# ═════════════════════════════════════════════════════════════════════


class TestPipelineService:
    async def test_overview(self, api, fake_api):
        fake_api.reply("GET", "/pipeline/", {
            "pipeline": {"application": [{"id": 1, "full_name": "Alex Morgan"}]},
            "counts": {"application": 1},
            "stages": ["application", "shortlisted"],
        })

        overview = await PipelineService.overview(api, recruitment_request_id=3)

        assert fake_api.last.params == {"recruitment_request_id": "3"}
        assert overview.pipeline["application"][0].full_name == "Alex Morgan"

    async def test_move_stage_omits_empty_reason(self, api, fake_api):
        fake_api.reply("PUT", "/pipeline/candidates/5/stage", {
            "message": "Stage updated", "previous_stage": "application", "new_stage": "shortlisted",
        })

        result = await PipelineService.move_stage(api, 5, StageChange(new_stage="shortlisted"))

        assert fake_api.last.json == {"new_stage": "shortlisted"}
        assert result.previous_stage == "application"

    async def test_perform_action_without_reason_makes_no_call(self, api, fake_api):
        with pytest.raises(ValidationException):
            await PipelineService.perform_action(api, 5, "reject")
        assert fake_api.requests == []

    async def test_perform_action_reject(self, api, fake_api):
        fake_api.reply("PUT", "/pipeline/candidates/5/stage", {"new_stage": "rejected"})

        await PipelineService.perform_action(api, 5, "reject", "Failed assessment")

        assert fake_api.last.json == {"new_stage": "rejected", "reason": "Failed assessment"}

    async def test_schedule_interview(self, api, fake_api):
        fake_api.reply("POST", "/pipeline/candidates/5/interviews", {
            "interview": {"id": 8, "interview_type": "face_to_face", "scheduled_date": "2026-10-22"},
        })

        interview = await PipelineService.schedule_interview(api, 5, InterviewCreate(
            interview_type="face_to_face",
            scheduled_date=date(2026, 10, 22),
            scheduled_time="10:00",
        ))

        assert interview.id == 8
        assert fake_api.last.json["scheduled_date"] == "2026-10-22"
        assert "location" not in fake_api.last.json

    def test_score_out_of_range(self):
        with pytest.raises(Exception):
            InterviewScore(score=11)

    async def test_make_offer(self, api, fake_api):
        fake_api.reply("PUT", "/pipeline/candidates/5/offer", {"candidate": {"id": 5}})

        await PipelineService.make_offer(api, 5, OfferDetails(
            offer_salary=28500, offer_start_date=date(2026, 12, 1),
        ))

        assert fake_api.last.json == {"offer_salary": 28500.0, "offer_start_date": "2026-12-01"}

    async def test_decline_offer_posts_reason(self, api, fake_api):
        fake_api.reply("POST", "/pipeline/candidates/5/decline-offer", {"message": "Declined"})

        await PipelineService.decline_offer(api, 5, "Salary too low")

        assert fake_api.last.json == {"reason": "Salary too low"}
