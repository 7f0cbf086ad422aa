"""Org module test suite — org-chart search, expand/collapse, avatars,
zoom, text rendering and manager transfers.
"""

from __future__ import annotations

import pytest

from staffos.common.exceptions import ValidationException
from staffos.org.chart import (
    all_node_ids,
    find_node,
    initials,
    render_tree,
    search_employees,
    tier_colour,
    tier_display,
    toggle,
    zoom,
    zoom_label,
)
from staffos.org.schemas import Employee, OrgNode, TransferRequest
from staffos.org.service import UserService

CHART = {
    "total_employees": 4,
    "tree": [{
        "id": 1, "full_name": "Morgan Hale", "tier": 1, "role_name": "Director",
        "email": "morgan@example.com",
        "children": [
            {
                "id": 2, "full_name": "Priya Shah", "tier": 3, "employee_number": "E1002",
                "children": [{"id": 4, "full_name": "Tom Reed", "tier": 5, "children": []}],
            },
            {"id": 3, "full_name": "Ola Smith", "tier": 4, "children": []},
        ],
    }],
}


def _tree() -> list[OrgNode]:
    return [OrgNode.model_validate(n) for n in CHART["tree"]]


# ═════════════════════════════════════════════════════════════════════
# 1. TREE HELPERS
# ═════════════════════════════════════════════════════════════════════


class TestFindNode:
    """Depth-first search on name, email or employee number."""

    def test_finds_nested_by_name(self):
        assert find_node(_tree(), "reed") == 4

    def test_finds_by_employee_number(self):
        assert find_node(_tree(), "e1002") == 2

    def test_first_match_wins_depth_first(self):
        # "o" matches Morgan before anyone below
        assert find_node(_tree(), "o") == 1

    def test_blank_term(self):
        assert find_node(_tree(), "   ") is None

    def test_no_match(self):
        assert find_node(_tree(), "zebra") is None


class TestExpandCollapse:
    def test_all_node_ids(self):
        assert all_node_ids(_tree()) == {1, 2, 3, 4}

    def test_toggle_adds_and_removes(self):
        expanded = {1, 2}
        collapsed = toggle(expanded, 2)
        assert collapsed == {1}
        assert toggle(collapsed, 2) == {1, 2}
        assert expanded == {1, 2}


class TestAvatars:
    @pytest.mark.parametrize("name,expected", [
        ("Morgan Hale", "MH"),
        ("Cher", "C"),
        ("Mary Ann de Vries", "MV"),
        ("", "?"),
        (None, "?"),
    ])
    def test_initials(self, name, expected):
        assert initials(name) == expected

    def test_tier_colours(self):
        assert tier_colour(None) == "primary"
        assert tier_colour(1) == "#2563eb"
        assert tier_colour(3) == "#059669"
        assert tier_colour(5) == "#6b7280"

    def test_tier_display(self):
        assert tier_display(None) == "Admin"
        assert tier_display(2) == "Tier 2 - Senior"
        assert tier_display(9) == "Tier 9"


class TestZoom:
    def test_zoom_in_and_out(self):
        assert zoom(1.0, +1) == 1.1
        assert zoom(1.0, -1) == 0.9

    def test_zoom_is_clamped(self):
        assert zoom(2.0, +1) == 2.0
        assert zoom(0.3, -1) == 0.3

    def test_zoom_label(self):
        assert zoom_label(0.9) == "90%"


class TestRenderTree:
    def test_fully_expanded_by_default(self):
        lines = render_tree(_tree())
        assert len(lines) == 4
        assert lines[0].startswith("• Morgan Hale [MH]")
        assert lines[2].startswith("    • Tom Reed")

    def test_collapsed_node_hides_reports(self):
        lines = render_tree(_tree(), expanded={1})
        assert len(lines) == 3
        assert lines[1].strip().startswith("▶ Priya Shah")

    def test_highlight_marks_match(self):
        lines = render_tree(_tree(), highlight=3)
        assert lines[3].endswith("◀")


class TestDirectorySearch:
    def test_matches_role(self):
        employees = [
            Employee(id=1, full_name="Morgan Hale", role_name="Director"),
            Employee(id=2, full_name="Priya Shah", role_name="Nurse"),
        ]
        assert [e.id for e in search_employees(employees, "nur")] == [2]
        assert len(search_employees(employees, "")) == 2


# ═════════════════════════════════════════════════════════════════════
# 2. SERVICE
# ═════════════════════════════════════════════════════════════════════


class TestUserService:
    async def test_org_chart(self, api, fake_api):
        fake_api.reply("GET", "/users/org-chart", CHART)

        chart = await UserService.org_chart(api)

        assert chart.total_employees == 4
        assert chart.tree[0].children[0].children[0].full_name == "Tom Reed"

    async def test_transfer_requires_manager_or_orphan(self, api, fake_api):
        with pytest.raises(ValidationException):
            await UserService.transfer(api, 4, TransferRequest())
        assert fake_api.requests == []

    async def test_transfer_to_manager(self, api, fake_api):
        fake_api.reply("POST", "/users/4/transfer", {"message": "Transferred"})

        await UserService.transfer(api, 4, TransferRequest(new_manager_id=3))

        assert fake_api.last.json == {"new_manager_id": 3}

    async def test_orphan_transfer(self, api, fake_api):
        fake_api.reply("POST", "/users/4/transfer", {"message": "Transferred"})

        await UserService.transfer(api, 4, TransferRequest(new_manager_id=3, orphan=True))

        assert fake_api.last.json == {"orphan": True}

    async def test_assign_manager_can_clear(self, api, fake_api):
        fake_api.reply("PUT", "/users/4/assign-manager", {"message": "Updated"})

        await UserService.assign_manager(api, 4, None)

        assert fake_api.last.json == {"manager_id": None}

    async def test_leave_balance(self, api, fake_api):
        fake_api.reply("GET", "/leave/balance/4", {"balance": {"entitlement": 28, "used": 10, "remaining": 18}})

        balance = await UserService.leave_balance(api, 4)

        assert balance.remaining == 18
