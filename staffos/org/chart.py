"""Org-chart helpers — tree search, avatars, zoom and text rendering."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from staffos.org.schemas import Employee, OrgNode

MIN_ZOOM = 0.3
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1

TIER_NAMES = {
    1: "Tier 1 - Executive",
    2: "Tier 2 - Senior",
    3: "Tier 3 - Mid-Level",
    4: "Tier 4 - Junior",
    5: "Tier 5 - Entry Level",
}

# Avatar colour by tier; Admin (no tier) uses the theme colour
TIER_COLOURS = [
    (1, "#2563eb"),
    (2, "#0891b2"),
    (3, "#059669"),
    (4, "#d97706"),
]
ADMIN_COLOUR = "primary"
DEFAULT_TIER_COLOUR = "#6b7280"


def _matches(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def find_node(tree: Sequence[OrgNode], term: str) -> Optional[int]:
    """Depth-first search on name, email or employee number.

    Returns the id of the first match, or None for a blank term / no match.
    """
    if not term.strip():
        return None
    needle = term.lower()

    def _walk(nodes: Sequence[OrgNode]) -> Optional[int]:
        for node in nodes:
            if (
                _matches(node.full_name, needle)
                or _matches(node.email, needle)
                or _matches(node.employee_number, needle)
            ):
                return node.id
            found = _walk(node.children)
            if found is not None:
                return found
        return None

    return _walk(tree)


def iter_nodes(tree: Iterable[OrgNode]) -> Iterator[OrgNode]:
    for node in tree:
        yield node
        yield from iter_nodes(node.children)


def all_node_ids(tree: Sequence[OrgNode]) -> set[int]:
    """Ids for "expand all"; also the initial expanded set."""
    return {node.id for node in iter_nodes(tree)}


def toggle(expanded: set[int], node_id: int) -> set[int]:
    updated = set(expanded)
    updated.symmetric_difference_update({node_id})
    return updated


def initials(name: Optional[str]) -> str:
    if not name or not name.strip():
        return "?"
    parts = name.split()
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def tier_colour(tier: Optional[int]) -> str:
    if tier is None:
        return ADMIN_COLOUR
    for limit, colour in TIER_COLOURS:
        if tier <= limit:
            return colour
    return DEFAULT_TIER_COLOUR


def tier_display(tier: Optional[int]) -> str:
    if tier is None:
        return "Admin"
    return TIER_NAMES.get(tier, f"Tier {tier}")


def zoom(scale: float, direction: int) -> float:
    """Step the zoom level in or out (``direction`` > 0 zooms in)."""
    step = ZOOM_STEP if direction > 0 else -ZOOM_STEP
    return max(MIN_ZOOM, min(MAX_ZOOM, round(scale + step, 1)))


def zoom_label(scale: float) -> str:
    return f"{round(scale * 100)}%"


def search_employees(employees: Iterable[Employee], term: str) -> list[Employee]:
    """Directory filter on name, email or role (case-insensitive substring)."""
    needle = term.lower()
    if not needle:
        return list(employees)
    return [
        e for e in employees
        if _matches(e.full_name, needle)
        or _matches(e.email, needle)
        or _matches(e.role_name, needle)
    ]


def render_tree(
    tree: Sequence[OrgNode],
    expanded: Optional[set[int]] = None,
    highlight: Optional[int] = None,
) -> list[str]:
    """Indented text lines for the CLI; collapsed nodes hide their reports."""
    lines: list[str] = []

    def _render(nodes: Sequence[OrgNode], depth: int) -> None:
        for node in nodes:
            marker = "▶" if node.children and expanded is not None and node.id not in expanded else "•"
            role = f" — {node.role_name}" if node.role_name else ""
            star = " ◀" if node.id == highlight else ""
            lines.append(f"{'  ' * depth}{marker} {node.full_name} [{initials(node.full_name)}]"
                         f" ({tier_display(node.tier)}){role}{star}")
            if expanded is None or node.id in expanded:
                _render(node.children, depth + 1)

    _render(tree, 0)
    return lines
